"""Tests for the file discoverer."""

from __future__ import annotations

import os

import pytest

from initd_common.discovery import discover
from initd_common.settings import DEFAULT_ENV_EXCLUDE


def _touch(path, content="x"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


class TestOrderingAndPattern:
    def test_sorted_lexically(self, tmp_path):
        for name in ["10_b.py", "00_a.py", "05_example.py"]:
            _touch(tmp_path / name)
        result = discover(tmp_path, max_depth=1, name_pattern="*.py")
        assert [p.name for p in result.files] == ["00_a.py", "05_example.py", "10_b.py"]

    def test_example_files_are_discovered_but_not_eligible(self, tmp_path):
        for name in ["10_b.py", "00_a.py", "05_example.py"]:
            _touch(tmp_path / name)
        result = discover(tmp_path, max_depth=1, name_pattern="*.py")
        assert [p.name for p in result.eligible()] == ["00_a.py", "10_b.py"]

    def test_name_pattern_filters(self, tmp_path):
        _touch(tmp_path / "a.env")
        _touch(tmp_path / "b.sh")
        _touch(tmp_path / ".env")
        result = discover(tmp_path, max_depth=1, name_pattern="*.env")
        assert [p.name for p in result.files] == [".env", "a.env"]

    def test_results_are_absolute_when_base_is(self, tmp_path):
        _touch(tmp_path / "a.env")
        result = discover(tmp_path, max_depth=1, name_pattern="*.env")
        assert all(p.is_absolute() for p in result.files)


class TestDepth:
    @pytest.fixture
    def tree(self, tmp_path):
        _touch(tmp_path / "top.env")
        _touch(tmp_path / "one" / "mid.env")
        _touch(tmp_path / "one" / "two" / "deep.env")
        return tmp_path

    def test_max_depth_two(self, tree):
        names = [p.name for p in discover(tree, max_depth=2, name_pattern="*.env").files]
        assert sorted(names) == ["mid.env", "top.env"]

    def test_max_depth_one(self, tree):
        names = [p.name for p in discover(tree, max_depth=1, name_pattern="*.env").files]
        assert names == ["top.env"]

    def test_min_depth_two(self, tree):
        names = [
            p.name
            for p in discover(tree, max_depth=3, min_depth=2, name_pattern="*.env").files
        ]
        assert sorted(names) == ["deep.env", "mid.env"]


class TestFiltering:
    def test_directories_are_not_files(self, tmp_path):
        (tmp_path / "dir.env").mkdir()
        assert discover(tmp_path, max_depth=1, name_pattern="*.env").files == ()

    def test_symlinks_are_skipped(self, tmp_path):
        real = _touch(tmp_path / "real.txt")
        os.symlink(real, tmp_path / "link.env")
        assert discover(tmp_path, max_depth=1, name_pattern="*.env").files == ()

    def test_env_directories_excluded(self, tmp_path):
        _touch(tmp_path / "00_a.env")
        _touch(tmp_path / ".venv" / "pyvenv.env")
        _touch(tmp_path / "myenv" / "x.env")
        _touch(tmp_path / "conf" / "10_b.env")
        result = discover(
            tmp_path,
            max_depth=2,
            name_pattern="*.env",
            exclude_path_pattern=DEFAULT_ENV_EXCLUDE,
        )
        assert [p.relative_to(tmp_path).as_posix() for p in result.files] == [
            "00_a.env",
            "conf/10_b.env",
        ]

    def test_exclusion_ignores_parents_of_base(self, tmp_path):
        base = tmp_path / "projectenv" / "app"
        _touch(base / "00_a.env")
        result = discover(
            base, max_depth=2, name_pattern="*.env", exclude_path_pattern=DEFAULT_ENV_EXCLUDE
        )
        assert [p.name for p in result.files] == ["00_a.env"]


class TestMissingBase:
    def test_missing_directory_is_empty(self, tmp_path):
        result = discover(tmp_path / "nope", max_depth=1, name_pattern="*.py")
        assert result.files == ()
        assert result.eligible() == []

    def test_file_as_base_is_empty(self, tmp_path):
        f = _touch(tmp_path / "file.py")
        assert discover(f, max_depth=1).files == ()

    @pytest.mark.skipif(os.geteuid() == 0, reason="root can read any directory")
    def test_unreadable_directory_is_empty(self, tmp_path):
        locked = tmp_path / "locked"
        _touch(locked / "a.py")
        locked.chmod(0o000)
        try:
            assert discover(locked, max_depth=1, name_pattern="*.py").files == ()
        finally:
            locked.chmod(0o755)
