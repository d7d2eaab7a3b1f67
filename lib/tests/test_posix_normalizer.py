"""Tests for PosixNormalizer — ownership and mode changes on the host."""

from __future__ import annotations

import os
import stat

import pytest

from initd_common.backends.posix import (
    PosixNormalizer,
    add_execute_bits,
    current_umask,
    parse_owner,
)
from initd_common.errors import PermissionChangeError
from initd_common.protocol import PermissionNormalizer
from initd_common.settings import PermissionPolicy


def _mode(path) -> int:
    return stat.S_IMODE(os.stat(path).st_mode)


def _policy(**overrides) -> PermissionPolicy:
    values = {"owner_spec": f"{os.getuid()}:{os.getgid()}", "mode_spec": "600"}
    values.update(overrides)
    return PermissionPolicy(**values)


@pytest.fixture
def normalizer():
    return PosixNormalizer()


# ---------------------------------------------------------------------------
# Protocol conformance
# ---------------------------------------------------------------------------


class TestProtocolConformance:
    def test_isinstance_check(self, normalizer):
        assert isinstance(normalizer, PermissionNormalizer)

    def test_name(self, normalizer):
        assert normalizer.name == "posix"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestParseOwner:
    def test_numeric(self):
        assert parse_owner("1000:1001") == (1000, 1001)

    def test_names(self):
        assert parse_owner("root:root") == (0, 0)

    def test_missing_parts_unchanged(self):
        assert parse_owner("1000") == (1000, -1)
        assert parse_owner(":50") == (-1, 50)

    def test_unknown_user(self):
        with pytest.raises(ValueError, match="Unknown user"):
            parse_owner("no-such-user-xyz:0")


class TestAddExecuteBits:
    def test_plain_file_not_granted(self):
        assert add_execute_bits(0o600, False, 0o022) == 0o600

    def test_directory_granted(self):
        assert add_execute_bits(0o600, True, 0o022) == 0o711

    def test_executable_mode_spreads_execute(self):
        assert add_execute_bits(0o700, False, 0o022) == 0o755

    def test_umask_limits_bits(self):
        assert add_execute_bits(0o600, True, 0o077) == 0o700


# ---------------------------------------------------------------------------
# chmod
# ---------------------------------------------------------------------------


class TestChmod:
    def test_file_mode_applied(self, normalizer, tmp_path):
        f = tmp_path / "a.env"
        f.write_text("A=1\n")
        f.chmod(0o644)
        assert normalizer.chmod(f, _policy()) is True
        assert _mode(f) == 0o600

    def test_custom_mode(self, normalizer, tmp_path):
        f = tmp_path / "a.env"
        f.write_text("A=1\n")
        normalizer.chmod(f, _policy(mode_spec="640"))
        assert _mode(f) == 0o640

    def test_directory_keeps_traversal(self, normalizer, tmp_path):
        d = tmp_path / "init.d"
        d.mkdir()
        normalizer.chmod(d, _policy())
        expected = 0o600 | (0o111 & ~current_umask())
        assert _mode(d) == expected

    def test_executable_file_loses_execute(self, normalizer, tmp_path):
        f = tmp_path / "run.sh"
        f.write_text("#!/bin/sh\n")
        f.chmod(0o755)
        normalizer.chmod(f, _policy())
        assert _mode(f) == 0o600

    def test_plain_file_not_made_executable(self, normalizer, tmp_path):
        f = tmp_path / "a.env"
        f.write_text("A=1\n")
        f.chmod(0o644)
        normalizer.chmod(f, _policy(mode_spec="640"))
        assert _mode(f) & 0o111 == 0

    def test_disabled_leaves_mode(self, normalizer, tmp_path):
        f = tmp_path / "a.env"
        f.write_text("A=1\n")
        f.chmod(0o644)
        assert normalizer.chmod(f, _policy(chmod_enabled=False)) is False
        assert _mode(f) == 0o644

    def test_missing_path_raises(self, normalizer, tmp_path):
        with pytest.raises(PermissionChangeError, match="chmod 600"):
            normalizer.chmod(tmp_path / "missing", _policy())


# ---------------------------------------------------------------------------
# chown
# ---------------------------------------------------------------------------


class TestChown:
    def test_chown_to_self(self, normalizer, tmp_path):
        f = tmp_path / "a.env"
        f.write_text("A=1\n")
        assert normalizer.chown(f, _policy()) is True
        st = os.stat(f)
        assert (st.st_uid, st.st_gid) == (os.getuid(), os.getgid())

    def test_disabled_does_not_call_chown(self, normalizer, tmp_path, monkeypatch):
        def fail(*args):
            raise AssertionError("chown must not run")

        monkeypatch.setattr("initd_common.backends.posix.os.chown", fail)
        assert normalizer.chown(tmp_path, _policy(chown_enabled=False)) is False

    def test_failure_propagates(self, normalizer, tmp_path, monkeypatch):
        def deny(*args):
            raise PermissionError(1, "Operation not permitted")

        monkeypatch.setattr("initd_common.backends.posix.os.chown", deny)
        with pytest.raises(PermissionChangeError) as info:
            normalizer.chown(tmp_path, _policy(owner_spec="0:0"))
        assert isinstance(info.value.cause, PermissionError)
        assert info.value.path == tmp_path


class TestNormalize:
    def test_chmod_skipped_when_chown_fails(self, normalizer, tmp_path, monkeypatch):
        f = tmp_path / "a.env"
        f.write_text("A=1\n")
        f.chmod(0o644)

        def deny(*args):
            raise PermissionError(1, "Operation not permitted")

        monkeypatch.setattr("initd_common.backends.posix.os.chown", deny)
        with pytest.raises(PermissionChangeError):
            normalizer.normalize(f, _policy())
        assert _mode(f) == 0o644

    def test_both_disabled_is_noop(self, normalizer, tmp_path):
        f = tmp_path / "a.env"
        f.write_text("A=1\n")
        f.chmod(0o644)
        normalizer.normalize(f, _policy(chown_enabled=False, chmod_enabled=False))
        assert _mode(f) == 0o644
