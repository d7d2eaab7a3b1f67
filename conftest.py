"""Shared fixtures for the initd test suites."""

from __future__ import annotations

import os

import pytest

from initd_common.settings import PermissionPolicy


class FakeNormalizer:
    """Implements PermissionNormalizer and records every call."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, str, PermissionPolicy]] = []
        self._fail_on = fail_on or set()

    @property
    def name(self) -> str:
        return "fake"

    def chown(self, path: str | os.PathLike[str], policy: PermissionPolicy) -> bool:
        self.calls.append(("chown", os.fspath(path), policy))
        return policy.chown_enabled

    def chmod(self, path: str | os.PathLike[str], policy: PermissionPolicy) -> bool:
        self.calls.append(("chmod", os.fspath(path), policy))
        return policy.chmod_enabled

    def normalize(
        self, path: str | os.PathLike[str], policy: PermissionPolicy
    ) -> None:
        from initd_common.errors import PermissionChangeError

        if os.path.basename(os.fspath(path)) in self._fail_on:
            raise PermissionChangeError(
                "chown", path, PermissionError(1, "Operation not permitted")
            )
        self.chown(path, policy)
        self.chmod(path, policy)

    def targets(self) -> list[str]:
        """Distinct paths in call order."""
        seen: list[str] = []
        for _, path, _ in self.calls:
            if path not in seen:
                seen.append(path)
        return seen


@pytest.fixture
def fake_normalizer() -> FakeNormalizer:
    return FakeNormalizer()


@pytest.fixture
def bash_env() -> dict[str, str]:
    """Isolated environment mapping that looks like Bash 5."""
    return {"BASH_VERSION": "5.2.15(1)-release"}


@pytest.fixture
def make_normalizer():
    """Factory for a FakeNormalizer that fails on the given file names."""

    def _make(*fail_on: str) -> FakeNormalizer:
        return FakeNormalizer(set(fail_on))

    return _make
