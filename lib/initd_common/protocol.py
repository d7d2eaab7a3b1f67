"""PermissionNormalizer protocol — the interface for ownership/mode changes.

The loader and the initialization flow only talk to this protocol, so the
POSIX implementation can be wrapped (logging) or replaced by a fake in tests.
"""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

from .settings import PermissionPolicy


@runtime_checkable
class PermissionNormalizer(Protocol):
    """Applies a PermissionPolicy to a path."""

    @property
    def name(self) -> str:
        """Implementation identifier, e.g. 'posix'."""
        ...

    def chown(self, path: str | os.PathLike[str], policy: PermissionPolicy) -> bool:
        """Change ownership. Returns False when disabled by the policy."""
        ...

    def chmod(self, path: str | os.PathLike[str], policy: PermissionPolicy) -> bool:
        """Change mode, preserving execute for directories/executables."""
        ...

    def normalize(
        self, path: str | os.PathLike[str], policy: PermissionPolicy
    ) -> None:
        """chown, then chmod. Failures raise PermissionChangeError."""
        ...
