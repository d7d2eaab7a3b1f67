"""SourcedRegistry — ordered record of files already loaded in a context.

Serialized to the SOURCED variable as a colon-separated list so nested
initializations (and child processes) inherit it. Clearing SOURCED is the
supported way to force a reload.

A path containing the separator is tracked for the lifetime of the registry
but cannot survive a round trip through SOURCED; a warning is logged when one
is marked.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

logger = logging.getLogger(__name__)

SEPARATOR = ":"


def _key(path: str | os.PathLike[str]) -> str:
    return os.fspath(path)


class SourcedRegistry:
    """Append-only ordered set of absolute file paths."""

    def __init__(self, paths: list[str] | None = None) -> None:
        self._paths: dict[str, None] = {}
        for path in paths or []:
            if path:
                self._paths[path] = None

    @classmethod
    def from_env(cls, value: str | None) -> SourcedRegistry:
        """Parse a SOURCED value. Empty segments are ignored."""
        if not value:
            return cls()
        return cls(value.split(SEPARATOR))

    def to_env(self) -> str:
        return SEPARATOR.join(self._paths)

    def has_loaded(self, path: str | os.PathLike[str]) -> bool:
        """Exact membership; '/a/b' never matches '/a/bc' or '/x/a/b'."""
        return _key(path) in self._paths

    def mark_loaded(self, path: str | os.PathLike[str]) -> None:
        key = _key(path)
        if SEPARATOR in key and key not in self._paths:
            logger.warning(
                "registry: %r contains %r and will not be recognized after SOURCED is re-read",
                key,
                SEPARATOR,
            )
        self._paths.setdefault(key, None)

    def mark_and_check(self, path: str | os.PathLike[str]) -> bool:
        """Return True if path was already seen; otherwise record it and return False."""
        if self.has_loaded(path):
            return True
        self.mark_loaded(path)
        return False

    def clear(self) -> None:
        self._paths.clear()

    def __contains__(self, path: object) -> bool:
        if isinstance(path, (str, os.PathLike)):
            return self.has_loaded(path)
        return False

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._paths))

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"SourcedRegistry({list(self._paths)!r})"
