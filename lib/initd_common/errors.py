"""Exception hierarchy for the initialization flow.

Fatal environment errors (unsupported shell, old shell, run standalone) and
execution-layer errors (permission changes, failing files) all derive from
InitError so callers can catch the whole family in one place.
"""

from __future__ import annotations

from pathlib import Path


class InitError(Exception):
    """Base class for every error raised while initializing."""


class UnsupportedShellError(InitError):
    """Neither of the supported shells could be detected."""

    def __init__(self, message: str = "[ EXIT ]: Unsupported shell!") -> None:
        super().__init__(message)


class ShellVersionError(InitError):
    """Bash was detected but its major version is below the minimum."""

    def __init__(self, version: str | None = None) -> None:
        self.version = version
        super().__init__(
            "[ EXIT ]: Either Zsh or Bash (version 4 or later) is required."
        )


class NotSourcedError(InitError):
    """The entry point was executed directly instead of being imported."""

    def __init__(self, message: str = "[ EXIT ]: Import me please!") -> None:
        super().__init__(message)


class PermissionChangeError(InitError):
    """An ownership or mode change failed on a target path."""

    def __init__(self, action: str, path: Path | str, cause: OSError) -> None:
        self.action = action
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"{action} failed on '{path}': {cause}")


class LoadError(InitError):
    """A configuration or module file failed while being loaded."""

    def __init__(self, path: Path | str, cause: BaseException) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to load '{path}': {cause}")
