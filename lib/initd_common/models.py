"""Data models shared by the initialization components.

- ResolvedPaths: absolute entry/project/module locations for one run
- DiscoveredFileSet: sorted candidate files found under a base directory
- LoadFailure / LoadReport: structured outcome of a loader pass
- LoadMode / LoadKind: loader parameters
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

EXAMPLE_MARKER = "example"


class LoadMode(str, Enum):
    """How the loader reacts to a failing file."""

    STRICT = "strict"
    BEST_EFFORT = "best_effort"


class LoadKind(str, Enum):
    """Which pass a file belongs to."""

    CONFIG = "config"
    MODULE = "module"


class ResolvedPaths(BaseModel):
    """Absolute locations resolved once per initialization."""

    model_config = ConfigDict(frozen=True)

    entry_script: Path = Field(..., description="Absolute path of the entry file")
    entry_dir: Path = Field(..., description="Directory containing the entry file")
    project_root: Path = Field(
        ..., description="Project root (PROJECT_ROOT or entry_dir)"
    )
    module_dir: Path = Field(..., description="Module directory (INIT_D or init.d)")


class DiscoveredFileSet(BaseModel):
    """Files matching a pattern under base_dir, sorted by path."""

    model_config = ConfigDict(frozen=True)

    base_dir: Path
    files: tuple[Path, ...] = ()

    def eligible(self) -> list[Path]:
        """Files that may be loaded (example-marked files removed)."""
        return [f for f in self.files if not is_example_path(f, self.base_dir)]


class LoadFailure(BaseModel):
    """A file that failed to load in best-effort mode."""

    path: Path
    kind: LoadKind
    stage: Literal["load", "permissions"] = Field(
        ..., description="Whether loading or the permission change failed"
    )
    message: str


class LoadReport(BaseModel):
    """Outcome of one loader pass."""

    kind: LoadKind
    loaded: list[Path] = Field(default_factory=list)
    skipped_example: list[Path] = Field(default_factory=list)
    skipped_empty: list[Path] = Field(default_factory=list)
    skipped_sourced: list[Path] = Field(default_factory=list)
    failures: list[LoadFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def is_example_path(path: Path | str, base_dir: Path | str | None = None) -> bool:
    """True when any path component below base_dir contains the example marker.

    Components above base_dir are not considered, so a project that lives
    under e.g. ``~/examples/`` still loads its own files.
    """
    p = Path(path)
    if base_dir is not None:
        try:
            p = p.relative_to(base_dir)
        except ValueError:
            pass
    return any(EXAMPLE_MARKER in part for part in p.parts)
