"""Resolve the entry script location and the project/module directories."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from .models import ResolvedPaths
from .settings import MODULE_DIR_NAME


def resolve_entry(entry: str | os.PathLike[str]) -> tuple[Path, Path]:
    """Return (entry_script, entry_dir) as absolute, symlink-resolved paths.

    Only the containing directory is resolved; the script keeps the name it
    was invoked with so a symlinked entry still reports its own file name.
    """
    raw = Path(entry)
    entry_dir = raw.absolute().parent.resolve()
    return entry_dir / raw.name, entry_dir


def resolve_paths(
    entry: str | os.PathLike[str], environ: Mapping[str, str]
) -> ResolvedPaths:
    """Resolve all paths for one run, honouring PROJECT_ROOT and INIT_D.

    Pre-set overrides are used verbatim; defaults apply only when the
    variable is unset or empty.
    """
    entry_script, entry_dir = resolve_entry(entry)
    project_root = environ.get("PROJECT_ROOT") or str(entry_dir)
    module_dir = environ.get("INIT_D") or str(entry_dir / MODULE_DIR_NAME)
    return ResolvedPaths(
        entry_script=entry_script,
        entry_dir=entry_dir,
        project_root=Path(project_root),
        module_dir=Path(module_dir),
    )
