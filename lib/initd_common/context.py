"""InitContext — per-run state owned by the initialization flow.

Holds the detected shell, the resolved paths, the sourced-file registry and
the namespace that module files are executed into. Nothing is process-global,
so tests create one context per case.
"""

from __future__ import annotations

import builtins
import logging
import os
from collections.abc import Callable, MutableMapping
from pathlib import Path
from typing import Any

from .models import LoadFailure, LoadReport, ResolvedPaths
from .registry import SourcedRegistry
from .shell import ShellContext, detect_shell, probe_shell_version

logger = logging.getLogger(__name__)


class InitContext:
    """Shell context, paths, registry and shared namespace for one run."""

    def __init__(
        self,
        environ: MutableMapping[str, str] | None = None,
        namespace: dict[str, Any] | None = None,
    ) -> None:
        self.environ: MutableMapping[str, str] = (
            os.environ if environ is None else environ
        )
        self.registry = SourcedRegistry.from_env(self.environ.get("SOURCED"))
        self.namespace: dict[str, Any] = namespace if namespace is not None else {}
        self.namespace.setdefault("__name__", "initd")
        self.namespace.setdefault("__builtins__", builtins)
        self.namespace["init_context"] = self
        self.reports: list[LoadReport] = []
        self.startup_failures: list[LoadFailure] = []
        self._shell: ShellContext | None = None
        self._paths: ResolvedPaths | None = None

    # -- Shell -----------------------------------------------------------------

    @property
    def shell(self) -> ShellContext | None:
        return self._shell

    def ensure_shell(
        self, probe: Callable[[str, ShellContext], str | None] = probe_shell_version
    ) -> ShellContext:
        """Detect the shell once; later calls return the stored value."""
        if self._shell is None:
            self._shell = detect_shell(self.environ, probe)
            self.environ["SHELLCTX"] = self._shell.value
        return self._shell

    # -- Paths -----------------------------------------------------------------

    @property
    def paths(self) -> ResolvedPaths | None:
        return self._paths

    def set_paths(self, paths: ResolvedPaths) -> None:
        if self._paths is not None and self._paths != paths:
            raise RuntimeError("Paths are already resolved for this context")
        self._paths = paths
        # A pre-set PROJECT_ROOT is kept byte for byte; only the default is exported.
        if not self.environ.get("PROJECT_ROOT"):
            self.environ["PROJECT_ROOT"] = str(paths.project_root)

    # -- Sourced registry ------------------------------------------------------

    def reload_registry(self) -> None:
        """Re-read SOURCED, e.g. after a config file cleared it."""
        self.registry = SourcedRegistry.from_env(self.environ.get("SOURCED"))

    def has_loaded(self, path: str | os.PathLike[str]) -> bool:
        return self.registry.has_loaded(path)

    def mark_loaded(self, path: str | os.PathLike[str]) -> None:
        self.registry.mark_loaded(path)
        self.export_sourced()

    def mark_and_check(self, path: str | os.PathLike[str]) -> bool:
        seen = self.registry.mark_and_check(path)
        if not seen:
            self.export_sourced()
        return seen

    def export_sourced(self) -> None:
        self.environ["SOURCED"] = self.registry.to_env()

    # -- Loading ---------------------------------------------------------------

    def source(self, path: str | os.PathLike[str]) -> LoadReport:
        """Load one more file into this context (used from module files)."""
        from .init import load_single

        return load_single(self, Path(path))
