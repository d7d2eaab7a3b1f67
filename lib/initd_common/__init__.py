"""Deterministic discovery and loading of environment and module files.

Environment files (``*.env``) load first, then ``init.d/*.py`` modules:
- shell: ShellContext detection (Bash 4+ or Zsh)
- paths: entry/project/module directory resolution
- registry: SourcedRegistry, the guard against loading a file twice
- discovery: sorted, depth-bounded file scans
- backends/wrappers: PermissionNormalizer implementations
- loader: SequentialLoader, config pass then module pass
- init: initialize(), the full flow
"""

from .backends.posix import PosixNormalizer
from .context import InitContext
from .discovery import discover
from .errors import (
    InitError,
    LoadError,
    NotSourcedError,
    PermissionChangeError,
    ShellVersionError,
    UnsupportedShellError,
)
from .init import initialize, load_single
from .loader import SequentialLoader, load_env_file
from .models import (
    DiscoveredFileSet,
    LoadFailure,
    LoadKind,
    LoadMode,
    LoadReport,
    ResolvedPaths,
    is_example_path,
)
from .paths import resolve_paths
from .protocol import PermissionNormalizer
from .registry import SourcedRegistry
from .settings import InitSettings, PermissionPolicy
from .shell import ShellContext, detect_shell, ensure_sourced
from .wrappers.logging_wrapper import LoggingWrapper

__all__ = [
    "DiscoveredFileSet",
    "InitContext",
    "InitError",
    "InitSettings",
    "LoadError",
    "LoadFailure",
    "LoadKind",
    "LoadMode",
    "LoadReport",
    "LoggingWrapper",
    "NotSourcedError",
    "PermissionChangeError",
    "PermissionNormalizer",
    "PermissionPolicy",
    "PosixNormalizer",
    "ResolvedPaths",
    "SequentialLoader",
    "ShellContext",
    "ShellVersionError",
    "SourcedRegistry",
    "UnsupportedShellError",
    "detect_shell",
    "discover",
    "ensure_sourced",
    "initialize",
    "is_example_path",
    "load_env_file",
    "load_single",
    "resolve_paths",
]
