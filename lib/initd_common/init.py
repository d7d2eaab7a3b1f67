"""The initialization flow: detect, resolve, discover, then load in two passes.

Typical use from an entry file::

    from initd_common import initialize

    context = initialize(__file__)
    context.namespace["count_files"]("*.zip")
"""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Callable, MutableMapping
from pathlib import Path

from .backends.posix import PosixNormalizer
from .context import InitContext
from .discovery import discover
from .errors import InitError
from .loader import SequentialLoader, load_env_file
from .log import configure_debug_logging, sourced_hint
from .models import LoadFailure, LoadKind, LoadMode, LoadReport
from .paths import resolve_entry, resolve_paths
from .protocol import PermissionNormalizer
from .settings import (
    DEFAULT_ENV_EXCLUDE,
    LOCAL_ENV_NAME,
    InitSettings,
    PermissionPolicy,
)
from .shell import ShellContext, probe_shell_version
from .wrappers.logging_wrapper import LoggingWrapper

logger = logging.getLogger(__name__)

CONFIG_MAX_DEPTH = 2
MODULE_MAX_DEPTH = 1


def default_normalizer() -> PermissionNormalizer:
    return LoggingWrapper(PosixNormalizer())


def _normalize_module_dir(
    context: InitContext,
    normalizer: PermissionNormalizer,
    module_dir: Path,
    mode: LoadMode,
) -> None:
    policy = PermissionPolicy.from_environ(context.environ)
    try:
        normalizer.normalize(module_dir, policy)
    except (InitError, ValueError) as exc:
        if mode is LoadMode.STRICT:
            raise
        logger.warning("init: permissions failed for %s: %s", module_dir, exc)
        context.startup_failures.append(
            LoadFailure(
                path=module_dir,
                kind=LoadKind.MODULE,
                stage="permissions",
                message=str(exc),
            )
        )


def initialize(
    entry: str | os.PathLike[str],
    environ: MutableMapping[str, str] | None = None,
    mode: LoadMode = LoadMode.STRICT,
    normalizer: PermissionNormalizer | None = None,
    probe: Callable[[str, ShellContext], str | None] = probe_shell_version,
) -> InitContext:
    """Initialize from the entry file and return the populated context.

    Raises UnsupportedShellError / ShellVersionError before touching the
    filesystem. Calling it again for an already sourced entry (same SOURCED
    value) returns a context with nothing loaded.
    """
    context = InitContext(environ)
    env = context.environ
    configure_debug_logging(env)
    context.ensure_shell(probe)

    _, entry_dir = resolve_entry(entry)
    local_env = entry_dir / LOCAL_ENV_NAME
    if local_env.is_file() and local_env.stat().st_size > 0:
        load_env_file(local_env, env)
        configure_debug_logging(env)
        context.reload_registry()

    paths = resolve_paths(entry, env)
    context.set_paths(paths)

    if context.mark_and_check(paths.entry_script):
        logger.debug(
            "%s",
            sourced_hint(str(paths.entry_script), context.registry.to_env(), str(local_env)),
        )
        return context

    settings = InitSettings.from_environ(env)
    normalizer = normalizer if normalizer is not None else default_normalizer()

    if settings.create_init_d:
        paths.module_dir.mkdir(parents=True, exist_ok=True)
    if paths.module_dir.is_dir():
        _normalize_module_dir(context, normalizer, paths.module_dir, mode)

    config_files = discover(
        paths.entry_dir,
        max_depth=CONFIG_MAX_DEPTH,
        min_depth=1,
        name_pattern=settings.env_pattern,
        exclude_path_pattern=DEFAULT_ENV_EXCLUDE,
    )
    module_files = discover(
        paths.module_dir,
        max_depth=MODULE_MAX_DEPTH,
        min_depth=1,
        name_pattern=settings.module_pattern,
    )
    logger.debug(
        "init: %d config file(s), %d module file(s)",
        len(config_files.files),
        len(module_files.files),
    )

    loader = SequentialLoader(context, normalizer)
    loader.load_all(
        config_files.files, LoadKind.CONFIG, mode=mode, base_dir=config_files.base_dir
    )
    loader.load_all(
        module_files.files, LoadKind.MODULE, mode=mode, base_dir=module_files.base_dir
    )

    context.export_sourced()
    return context


def load_single(
    context: InitContext,
    path: Path,
    mode: LoadMode = LoadMode.STRICT,
    normalizer: PermissionNormalizer | None = None,
) -> LoadReport:
    """Load one file into an existing context, guarded by its registry."""
    settings = InitSettings.from_environ(context.environ)
    path = path.absolute()
    kind = (
        LoadKind.CONFIG
        if fnmatch.fnmatchcase(path.name, settings.env_pattern)
        else LoadKind.MODULE
    )
    normalizer = normalizer if normalizer is not None else default_normalizer()
    loader = SequentialLoader(context, normalizer)
    return loader.load_all([path], kind, mode=mode)
