"""SequentialLoader — loads discovered files one at a time, in order.

Configuration files are parsed with python-dotenv and merged into the
context environment; module files are executed into the context namespace.
Each config file gets its permissions normalized right after it loads.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, MutableMapping
from pathlib import Path

from dotenv import dotenv_values

from .context import InitContext
from .errors import InitError, LoadError
from .log import sourced_hint
from .models import LoadFailure, LoadKind, LoadMode, LoadReport, is_example_path
from .protocol import PermissionNormalizer
from .settings import LOCAL_ENV_NAME, PermissionPolicy

logger = logging.getLogger(__name__)


def load_env_file(path: Path, environ: MutableMapping[str, str]) -> int:
    """Merge the assignments of a dotenv file into environ. Returns the count."""
    values = dotenv_values(path)
    count = 0
    for key, value in values.items():
        if value is None:
            continue
        environ[key] = value
        count += 1
    return count


def exec_module_file(path: Path, namespace: dict) -> None:
    """Execute a module file so its definitions land in namespace."""
    source = path.read_text(encoding="utf-8")
    code = compile(source, str(path), "exec")
    missing = object()
    previous = namespace.get("__file__", missing)
    namespace["__file__"] = str(path)
    try:
        exec(code, namespace)
    finally:
        if previous is missing:
            namespace.pop("__file__", None)
        else:
            namespace["__file__"] = previous


def _is_empty(path: Path) -> bool:
    """True for a missing or zero-size file."""
    try:
        return os.path.getsize(path) == 0
    except OSError:
        return True


class SequentialLoader:
    """Loads files into an InitContext in the order given."""

    def __init__(
        self, context: InitContext, normalizer: PermissionNormalizer | None = None
    ) -> None:
        self._context = context
        self._normalizer = normalizer

    def load_file(self, path: Path, kind: LoadKind) -> None:
        """Load one file without any guard or permission handling."""
        if kind is LoadKind.CONFIG:
            count = load_env_file(path, self._context.environ)
            logger.debug("loader: %s set %d variable(s)", path, count)
        else:
            exec_module_file(path, self._context.namespace)

    def apply_permissions(self, path: Path) -> None:
        if self._normalizer is None:
            return
        # Read now: a config file loaded earlier may have changed the policy.
        policy = PermissionPolicy.from_environ(self._context.environ)
        self._normalizer.normalize(path, policy)

    def load_all(
        self,
        files: Iterable[Path | str],
        kind: LoadKind,
        mode: LoadMode = LoadMode.STRICT,
        base_dir: Path | None = None,
    ) -> LoadReport:
        """Load files in order.

        STRICT raises on the first failure (LoadError for a failing file,
        PermissionChangeError for a failed normalization); BEST_EFFORT logs
        a warning, records a LoadFailure and moves on.
        """
        report = LoadReport(kind=kind)
        self._context.reports.append(report)

        for raw in files:
            path = Path(raw)
            if not str(raw) or _is_empty(path):
                report.skipped_empty.append(path)
                continue
            if is_example_path(path, base_dir):
                logger.debug("loader: skipping example file %s", path)
                report.skipped_example.append(path)
                continue
            if self._context.mark_and_check(path):
                paths = self._context.paths
                env_dir = paths.entry_dir if paths is not None else path.parent
                logger.debug(
                    "%s",
                    sourced_hint(
                        str(path),
                        self._context.registry.to_env(),
                        str(env_dir / LOCAL_ENV_NAME),
                    ),
                )
                report.skipped_sourced.append(path)
                continue

            logger.debug("- ACTION: 'source'")
            logger.debug("  TARGET: '%s'", path)
            try:
                self.load_file(path, kind)
            except Exception as exc:
                if mode is LoadMode.STRICT:
                    raise LoadError(path, exc) from exc
                logger.warning("loader: %s failed to load: %s", path, exc)
                report.failures.append(
                    LoadFailure(path=path, kind=kind, stage="load", message=str(exc))
                )
                continue
            report.loaded.append(path)

            if kind is LoadKind.CONFIG:
                try:
                    self.apply_permissions(path)
                except (InitError, ValueError) as exc:
                    if mode is LoadMode.STRICT:
                        raise
                    logger.warning("loader: permissions failed for %s: %s", path, exc)
                    report.failures.append(
                        LoadFailure(
                            path=path, kind=kind, stage="permissions", message=str(exc)
                        )
                    )

        return report
