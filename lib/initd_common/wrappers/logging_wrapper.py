"""LoggingWrapper — composable logging for permission normalizers.

Wraps any PermissionNormalizer, logging each ownership/mode change as an
ACTION/TARGET pair before delegating to the inner normalizer.
"""

from __future__ import annotations

import logging
import os

from ..protocol import PermissionNormalizer
from ..settings import PermissionPolicy


class LoggingWrapper:
    """Logs changes passing through a permission normalizer.

    Disabled operations (policy flag off) are logged once at debug level as
    skipped; enabled ones log the action and target before running.
    """

    def __init__(
        self, inner: PermissionNormalizer, logger_name: str = __name__
    ) -> None:
        self._inner = inner
        self._logger = logging.getLogger(logger_name)

    @property
    def name(self) -> str:
        return self._inner.name

    def _action(self, action: str, path: str | os.PathLike[str]) -> None:
        self._logger.debug("- ACTION: '%s'", action)
        self._logger.debug("  TARGET: '%s'", os.fspath(path))

    def chown(self, path: str | os.PathLike[str], policy: PermissionPolicy) -> bool:
        if policy.chown_enabled:
            self._action(f"chown {policy.owner_spec}", path)
        else:
            self._logger.debug("chown disabled, skipping %s", os.fspath(path))
        return self._inner.chown(path, policy)

    def chmod(self, path: str | os.PathLike[str], policy: PermissionPolicy) -> bool:
        if policy.chmod_enabled:
            self._action(f"chmod {policy.mode_spec}", path)
            self._action("chmod +X", path)
        else:
            self._logger.debug("chmod disabled, skipping %s", os.fspath(path))
        return self._inner.chmod(path, policy)

    def normalize(
        self, path: str | os.PathLike[str], policy: PermissionPolicy
    ) -> None:
        self.chown(path, policy)
        self.chmod(path, policy)
