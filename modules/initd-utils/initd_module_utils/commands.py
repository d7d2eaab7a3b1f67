"""Check that external commands are available."""

from __future__ import annotations

import logging
import shutil

logger = logging.getLogger(__name__)


def check_cmds(*cmds: str) -> bool:
    """Return True when every command is on PATH; log each one that is not."""
    missing = [cmd for cmd in cmds if shutil.which(cmd) is None]
    for cmd in missing:
        logger.error("[ ERROR ]: Command '%s' is required and unavailable.", cmd)
    return not missing
