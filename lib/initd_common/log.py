"""Debug logging for the initialization flow.

The package logs through ``logging.getLogger(__name__)`` everywhere and
installs no handlers unless DEBUG=1 asks for tracing on stderr.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

from .settings import InitSettings

PACKAGE_LOGGER = "initd_common"
_HANDLER_NAME = "initd-debug"


def configure_debug_logging(environ: Mapping[str, str]) -> bool:
    """Attach a stderr DEBUG handler when DEBUG=1. Returns True if tracing is on."""
    if not InitSettings.from_environ(environ).debug:
        return False
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("[ DEBUG ]: %(message)s"))
        logger.addHandler(handler)
    return True


def sourced_hint(path: str, sourced: str, env_file: str) -> str:
    """Message explaining why a file was not loaded again."""
    return (
        f"Returning early from '{path}' because:\n\n  SOURCED={sourced}\n\n"
        "[ HINT  ]: Do 'unset SOURCED' or 'SOURCED= ', or otherwise set "
        f"'SOURCED' to an empty value in '{env_file}' to run again."
    )
