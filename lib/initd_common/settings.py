"""Environment-driven settings for the initialization flow.

Every value is read from an environment mapping at the moment it is needed,
so a configuration file loaded earlier in the run can change the behaviour
of later steps (e.g. ``DISABLE_INIT_CHMOD=1`` inside a ``.env`` file).
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

DEFAULT_CHMOD_MODE = "600"
DEFAULT_ENV_PATTERN = "*.env"
DEFAULT_MODULE_PATTERN = "*.py"
# Paths below directories ending in "env" (.venv, myenv, ...) are never
# treated as configuration files.
DEFAULT_ENV_EXCLUDE = "*/*env/*"
MODULE_DIR_NAME = "init.d"
LOCAL_ENV_NAME = ".env"


def is_enabled(environ: Mapping[str, str], name: str) -> bool:
    """A flag is on only when it is exactly ``"1"``."""
    return environ.get(name, "") == "1"


def default_owner() -> str:
    return f"{os.getuid()}:{os.getgid()}"


class PermissionPolicy(BaseModel):
    """Ownership and mode applied to config files and the module directory."""

    owner_spec: str = Field(..., description="Owner as 'user:group' or 'uid:gid'")
    mode_spec: str = Field(default=DEFAULT_CHMOD_MODE, description="Octal mode")
    chown_enabled: bool = True
    chmod_enabled: bool = True

    @property
    def mode(self) -> int:
        """Numeric mode parsed from mode_spec. Raises ValueError if not octal."""
        return int(self.mode_spec, 8)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> PermissionPolicy:
        return cls(
            owner_spec=environ.get("CHOWN_AS") or default_owner(),
            mode_spec=environ.get("CHMOD_MODE") or DEFAULT_CHMOD_MODE,
            chown_enabled=not is_enabled(environ, "DISABLE_INIT_CHOWN"),
            chmod_enabled=not is_enabled(environ, "DISABLE_INIT_CHMOD"),
        )


class InitSettings(BaseModel):
    """Non-permission knobs of the initialization flow."""

    debug: bool = False
    create_init_d: bool = False
    env_pattern: str = DEFAULT_ENV_PATTERN
    module_pattern: str = DEFAULT_MODULE_PATTERN

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> InitSettings:
        return cls(
            debug=is_enabled(environ, "DEBUG"),
            create_init_d=is_enabled(environ, "CREATE_INIT_D"),
            env_pattern=environ.get("INIT_ENV_PATTERN") or DEFAULT_ENV_PATTERN,
            module_pattern=environ.get("INIT_MODULE_PATTERN")
            or DEFAULT_MODULE_PATTERN,
        )
