"""Shell context detection.

Detection chain (tried in order):
1. SHELLCTX — value exported by a previous initialization in this environment
2. BASH_VERSION / ZSH_VERSION — set when the shell itself exports them
3. SHELL — basename of the login shell, version probed from the binary
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from collections.abc import Callable, Mapping
from enum import Enum

from .errors import NotSourcedError, ShellVersionError, UnsupportedShellError

logger = logging.getLogger(__name__)

MIN_BASH_MAJOR = 4


class ShellContext(str, Enum):
    """The two supported shell families."""

    BASH = "bash"
    ZSH = "zsh"


_VERSION_VARS: dict[ShellContext, str] = {
    ShellContext.BASH: "BASH_VERSION",
    ShellContext.ZSH: "ZSH_VERSION",
}


def probe_shell_version(shell: str, ctx: ShellContext) -> str | None:
    """Ask the shell binary for its own version variable."""
    var = _VERSION_VARS[ctx]
    try:
        proc = subprocess.run(
            [shell, "-c", f"echo ${var}"],
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug("shell: could not probe %s: %s", shell, exc)
        return None
    version = proc.stdout.strip()
    return version or None


def major_version(version: str | None) -> int | None:
    """Leading integer of a version string like ``5.2.15(1)-release``."""
    if not version:
        return None
    match = re.match(r"\s*(\d+)", version)
    return int(match.group(1)) if match else None


def detect_shell(
    environ: Mapping[str, str] | None = None,
    probe: Callable[[str, ShellContext], str | None] = probe_shell_version,
) -> ShellContext:
    """Detect the invoking shell. Raises on unsupported shells or old Bash."""
    env = os.environ if environ is None else environ
    ctx: ShellContext | None = None
    version: str | None = None

    preset = env.get("SHELLCTX", "")
    if preset in (ShellContext.BASH.value, ShellContext.ZSH.value):
        ctx = ShellContext(preset)
        version = env.get(_VERSION_VARS[ctx]) or None
    elif env.get("BASH_VERSION"):
        ctx, version = ShellContext.BASH, env["BASH_VERSION"]
    elif env.get("ZSH_VERSION"):
        ctx, version = ShellContext.ZSH, env["ZSH_VERSION"]
    else:
        shell = env.get("SHELL", "")
        name = os.path.basename(shell)
        if name in (ShellContext.BASH.value, ShellContext.ZSH.value):
            ctx = ShellContext(name)
            version = probe(shell, ctx)

    if ctx is None:
        raise UnsupportedShellError()

    if ctx is ShellContext.BASH:
        major = major_version(version)
        # An unknown version is accepted, as with an inherited SHELLCTX.
        if major is not None and major < MIN_BASH_MAJOR:
            raise ShellVersionError(version)

    logger.debug("shell: detected %s (version %s)", ctx.value, version or "unknown")
    return ctx


def ensure_sourced(module_name: str) -> None:
    """Raise NotSourcedError when the caller is running as ``__main__``."""
    if module_name == "__main__":
        raise NotSourcedError()
