"""PosixNormalizer — ownership and mode changes on the host filesystem.

Implements PermissionNormalizer using os.chown / os.chmod:
- chown: owner spec 'user:group', names or numeric ids
- chmod: octal mode plus +X: execute bits (masked by the process umask)
  only for directories or when the new mode already grants execute
"""

from __future__ import annotations

import grp
import os
import pwd
import stat

from ..errors import PermissionChangeError
from ..settings import PermissionPolicy

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _resolve_id(value: str, kind: str) -> int:
    if not value:
        return -1
    if value.isdigit():
        return int(value)
    try:
        if kind == "user":
            return pwd.getpwnam(value).pw_uid
        return grp.getgrnam(value).gr_gid
    except KeyError:
        raise ValueError(f"Unknown {kind}: {value!r}") from None


def parse_owner(spec: str) -> tuple[int, int]:
    """Parse 'user:group' into (uid, gid). Missing parts map to -1 (unchanged)."""
    user, _, group = spec.partition(":")
    return _resolve_id(user, "user"), _resolve_id(group, "group")


def add_execute_bits(mode: int, is_dir: bool, umask: int) -> int:
    """Apply chmod +X to an already-set mode.

    Execute is added for directories, or when mode itself has an execute bit;
    the bits the target had before the mode change do not count.
    """
    if is_dir or mode & _EXEC_BITS:
        return mode | (_EXEC_BITS & ~umask)
    return mode


class PosixNormalizer:
    """Permission normalizer for the local POSIX filesystem."""

    @property
    def name(self) -> str:
        return "posix"

    def chown(self, path: str | os.PathLike[str], policy: PermissionPolicy) -> bool:
        if not policy.chown_enabled:
            return False
        uid, gid = parse_owner(policy.owner_spec)
        try:
            os.chown(path, uid, gid)
        except OSError as exc:
            raise PermissionChangeError(f"chown {policy.owner_spec}", path, exc) from exc
        return True

    def chmod(self, path: str | os.PathLike[str], policy: PermissionPolicy) -> bool:
        if not policy.chmod_enabled:
            return False
        mode = policy.mode
        try:
            st = os.stat(path)
            new_mode = add_execute_bits(
                mode, stat.S_ISDIR(st.st_mode), current_umask()
            )
            os.chmod(path, new_mode)
        except OSError as exc:
            raise PermissionChangeError(f"chmod {policy.mode_spec}", path, exc) from exc
        return True

    def normalize(
        self, path: str | os.PathLike[str], policy: PermissionPolicy
    ) -> None:
        self.chown(path, policy)
        self.chmod(path, policy)
