"""Permission checks against the invoking user's identity.

Mode bits are evaluated the POSIX way: exactly one permission class applies
to an identity (owner, then group, then other) and only that class's bits
are consulted.

Example:
    from bcrm.storage.permissions import current_identity, can_read

    if not can_read(target, current_identity()):
        ...
"""

from __future__ import annotations

import os
import pwd
import stat
from enum import Enum

from bcrm.domain.models import Identity, Target


class PermissionClass(Enum):
    USER = "user"
    GROUP = "group"
    OTHER = "other"


_READ_BITS = {
    PermissionClass.USER: stat.S_IRUSR,
    PermissionClass.GROUP: stat.S_IRGRP,
    PermissionClass.OTHER: stat.S_IROTH,
}
_WRITE_BITS = {
    PermissionClass.USER: stat.S_IWUSR,
    PermissionClass.GROUP: stat.S_IWGRP,
    PermissionClass.OTHER: stat.S_IWOTH,
}
_EXECUTE_BITS = {
    PermissionClass.USER: stat.S_IXUSR,
    PermissionClass.GROUP: stat.S_IXGRP,
    PermissionClass.OTHER: stat.S_IXOTH,
}


def current_identity() -> Identity:
    """Build the identity of the invoking process.

    Group membership is taken from the group database for the effective
    user, like ``id -G``. When the effective uid has no passwd entry the
    process's own supplementary groups are used instead.
    """
    uid = os.geteuid()
    egid = os.getegid()
    try:
        name = pwd.getpwuid(uid).pw_name
    except KeyError:
        gids = set(os.getgroups())
    else:
        gids = set(os.getgrouplist(name, egid))
    gids.add(egid)
    return Identity(uid=uid, gids=frozenset(gids))


def permission_class(target: Target, identity: Identity) -> PermissionClass:
    """Select the single permission class that applies to ``identity``."""
    if identity.uid == target.uid:
        return PermissionClass.USER
    if identity.in_group(target.gid):
        return PermissionClass.GROUP
    return PermissionClass.OTHER


def _has_bit(target: Target, identity: Identity, bits: dict) -> bool:
    return bool(target.mode & bits[permission_class(target, identity)])


def can_read(target: Target, identity: Identity) -> bool:
    return _has_bit(target, identity, _READ_BITS)


def can_write(target: Target, identity: Identity) -> bool:
    return _has_bit(target, identity, _WRITE_BITS)


def can_execute(target: Target, identity: Identity) -> bool:
    """Execute bit; for directories this is the traverse permission."""
    return _has_bit(target, identity, _EXECUTE_BITS)


def can_traverse_for_read(target: Target, identity: Identity) -> bool:
    """Directory listing and descent: read and execute."""
    return can_read(target, identity) and can_execute(target, identity)


def can_traverse_for_write(target: Target, identity: Identity) -> bool:
    """Creating entries inside a directory: write and execute."""
    return can_write(target, identity) and can_execute(target, identity)
