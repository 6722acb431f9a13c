"""Path classification for source and destination options.

Every platform-specific detail of reading ``stat`` results lives in
``lookup_metadata``; the rest of the package only sees ``PathMetadata`` and
``Target`` values.
"""

from __future__ import annotations

import errno
import os
import stat

from bcrm.domain.models import PathMetadata, Target, TargetKind, TargetRole
from bcrm.logging import LoggerFactory

from .exceptions import InvalidPathError


log = LoggerFactory.for_validation()

NOT_FOUND_REASON = "Folder or device does not exist."
INVALID_KIND_REASON = "Invalid Folder or device."
INACCESSIBLE_REASON = "Folder or device is not accessible: {strerror}."

_NOT_FOUND_ERRNOS = (errno.ENOENT, errno.ENOTDIR)


def _kind_from_mode(st_mode: int) -> TargetKind:
    if stat.S_ISDIR(st_mode):
        return TargetKind.DIRECTORY
    if stat.S_ISBLK(st_mode):
        return TargetKind.BLOCK_DEVICE
    if stat.S_ISCHR(st_mode):
        return TargetKind.CHAR_DEVICE
    return TargetKind.INVALID


def lookup_metadata(path: str) -> PathMetadata:
    """Stat ``path`` once and reduce the result to ``PathMetadata``.

    Symbolic links are followed the way ``os.stat`` follows them. The entry
    is never opened.

    Raises:
        OSError: If the lookup fails (usually because the entry is missing)
    """
    st = os.stat(path)
    return PathMetadata(
        kind=_kind_from_mode(st.st_mode),
        uid=st.st_uid,
        gid=st.st_gid,
        mode=stat.S_IMODE(st.st_mode),
        device=st.st_dev,
        inode=st.st_ino,
    )


def classify(path: str, role: TargetRole) -> Target:
    """Classify ``path`` as a directory or device target.

    Args:
        path: Path given on the command line
        role: Side of the operation the path was given for

    Returns:
        Target populated from a single metadata lookup

    Raises:
        InvalidPathError: If the path is missing, cannot be looked up, or is
            neither a directory nor a block/character device
    """
    try:
        metadata = lookup_metadata(path)
    except OSError as error:
        log.debug(f"Metadata lookup failed for {path}: {error.strerror}")
        if error.errno in _NOT_FOUND_ERRNOS or not error.strerror:
            reason = NOT_FOUND_REASON
        else:
            reason = INACCESSIBLE_REASON.format(strerror=error.strerror)
        raise InvalidPathError(path, reason) from error

    if metadata.kind not in (
        TargetKind.DIRECTORY,
        TargetKind.BLOCK_DEVICE,
        TargetKind.CHAR_DEVICE,
    ):
        raise InvalidPathError(path, INVALID_KIND_REASON)

    log.debug(
        f"Classified {role.value} {path} as {metadata.kind.value} "
        f"(uid={metadata.uid} gid={metadata.gid} mode={metadata.mode:o})"
    )
    return Target.from_metadata(role, path, metadata)
