"""Directory emptiness scanning.

A directory counts as empty when nothing visible lives anywhere beneath it.
Entries whose base name starts with a dot are hidden; hidden directories are
pruned so their contents are never counted.
"""

from __future__ import annotations

import os
from typing import Iterator

from bcrm.logging import LoggerFactory

from .exceptions import UnexpectedIOError


log = LoggerFactory.for_scan()


def is_hidden(path: str) -> bool:
    """Check whether the base name of ``path`` starts with a dot."""
    return os.path.basename(os.path.normpath(path)).startswith(".")


def _raise_unexpected(error: OSError) -> None:
    raise UnexpectedIOError(error.filename or "", error)


def iter_visible_entries(directory: str) -> Iterator[str]:
    """Lazily yield every non-hidden path below ``directory``.

    The directory itself is never yielded. Each call starts a fresh walk.

    Raises:
        UnexpectedIOError: If any part of the tree cannot be listed
    """
    for root, dirnames, filenames in os.walk(directory, onerror=_raise_unexpected):
        # Prune in place so os.walk does not descend into hidden directories
        dirnames[:] = [name for name in dirnames if not is_hidden(name)]
        for name in dirnames + [n for n in filenames if not is_hidden(n)]:
            path = os.path.join(root, name)
            log.trace(f"Visible entry {path}")
            yield path


def is_empty(directory: str) -> bool:
    """Return True if ``directory`` holds no visible entry at any depth.

    Stops at the first visible entry instead of walking the whole tree.

    Raises:
        UnexpectedIOError: If the tree cannot be listed
    """
    first = next(iter_visible_entries(directory), None)
    if first is None:
        log.debug(f"{directory} has no visible entries")
        return True
    log.debug(f"{directory} is not empty (found {first})")
    return False
