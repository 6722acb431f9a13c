"""
Pytest configuration and shared fixtures for bcrm tests.

Real device nodes cannot be created without privileges, so device paths are
simulated by patching ``bcrm.storage.paths.lookup_metadata``.
"""

from __future__ import annotations

import os
from typing import Callable, Dict

import pytest

from bcrm.config import settings
from bcrm.domain.models import Identity, PathMetadata, Target, TargetKind, TargetRole
from bcrm.storage import paths


OWNER_UID = 1000
OWNER_GID = 1000
DISK_GID = 6


# ==============================================================================
# Settings / Environment Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory, monkeypatch):
    """Point the settings file at an empty temporary location."""
    settings_dir = tmp_path_factory.mktemp("settings")
    monkeypatch.setattr(
        "bcrm.config.settings.SETTINGS_PATH", settings_dir / "settings.json"
    )
    monkeypatch.setitem(settings.DEFAULT_SETTINGS, "log_dir", None)
    yield settings_dir / "settings.json"


# ==============================================================================
# Device Fixtures
# ==============================================================================


@pytest.fixture
def fake_devices(monkeypatch) -> Dict[str, PathMetadata]:
    """
    Fixture simulating device nodes.

    Returns a mutable mapping of path -> PathMetadata. Lookups for paths in
    the mapping return the fake metadata, everything else hits the real
    filesystem.
    """
    devices: Dict[str, PathMetadata] = {
        "/dev/sdb": PathMetadata(
            kind=TargetKind.BLOCK_DEVICE,
            uid=0,
            gid=DISK_GID,
            mode=0o660,
            device=5,
            inode=401,
        ),
        "/dev/sdc": PathMetadata(
            kind=TargetKind.BLOCK_DEVICE,
            uid=0,
            gid=DISK_GID,
            mode=0o660,
            device=5,
            inode=402,
        ),
    }
    real_lookup = paths.lookup_metadata

    def lookup(path: str) -> PathMetadata:
        if path in devices:
            return devices[path]
        return real_lookup(path)

    monkeypatch.setattr(paths, "lookup_metadata", lookup)
    return devices


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def empty_dir(tmp_path) -> str:
    path = tmp_path / "empty"
    path.mkdir()
    return str(path)


@pytest.fixture
def populated_dir(tmp_path) -> str:
    """Directory with one visible file and some hidden content."""
    path = tmp_path / "data"
    path.mkdir()
    path.chmod(0o755)
    (path / "a.txt").write_text("payload")
    (path / ".git").mkdir()
    (path / ".git" / "HEAD").write_text("ref: refs/heads/main")
    return str(path)


# ==============================================================================
# Target / Identity Factories
# ==============================================================================


@pytest.fixture
def make_target() -> Callable[..., Target]:
    """Factory for Target values that never touch the filesystem."""
    counter = {"inode": 1000}

    def _make(
        kind: TargetKind = TargetKind.DIRECTORY,
        *,
        role: TargetRole = TargetRole.SOURCE,
        path: str | None = None,
        uid: int = OWNER_UID,
        gid: int = OWNER_GID,
        mode: int = 0o755,
        device: int = 1,
        inode: int | None = None,
    ) -> Target:
        if inode is None:
            counter["inode"] += 1
            inode = counter["inode"]
        return Target(
            role=role,
            path=path or f"/fake/{role.value}-{inode}",
            kind=kind,
            uid=uid,
            gid=gid,
            mode=mode,
            device=device,
            inode=inode,
        )

    return _make


@pytest.fixture
def owner_identity() -> Identity:
    return Identity(uid=OWNER_UID, gids=frozenset({OWNER_GID}))


@pytest.fixture
def stranger_identity() -> Identity:
    """Identity matching neither the owning user nor the owning group."""
    return Identity(uid=2000, gids=frozenset({2000}))


@pytest.fixture
def process_identity() -> Identity:
    """Identity of the user running the tests, owner of tmp_path entries."""
    return Identity(uid=os.geteuid(), gids=frozenset({os.getegid()}))
