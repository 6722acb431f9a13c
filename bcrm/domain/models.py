"""Typed values passed between the option layer, the gate and the engine.

Targets and identities are built once per validation run and never mutated,
so every model here is a frozen dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ==============================================================================
# Target Domain
# ==============================================================================


class TargetRole(Enum):
    """Which side of the operation a path was given for."""

    SOURCE = "source"
    DESTINATION = "destination"

    @property
    def flag(self) -> str:
        """Short command-line flag for this role (e.g., "-s")."""
        return "-s" if self is TargetRole.SOURCE else "-d"


class TargetKind(Enum):
    """Kind of filesystem entry found at a path."""

    DIRECTORY = "directory"
    BLOCK_DEVICE = "block_device"
    CHAR_DEVICE = "char_device"
    INVALID = "invalid"  # exists, but is a regular file, socket, fifo...
    MISSING = "missing"  # reserved: classify raises InvalidPathError instead

    @property
    def is_device(self) -> bool:
        return self in (TargetKind.BLOCK_DEVICE, TargetKind.CHAR_DEVICE)

    @property
    def is_directory(self) -> bool:
        return self is TargetKind.DIRECTORY


@dataclass(frozen=True)
class PathMetadata:
    """Result of a single metadata lookup.

    This is the only place raw ``st_*`` values enter the program.
    """

    kind: TargetKind
    uid: int
    gid: int
    mode: int  # permission bits only (e.g., 0o755)
    device: int
    inode: int


@dataclass(frozen=True)
class Target:
    """One validated endpoint of a clone, backup or restore run."""

    role: TargetRole
    path: str
    kind: TargetKind
    uid: int
    gid: int
    mode: int
    device: int
    inode: int

    @property
    def is_device(self) -> bool:
        return self.kind.is_device

    @property
    def is_directory(self) -> bool:
        return self.kind.is_directory

    def same_entry(self, other: Target) -> bool:
        """Check whether both targets point at the same device and inode."""
        return (self.device, self.inode) == (other.device, other.inode)

    @classmethod
    def from_metadata(cls, role: TargetRole, path: str, metadata: PathMetadata) -> Target:
        return cls(
            role=role,
            path=path,
            kind=metadata.kind,
            uid=metadata.uid,
            gid=metadata.gid,
            mode=metadata.mode,
            device=metadata.device,
            inode=metadata.inode,
        )


# ==============================================================================
# Identity Domain
# ==============================================================================


@dataclass(frozen=True)
class Identity:
    """Effective user id and group memberships of the invoking process."""

    uid: int
    gids: frozenset[int]

    def in_group(self, gid: int) -> bool:
        return gid in self.gids


# ==============================================================================
# Operation Domain
# ==============================================================================


class Operation(Enum):
    """Operation implied by a valid source/destination pairing."""

    BACKUP = "backup"  # directory -> device
    RESTORE = "restore"  # device -> directory
    CLONE = "clone"  # device -> device


@dataclass(frozen=True)
class PreflightResult:
    """Both targets after every pre-flight check has passed.

    The engine receives this value and must not assume anything about the
    targets beyond what the gate checked (kind, permissions, emptiness).
    """

    source: Target
    destination: Target
    operation: Operation


# ==============================================================================
# Option Value Domain
# ==============================================================================


class ImageType(Enum):
    """Virtual disk image formats accepted by --source-image/--destination-image."""

    RAW = "raw"  # Plain binary
    VDI = "vdi"  # VirtualBox
    QCOW2 = "qcow2"  # QEMU/KVM
    VMDK = "vmdk"  # VMware
    VHDX = "vhdx"  # Hyper-V


@dataclass(frozen=True)
class SizeValue:
    """A size option such as ``200M`` or ``4G``."""

    text: str  # canonical form, e.g. "200M"
    megabytes: int


@dataclass(frozen=True)
class ImageSpec:
    """A parsed ``<path>:<type>[:<virtual-size>]`` image option.

    Only the syntax is checked; the image file itself is never opened.
    """

    path: str
    image_type: ImageType
    size: SizeValue | None = None

    @property
    def creates_file(self) -> bool:
        """With a size the engine creates or overwrites the image file."""
        return self.size is not None
