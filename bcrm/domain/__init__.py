"""Domain models for the pre-flight gate.

This package contains the typed values that replace the raw stat results and
option strings handled by the command-line layer.
"""

from __future__ import annotations

from .models import (
    Identity,
    ImageSpec,
    ImageType,
    Operation,
    PathMetadata,
    PreflightResult,
    SizeValue,
    Target,
    TargetKind,
    TargetRole,
)


__all__ = [
    "Identity",
    "ImageSpec",
    "ImageType",
    "Operation",
    "PathMetadata",
    "PreflightResult",
    "SizeValue",
    "Target",
    "TargetKind",
    "TargetRole",
]
