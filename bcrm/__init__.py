"""Pre-flight validation for disk clone, backup and restore runs."""

from .__version__ import __version__

__all__ = ["__version__"]
