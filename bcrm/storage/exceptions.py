"""Custom exceptions for the pre-flight gate.

This module defines a hierarchy of exceptions so the command-line boundary can
tell recoverable validation failures apart from unexpected I/O problems.

Exception Hierarchy:
    BcrmError (base)
        ├── OptionValueError
        ├── ValidationError
        │   ├── ArgumentError
        │   │   ├── MissingOptionError
        │   │   ├── EmptyValueError
        │   │   └── InvalidPathError
        │   ├── CompatibilityError
        │   │   ├── SameTargetError
        │   │   ├── EmptySourceError
        │   │   ├── DestinationNotEmptyError
        │   │   ├── InvalidDestinationTypeError
        │   │   ├── InvalidSourceTypeError
        │   │   └── InvalidSourceOrDestinationError
        │   └── AccessError
        │       ├── SourceNotReadableError
        │       └── DestinationNotWritableError
        └── UnexpectedIOError

Usage:
    from bcrm.storage.exceptions import SameTargetError

    if source.same_entry(destination):
        raise SameTargetError(source.path, destination.path)
"""


class BcrmError(Exception):
    """Base exception for all bcrm errors."""



class OptionValueError(BcrmError):
    """An option value could not be converted to its typed form."""

    def __init__(self, option: str, value: str, reason: str):
        self.option = option
        self.value = value
        self.reason = reason
        super().__init__(f"{option}: invalid value {value!r}: {reason}")


class ValidationError(BcrmError):
    """Base exception for pre-flight validation failures."""



class ArgumentError(ValidationError):
    """Base exception for missing or unusable source/destination options."""



class MissingOptionError(ArgumentError):
    """A required option was never supplied."""

    def __init__(self, flag: str, metavar: str):
        self.flag = flag
        self.metavar = metavar
        super().__init__(f"Missing required option {flag} <{metavar}>")


class EmptyValueError(ArgumentError):
    """A required option was supplied with an empty value."""

    def __init__(self, flag: str):
        self.flag = flag
        super().__init__(f"{flag}: Parameter value is empty.")


class InvalidPathError(ArgumentError):
    """A path does not exist or is neither a directory nor a device."""

    def __init__(self, path: str, reason: str, flag: str = ""):
        self.path = path
        self.reason = reason
        self.flag = flag
        msg = f"{flag}: {reason}" if flag else f"{path}: {reason}"
        super().__init__(msg)


class CompatibilityError(ValidationError):
    """Base exception for source/destination pairings that are not allowed."""



class SameTargetError(CompatibilityError):
    """Source and destination resolve to the same filesystem entry."""

    def __init__(self, source_path: str, destination_path: str):
        self.source_path = source_path
        self.destination_path = destination_path
        super().__init__("Source and destination cannot be the same!")


class EmptySourceError(CompatibilityError):
    """Backup source directory has no visible content."""

    def __init__(self, source_path: str):
        self.source_path = source_path
        super().__init__("No backup available. Source is empty!")


class DestinationNotEmptyError(CompatibilityError):
    """Restore destination directory already has visible content."""

    def __init__(self, destination_path: str):
        self.destination_path = destination_path
        super().__init__("Destination not empty!")


class InvalidDestinationTypeError(CompatibilityError):
    """A directory source was paired with something other than a device."""

    def __init__(self, destination_path: str):
        self.destination_path = destination_path
        super().__init__(f"{destination_path} is not a valid block device")


class InvalidSourceTypeError(CompatibilityError):
    """A directory destination was paired with something other than a device."""

    def __init__(self, source_path: str):
        self.source_path = source_path
        super().__init__(f"{source_path} is not a valid block device")


class InvalidSourceOrDestinationError(CompatibilityError):
    """The named side is neither a device nor a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Invalid device or directory: {path}")


class AccessError(ValidationError):
    """Base exception for permission failures."""



class SourceNotReadableError(AccessError):
    """The invoking user cannot read the source directory."""

    def __init__(self, source_path: str):
        self.source_path = source_path
        super().__init__(f"{source_path} is not readable")


class DestinationNotWritableError(AccessError):
    """The invoking user cannot write to the destination directory."""

    def __init__(self, destination_path: str):
        self.destination_path = destination_path
        super().__init__(f"{destination_path} is not writable")


class UnexpectedIOError(BcrmError):
    """Filesystem access failed in a way validation cannot account for."""

    def __init__(self, path: str, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Unexpected I/O error at {path}: {error}")
