"""Tests for bcrm exception classes."""

import pytest

from bcrm.storage.exceptions import (
    AccessError,
    ArgumentError,
    BcrmError,
    CompatibilityError,
    DestinationNotEmptyError,
    DestinationNotWritableError,
    EmptySourceError,
    EmptyValueError,
    InvalidDestinationTypeError,
    InvalidPathError,
    InvalidSourceOrDestinationError,
    InvalidSourceTypeError,
    MissingOptionError,
    OptionValueError,
    SameTargetError,
    SourceNotReadableError,
    UnexpectedIOError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance hierarchy."""

    def test_bcrm_error_is_base_exception(self):
        error = BcrmError("test error")
        assert isinstance(error, Exception)
        assert str(error) == "test error"

    @pytest.mark.parametrize(
        "error, family",
        [
            (MissingOptionError("-s", "source"), ArgumentError),
            (EmptyValueError("-s"), ArgumentError),
            (InvalidPathError("/x", "Invalid Folder or device."), ArgumentError),
            (SameTargetError("/a", "/a"), CompatibilityError),
            (EmptySourceError("/a"), CompatibilityError),
            (DestinationNotEmptyError("/a"), CompatibilityError),
            (InvalidDestinationTypeError("/a"), CompatibilityError),
            (InvalidSourceTypeError("/a"), CompatibilityError),
            (InvalidSourceOrDestinationError("/a"), CompatibilityError),
            (SourceNotReadableError("/a"), AccessError),
            (DestinationNotWritableError("/a"), AccessError),
        ],
    )
    def test_validation_families(self, error, family):
        assert isinstance(error, family)
        assert isinstance(error, ValidationError)
        assert isinstance(error, BcrmError)

    def test_unexpected_io_is_not_a_validation_error(self):
        error = UnexpectedIOError("/mnt", OSError(5, "Input/output error"))
        assert isinstance(error, BcrmError)
        assert not isinstance(error, ValidationError)

    def test_option_value_error_is_not_a_validation_error(self):
        assert not isinstance(OptionValueError("-w", "x", "bad"), ValidationError)

    def test_access_error_does_not_shadow_builtin(self):
        assert not issubclass(AccessError, PermissionError)


class TestArgumentErrors:
    """Test argument error messages."""

    def test_missing_option(self):
        error = MissingOptionError("-d", "destination")
        assert error.flag == "-d"
        assert str(error) == "Missing required option -d <destination>"

    def test_invalid_path_with_flag(self):
        error = InvalidPathError("/x", "Folder or device does not exist.", flag="-s")
        assert error.path == "/x"
        assert str(error) == "-s: Folder or device does not exist."

    def test_invalid_path_without_flag(self):
        error = InvalidPathError("/x", "Invalid Folder or device.")
        assert str(error) == "/x: Invalid Folder or device."


class TestCompatibilityErrors:
    """Test compatibility and access error messages."""

    def test_same_target(self):
        error = SameTargetError("/dev/sdb", "/dev/disk/by-id/usb")
        assert error.source_path == "/dev/sdb"
        assert error.destination_path == "/dev/disk/by-id/usb"
        assert "cannot be the same" in str(error)

    def test_type_errors_name_the_path(self):
        assert str(InvalidDestinationTypeError("/mnt/b")) == "/mnt/b is not a valid block device"
        assert str(InvalidSourceTypeError("/mnt/a")) == "/mnt/a is not a valid block device"
        assert str(InvalidSourceOrDestinationError("/x")) == "Invalid device or directory: /x"

    def test_access_errors(self):
        assert str(SourceNotReadableError("/mnt/a")) == "/mnt/a is not readable"
        assert str(DestinationNotWritableError("/mnt/b")) == "/mnt/b is not writable"

    def test_unexpected_io_keeps_cause(self):
        cause = PermissionError(13, "Permission denied")
        error = UnexpectedIOError("/mnt/a/secret", cause)
        assert error.error is cause
        assert "/mnt/a/secret" in str(error)

    def test_option_value_error(self):
        error = OptionValueError("--boot-size", "big", "expected a number")
        assert error.option == "--boot-size"
        assert str(error) == "--boot-size: invalid value 'big': expected a number"
