"""Pre-flight validation of source and destination targets.

The gate runs in two stages:
- Argument presence: both options given, non-empty, and classifiable
- Compatibility: an ordered chain of checks on the two classified targets

The legal pairings are directory -> device (backup), device -> directory
(restore) and device -> device (clone). Every check raises a specific
exception from the exceptions module rather than returning a boolean, and the
first failing check ends the run.

Example:
    from bcrm.storage.validation import validate_targets

    try:
        result = validate_targets(options)
    except ValidationError as error:
        print(error)
"""

from __future__ import annotations

from typing import Callable

from bcrm.app.options import Options
from bcrm.domain.models import (
    Identity,
    Operation,
    PreflightResult,
    Target,
    TargetRole,
)
from bcrm.logging import LoggerFactory

from . import permissions, scan
from .exceptions import (
    DestinationNotEmptyError,
    DestinationNotWritableError,
    EmptySourceError,
    EmptyValueError,
    InvalidDestinationTypeError,
    InvalidPathError,
    InvalidSourceOrDestinationError,
    InvalidSourceTypeError,
    MissingOptionError,
    SameTargetError,
    SourceNotReadableError,
)
from .paths import classify


log = LoggerFactory.for_validation()

CompatibilityCheck = Callable[[Target, Target, Identity], None]


# ==============================================================================
# Argument Presence
# ==============================================================================


def validate_option(value: str | None, role: TargetRole) -> Target:
    """Validate one source/destination option and classify its path.

    Raises:
        MissingOptionError: If the option was never supplied
        EmptyValueError: If the option value is an empty string
        InvalidPathError: If the path is missing or not a directory/device
    """
    if value is None:
        raise MissingOptionError(role.flag, role.value)
    if len(value) == 0:
        raise EmptyValueError(role.flag)
    try:
        return classify(value, role)
    except InvalidPathError as error:
        raise InvalidPathError(value, error.reason, flag=role.flag) from error


def validate_arguments(options: Options) -> tuple[Target, Target]:
    """Check that source and destination were given and can be classified.

    The source is validated completely before the destination is looked at.
    """
    source = validate_option(options.source, TargetRole.SOURCE)
    destination = validate_option(options.destination, TargetRole.DESTINATION)
    return source, destination


# ==============================================================================
# Compatibility Checks
# ==============================================================================


def check_not_same_target(source: Target, destination: Target, identity: Identity) -> None:
    if source.same_entry(destination):
        raise SameTargetError(source.path, destination.path)


def check_backup_source_not_empty(
    source: Target, destination: Target, identity: Identity
) -> None:
    if source.is_directory and destination.is_device and scan.is_empty(source.path):
        raise EmptySourceError(source.path)


def check_restore_destination_empty(
    source: Target, destination: Target, identity: Identity
) -> None:
    if (
        source.is_device
        and destination.is_directory
        and not scan.is_empty(destination.path)
    ):
        raise DestinationNotEmptyError(destination.path)


def check_directory_source_pairs_with_device(
    source: Target, destination: Target, identity: Identity
) -> None:
    if source.is_directory and not destination.is_device:
        raise InvalidDestinationTypeError(destination.path)


def check_directory_destination_pairs_with_device(
    source: Target, destination: Target, identity: Identity
) -> None:
    if destination.is_directory and not source.is_device:
        raise InvalidSourceTypeError(source.path)


def check_source_kind(source: Target, destination: Target, identity: Identity) -> None:
    if not source.is_device and not source.is_directory and destination.is_directory:
        raise InvalidSourceOrDestinationError(source.path)


def check_destination_kind(
    source: Target, destination: Target, identity: Identity
) -> None:
    if (
        source.is_directory
        and not destination.is_device
        and not destination.is_directory
    ):
        raise InvalidSourceOrDestinationError(destination.path)


def check_source_readable(source: Target, destination: Target, identity: Identity) -> None:
    if source.is_directory and not permissions.can_traverse_for_read(source, identity):
        raise SourceNotReadableError(source.path)


def check_destination_writable(
    source: Target, destination: Target, identity: Identity
) -> None:
    if destination.is_directory and not permissions.can_traverse_for_write(
        destination, identity
    ):
        raise DestinationNotWritableError(destination.path)


# Order matters: the first failing check decides the error the user sees
COMPATIBILITY_CHECKS: tuple[CompatibilityCheck, ...] = (
    check_not_same_target,
    check_backup_source_not_empty,
    check_restore_destination_empty,
    check_directory_source_pairs_with_device,
    check_directory_destination_pairs_with_device,
    check_source_kind,
    check_destination_kind,
    check_source_readable,
    check_destination_writable,
)


def validate_compatibility(
    source: Target, destination: Target, identity: Identity
) -> Operation:
    """Run every compatibility check in order.

    Returns:
        The operation implied by the pairing

    Raises:
        CompatibilityError: If the pairing is not a backup, restore or clone
        AccessError: If the identity lacks the required permissions
        UnexpectedIOError: If an emptiness scan cannot list a directory
    """
    for check in COMPATIBILITY_CHECKS:
        log.debug(f"Running {check.__name__}")
        check(source, destination, identity)
    if source.is_directory:
        return Operation.BACKUP
    if destination.is_directory:
        return Operation.RESTORE
    return Operation.CLONE


def validate_targets(options: Options, identity: Identity | None = None) -> PreflightResult:
    """Perform the whole pre-flight gate.

    Args:
        options: Parsed options; only source and destination are inspected
        identity: Identity to check permissions for (default: current process)

    Returns:
        Both classified targets and the operation they imply

    Raises:
        ValidationError: On the first failing rule
        UnexpectedIOError: If a directory cannot be scanned
    """
    source, destination = validate_arguments(options)
    identity = identity or permissions.current_identity()
    operation = validate_compatibility(source, destination, identity)
    log.info(f"{operation.value.capitalize()} from {source.path} to {destination.path} is valid")
    return PreflightResult(source=source, destination=destination, operation=operation)
