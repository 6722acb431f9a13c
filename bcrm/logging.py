from __future__ import annotations

import sys
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger


def setup_logging(
    *,
    debug: bool = False,
    trace: bool = False,
    log_dir: Path | None = None,
) -> Logger:
    """
    Setup logging sinks for a command-line run.

    The console sink exists only with debug or trace enabled.

    Logging Tiers:
    - CRITICAL/ERROR: Unexpected I/O failures
    - SUCCESS/INFO: Validation verdicts
    - DEBUG: Individual checks, metadata lookups
    - TRACE: Every entry seen by the emptiness scan

    Log Files (only when log_dir is given):
    - operations.log: INFO+ events (7 day retention)
    - structured.jsonl: Structured JSON logs for analysis (7 day retention)

    Args:
        debug: Enable DEBUG level logging
        trace: Enable TRACE level logging (very verbose)
        log_dir: Directory for file sinks; no files are written when None or
            when the directory cannot be created
    """
    logger.remove()
    logger.configure(extra={"job_id": "-", "tags": [], "source": "APP"})

    # SINK 1: Console (stderr) - diagnostics only, verdicts are printed by the CLI
    if debug or trace:
        console_level = "TRACE" if trace else "DEBUG"
        logger.add(
            sys.stderr,
            level=console_level,
            backtrace=False,
            diagnose=False,
            colorize=True,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{extra[source]: <10}</cyan> | "
                "{message}"
            ),
        )

    if log_dir is None:
        return logger

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as error:
        logger.bind(source="logging").warning(
            f"Cannot create log directory {log_dir}: {error.strerror}; "
            "file logging disabled"
        )
        return logger

    # SINK 2: Operations Log - Verdicts only (INFO+)
    logger.add(
        log_dir / "operations.log",
        level="INFO",
        rotation="5 MB",
        retention="7 days",
        compression="zip",
        backtrace=False,
        diagnose=False,
        format=(
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{extra[source]: <10} | "
            "{extra[job_id]: <18} | "
            "{message}"
        ),
    )

    # SINK 3: Structured JSON Log - For analysis tools (INFO+)
    logger.add(
        log_dir / "structured.jsonl",
        level="INFO",
        rotation="10 MB",
        retention="7 days",
        compression="zip",
        serialize=True,
        format="{message}",
    )

    return logger


def get_logger(
    *,
    job_id: str | None = None,
    tags: Iterable[str] | None = None,
    source: str | None = None,
) -> Logger:
    """
    Get a logger with bound context.

    Args:
        job_id: Job identifier for tracking a validation run
        tags: Tags for filtering (e.g., ["scan"])
        source: Source component (e.g., "validate", "cli")

    Returns:
        Logger with bound context
    """
    extras: dict[str, object] = {}
    if job_id is not None:
        extras["job_id"] = job_id
    if tags is not None:
        extras["tags"] = list(tags)
    if source is not None:
        extras["source"] = source
    return logger.bind(**extras)


@contextmanager
def operation_context(operation: str, **details):
    """
    Context manager for tracking an operation with automatic timing.

    Logs operation start, completion, and failure with duration tracking.

    Args:
        operation: Operation name (e.g., "preflight")
        **details: Operation-specific details to log

    Yields:
        Logger bound with job_id and operation context

    Example:
        with operation_context("preflight", source_path="/mnt/data") as log:
            log.debug("Classifying source")
    """
    job_id = f"{operation}-{uuid.uuid4().hex[:8]}"

    with logger.contextualize(job_id=job_id, operation=operation, **details):
        start_time = time.time()
        log = logger.bind(source=operation, job_id=job_id, tags=[operation])

        log.info(f"{operation.capitalize()} started")

        try:
            yield log
            duration = time.time() - start_time
            log.success(
                f"{operation.capitalize()} completed",
                duration_seconds=round(duration, 2),
            )
        except Exception as e:
            duration = time.time() - start_time
            # Log-call kwargs would str.format() the message, which may hold braces
            log.bind(
                error_type=type(e).__name__,
                duration_seconds=round(duration, 2),
            ).error(f"{operation.capitalize()} failed: {e}")
            raise


class LoggerFactory:
    """
    Factory for creating component loggers with automatic context.
    """

    @staticmethod
    def for_validation() -> Logger:
        """Logger for argument and compatibility checks."""
        return logger.bind(source="validate", tags=["validate"])

    @staticmethod
    def for_scan() -> Logger:
        """Logger for directory emptiness scans."""
        return logger.bind(source="scan", tags=["scan", "storage"])

    @staticmethod
    def for_system() -> Logger:
        """Logger for startup, configuration and exit handling."""
        return logger.bind(source="system", tags=["system"])
