"""
Extraction context logger.

Provides logging interface for extraction context with automatic [extract] prefix.
All extraction modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from toditox.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[extract]"


def setup_extraction_logger(log_dir: Path, phase: str = "parse") -> Path:
    """
    Setup logger for extraction context.

    Args:
        log_dir: Directory for this extraction session
        phase: Phase name for provenance ("parse", "classify", "render")

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="extract",
        log_dir=log_dir,
        extra_provenance={"Phase": phase},
    )


# Wrapper functions with automatic [extract] prefix


def _log_info(message: str) -> None:
    """Log info message with [extract] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [extract] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [extract] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [extract] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level extraction-specific logging helpers


def log_extraction_start(source_name: str, text: str, method: str) -> None:
    """Log start of an extraction with input size."""
    _log_info(f"Extracting {source_name} ({method})")
    _log_debug(f"Input: {len(text)} chars, {text.count(chr(10)) + 1} lines")


def log_extraction_result(source_name: str, result, method: str, elapsed_time: float) -> None:
    """
    Log extraction counts.

    Args:
        source_name: Input identifier (file name or "<stdin>")
        result: ParseResult from any pipeline
        method: Pipeline actually used ("structured", "freeform", "fallback")
        elapsed_time: Time taken
    """
    if result.is_empty():
        _log_warning(f"{source_name}: nothing extracted via {method} ({elapsed_time:.2f}s)")
        return

    _log_success(
        f"{source_name}: {len(result.tasks)} tasks, "
        f"{len(result.project_updates)} project updates via {method} ({elapsed_time:.2f}s)"
    )
