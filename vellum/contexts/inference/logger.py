"""
Inference context logger.

Provides logging interface for inference context with automatic [infer] prefix.
All inference modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[infer]"


def setup_inference_logger(log_dir: Path) -> Path:
    """
    Setup logger for inference context.

    Args:
        log_dir: Directory for this inference session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="infer",
        log_dir=log_dir,
        extra_provenance={"Phase": "parse"},
    )


# Wrapper functions with automatic [infer] prefix


def _log_info(message: str) -> None:
    """Log info message with [infer] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [infer] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [infer] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level inference-specific logging helpers


def log_dropped_line(line_index: int, reason: str, line: str) -> None:
    """Log a line the builder chose not to keep."""
    preview = line.strip()
    if len(preview) > 60:
        preview = preview[:60] + "..."
    _log_debug(f"Dropped line {line_index} ({reason}): '{preview}'")


def log_parse_result(document) -> None:
    """
    Log a summary of an inferred document.

    Args:
        document: Document returned by parse()
    """
    if document.is_raw:
        _log_warning(
            f"No section headings recognized; using raw fallback with {len(document.raw_lines)} lines"
        )
        return

    entry_count = sum(len(section.entries) for section in document.sections)
    _log_info(
        f"Inferred {len(document.sections)} sections with {entry_count} entries "
        f"(name: {'yes' if document.name else 'no'}, contact: {'yes' if document.contact_line else 'no'})"
    )
    for section in document.sections:
        _log_debug(f"  {section.heading}: {len(section.entries)} entries")
