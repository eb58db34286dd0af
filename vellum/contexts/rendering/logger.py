"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import List

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, source: str = "") -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        source: Input text file, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"Source": source or "<text>"},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_result(result) -> None:
    """
    Log a finished render.

    Args:
        result: RenderResult from render_resume()
    """
    _log_success(
        f"Rendered {result.page_count} page(s), {len(result.pdf_bytes)} bytes "
        f"(preset: {result.preset_name or 'none'})"
    )


def log_validation_result(is_valid: bool, page_count: int, issues: List[str]) -> None:
    """Log validation outcome with each issue at warning level."""
    if is_valid:
        _log_success(f"Validation passed ({page_count} page(s))")
        return

    _log_warning(f"Validation failed with {len(issues)} issue(s) ({page_count} page(s))")
    for i, issue in enumerate(issues, 1):
        _log_warning(f"  Issue {i}: {issue}")
