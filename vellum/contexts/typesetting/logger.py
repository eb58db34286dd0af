"""
Typesetting context logger.

Provides logging interface for typesetting context with automatic [layout] prefix.
All typesetting modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[layout]"


# Wrapper functions with automatic [layout] prefix


def _log_success(message: str) -> None:
    """Log success message with [layout] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [layout] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [layout] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level typesetting-specific logging helpers


def log_layout_result(commands, page_count: int) -> None:
    """Log a summary of a finished layout."""
    text_count = sum(1 for command in commands if command.is_text)
    _log_debug(f"Laid out {text_count} text commands across {page_count} page(s)")


def log_fit_attempt(preset_name: str, page_count: int) -> None:
    """Log one single-page fitting attempt."""
    _log_debug(f"Preset '{preset_name}' produced {page_count} page(s)")


def log_fit_result(preset_name: str, page_count: int) -> None:
    """Log the outcome of single-page fitting."""
    if page_count == 1:
        _log_success(f"Fits on one page with preset '{preset_name}'")
    else:
        _log_warning(f"No preset fits on one page; using '{preset_name}' ({page_count} pages)")
