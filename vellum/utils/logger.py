"""
Shared loguru setup for the inference, layout and rendering contexts.

Every context logs through a wrapper that prefixes its messages with a tag such
as "[infer]" or "[layout]". The file sink keeps everything; the console sink is
narrowed by two environment variables:

    VELLUM_LOG_LEVEL      minimum console level (default INFO)
    VELLUM_LOG_CONTEXTS   comma-separated context tags to show, e.g. "infer,layout"

Untagged messages (the provenance header) always pass the context filter.
"""

import os
import re
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional, Tuple

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

DEFAULT_CONSOLE_LEVEL = "INFO"

LEVEL_COLORS = {
    "WARNING": "<white>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

_CONTEXT_TAG = re.compile(r"^\[([a-z]+)\]")


def context_of(message: str) -> Optional[str]:
    """
    Context tag a message was logged under.

    Example:
        >>> context_of("[layout] Placed 12 commands")
        'layout'
        >>> context_of("Python: 3.11.4") is None
        True
    """
    match = _CONTEXT_TAG.match(message)
    return match.group(1) if match else None


def context_filter(contexts: Iterable[str]) -> Callable[[dict], bool]:
    """Loguru filter keeping untagged records and records from the given contexts."""
    allowed = frozenset(context.strip("[] ").lower() for context in contexts)

    def _filter(record: dict) -> bool:
        context = context_of(record["message"])
        return context is None or context in allowed

    return _filter


def console_settings() -> Tuple[str, Optional[Tuple[str, ...]]]:
    """
    Console level and context selection from the environment.

    Returns:
        (level, contexts) where contexts is None when every context is shown
    """
    level = os.getenv("VELLUM_LOG_LEVEL", DEFAULT_CONSOLE_LEVEL).strip().upper() or DEFAULT_CONSOLE_LEVEL
    raw_contexts = os.getenv("VELLUM_LOG_CONTEXTS", "")
    contexts = tuple(part.strip() for part in raw_contexts.split(",") if part.strip())
    return level, contexts or None


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    console_level: str = None,
    console_contexts: Iterable[str] = None,
) -> Path:
    """
    Configure loguru for one session with a provenance header.

    Args:
        context_name: Log file stem (e.g., "render", "infer")
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for provenance header
        console_level: Console level; falls back to VELLUM_LOG_LEVEL
        console_contexts: Context tags shown on the console; falls back to VELLUM_LOG_CONTEXTS

    Returns:
        Path to log file
    """
    env_level, env_contexts = console_settings()
    console_level = console_level or env_level
    console_contexts = console_contexts if console_contexts is not None else env_contexts

    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=console_level,
        colorize=True,
        filter=context_filter(console_contexts) if console_contexts else None,
    )

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """Log script, command line, working directory and Python version, plus extras."""
    logger.info("=" * 80)
    logger.info(f"Script: {sys.argv[0]}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
