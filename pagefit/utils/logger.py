"""
Logger setup for pagefit sessions.

The library itself stays silent (see pagefit/__init__.py); entry points such as
scripts/fit_layout.py enable it and call setup_logger to get a per-session log
file plus console output. Context-specific wrappers live in
contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import TextIO

from loguru import logger

from pagefit import __version__

# Console colors for levels above INFO
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    console: TextIO = sys.stdout,
) -> Path:
    """
    Configure loguru for one session and write the provenance header.

    Args:
        context_name: Context identifier, used as the log file name (e.g., "layout")
        log_dir: Directory for this session
        extra_provenance: Additional key-value pairs for the provenance header
        console: Stream for console output (sys.stderr keeps stdout clean for JSON)

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    # File keeps DEBUG detail (per-block heights, tier choice); console shows INFO
    logger.add(log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}", level="DEBUG")
    logger.add(
        console,
        format="<level>{level: <7}</level> | <level>{message}</level>",
        level="INFO",
        colorize=True,
    )

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """Log command line, working directory and versions, plus any extra context."""
    logger.info("=" * 60)
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"pagefit {__version__} on Python {sys.version.split()[0]}")
    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 60)
