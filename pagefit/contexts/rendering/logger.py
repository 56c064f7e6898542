"""
Rendering context logger.

Provides logging interface for layout estimation and selection with automatic
[layout] prefix. All rendering modules should import from this module, not from
utils.logger directly.
"""

import sys
from pathlib import Path
from typing import Optional, TextIO

from loguru import logger

from pagefit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[layout]"


def setup_layout_logger(
    log_dir: Path, tier_config: Optional[Path] = None, console: TextIO = sys.stdout
) -> Path:
    """
    Setup logger for layout fitting sessions.

    Args:
        log_dir: Directory for this session
        tier_config: Tier override file in use, if any (recorded in provenance)
        console: Stream for console output

    Returns:
        Path to log file

    Example:
        from pagefit.contexts.rendering.logger import setup_layout_logger

        log_file = setup_layout_logger(log_dir)
    """
    return _setup_logger(
        context_name="layout",
        log_dir=log_dir,
        extra_provenance={"Tier config": tier_config or "defaults"},
        console=console,
    )


# Wrapper functions with automatic [layout] prefix


def _log_info(message: str) -> None:
    """Log info message with [layout] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [layout] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [layout] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level layout logging helpers


def log_metrics(metrics, verbose: bool = False) -> None:
    """
    Log estimated content metrics.

    Args:
        metrics: ContentMetrics from estimate()
        verbose: Also log every main-column block height
    """
    _log_debug(
        f"Estimated sidebar {metrics.sidebar_height:.0f}pt, main {metrics.main_height:.0f}pt "
        f"({metrics.fill_percentage}% of one page, {metrics.page_count} page(s))"
    )
    if verbose:
        for section in metrics.sections:
            breakable = " (breakable)" if section.can_break else ""
            _log_debug(f"  {section.name}: {section.height:.0f}pt{breakable}")


def log_layout_decision(decision) -> None:
    """
    Log the selected tier.

    Args:
        decision: LayoutDecision from decide_layout()
    """
    tier = decision.tier
    threshold = "unbounded" if tier.threshold is None else f"<= {tier.threshold:.0%}"
    _log_debug(
        f"Selected tier '{tier.name}' ({threshold}) at {decision.metrics.fill_percentage}% fill"
    )
    if not tier.configuration.use_sidebar:
        _log_debug("  Sidebar disabled, allowing multi-page flow")


def log_tier_config_loaded(config_path: Path, tier_names: list) -> None:
    """Log a successfully loaded tier override file."""
    _log_info(f"Loaded tier overrides from {config_path}")
    _log_debug(f"  Tiers: {', '.join(tier_names)}")


def log_tier_config_rejected(config_path: Path, reason: str) -> None:
    """Log a tier override file that failed validation."""
    _log_warning(f"Rejected tier overrides from {config_path}: {reason}")
