"""
Layout policy selection for fixed-size CV pages.

Picks one tier from an ordered compaction ladder based on how much of a page
the estimated content fills:

    standard            fill <= 95%    base fonts and spacing
    compact             fill <= 115%   smaller fonts, tighter spacing, forced one page
    aggressive_compact  fill <= 140%   smaller again, narrower sidebar, forced one page
    multi_page          anything else  no sidebar, readable fonts, natural page flow

Tiers are evaluated in order and the first one whose threshold is satisfied
wins. Each tier is a complete parameter table, so retuning one tier never
changes another.
"""

from typing import Optional, Sequence

from pagefit.contexts.rendering.content_metrics import estimate
from pagefit.contexts.rendering.defaults import get_default_tier_table
from pagefit.contexts.rendering.layout_data_structures import (
    A4,
    ContentMetrics,
    LayoutConfiguration,
    LayoutDecision,
    LayoutTier,
    PageGeometry,
)
from pagefit.contexts.rendering.logger import log_layout_decision, log_metrics
from pagefit.contexts.rendering.tier_config import build_tiers

DEFAULT_TIERS = build_tiers(get_default_tier_table())


def select_tier(metrics: ContentMetrics, tiers: Sequence[LayoutTier] = DEFAULT_TIERS) -> LayoutTier:
    """
    Return the first tier whose threshold accepts the estimated height.

    Args:
        metrics: Estimated content metrics
        tiers: Ordered tier ladder; the last tier should be unbounded

    Returns:
        Selected tier (the last tier if none accepts)
    """
    for tier in tiers:
        if tier.accepts(metrics):
            return tier
    return tiers[-1]


def decide_layout(
    document,
    tiers: Sequence[LayoutTier] = DEFAULT_TIERS,
    geometry: PageGeometry = A4,
    metrics: Optional[ContentMetrics] = None,
) -> LayoutDecision:
    """
    Estimate a document and select its layout tier.

    Args:
        document: CVDocument or CV-data mapping
        tiers: Ordered tier ladder (default: DEFAULT_TIERS)
        geometry: Page geometry to estimate against (default: A4)
        metrics: Precomputed metrics for this document, to skip re-estimation

    Returns:
        LayoutDecision with the selected tier and the metrics behind it
    """
    if metrics is None:
        metrics = estimate(document, geometry)
    log_metrics(metrics)

    decision = LayoutDecision(tier=select_tier(metrics, tiers), metrics=metrics)
    log_layout_decision(decision)
    return decision


def select_layout(
    document,
    tiers: Sequence[LayoutTier] = DEFAULT_TIERS,
    geometry: PageGeometry = A4,
) -> LayoutConfiguration:
    """
    Select the layout configuration that best fits a document.

    Deterministic: the same document always yields an equal configuration. An
    empty document selects the standard tier.

    Args:
        document: CVDocument or CV-data mapping
        tiers: Ordered tier ladder (default: DEFAULT_TIERS)
        geometry: Page geometry to estimate against (default: A4)

    Returns:
        LayoutConfiguration for the renderer

    Example:
        >>> config = select_layout({"fullName": "Ada Lovelace"})
        >>> config.use_sidebar, config.force_one_page
        (True, False)
    """
    return decide_layout(document, tiers, geometry).configuration


def format_recommendation(decision: LayoutDecision) -> str:
    """
    Format a human-readable summary of a layout decision.

    Reporting only: the message follows the selected tier's configuration and
    never re-decides the layout.
    """
    metrics = decision.metrics
    config = decision.configuration
    fill = metrics.fill_percentage
    tier_label = decision.tier.name.replace("_", " ")

    if not config.compact_mode and metrics.page_count == 1:
        return (
            f"Content fits well on one page ({fill}% filled). "
            f"Layout is optimal ({tier_label} mode)."
        )

    if config.force_one_page and config.compact_mode:
        return (
            f"Content is {fill}% of page. "
            f"Using {tier_label} mode with smaller fonts to fit on one page."
        )

    if not config.use_sidebar:
        return (
            f"Content is extensive ({metrics.page_count} pages estimated, {fill}% of one page). "
            f"Switched to {tier_label} mode: full-width layout without sidebar for better "
            "multi-page flow."
        )

    return f"Layout optimized ({tier_label} mode). Page fill: {fill}%."


def get_layout_recommendation(
    document,
    tiers: Sequence[LayoutTier] = DEFAULT_TIERS,
    geometry: PageGeometry = A4,
) -> str:
    """Estimate, select and describe the layout of a document in one message."""
    return format_recommendation(decide_layout(document, tiers, geometry))


# Name used by the surrounding rendering pipeline
optimize_layout = select_layout
