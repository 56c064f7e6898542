"""
Rendering Context

Responsibilities:
- Estimates rendered content height per column and per main-column block
- Selects the layout tier (fonts, spacing, sidebar, margins) for the PDF renderer
- Loads and validates tier table overrides
- Formats layout recommendations for display

Owns: Content metrics, layout policy, tier configuration
Never: Draws the PDF or modifies document content
"""

from pagefit.contexts.rendering.content_metrics import (
    calculate_content_metrics,
    estimate,
    estimate_bullets_height,
    estimate_text_height,
)
from pagefit.contexts.rendering.exceptions import InvalidTierConfigError
from pagefit.contexts.rendering.layout_data_structures import (
    A4,
    LETTER,
    ContentMetrics,
    FontSizes,
    LayoutConfiguration,
    LayoutDecision,
    LayoutTier,
    Margins,
    PageGeometry,
    SectionHeight,
    Spacing,
)
from pagefit.contexts.rendering.layout_policy import (
    DEFAULT_TIERS,
    decide_layout,
    format_recommendation,
    get_layout_recommendation,
    optimize_layout,
    select_layout,
    select_tier,
)
from pagefit.contexts.rendering.tier_config import load_layout_tiers, validate_tiers

__all__ = [
    # Estimation
    "estimate",
    "calculate_content_metrics",
    "estimate_text_height",
    "estimate_bullets_height",
    # Selection
    "select_layout",
    "optimize_layout",
    "decide_layout",
    "select_tier",
    "format_recommendation",
    "get_layout_recommendation",
    "DEFAULT_TIERS",
    # Tier configuration
    "load_layout_tiers",
    "validate_tiers",
    "InvalidTierConfigError",
    # Data structure classes
    "A4",
    "LETTER",
    "PageGeometry",
    "ContentMetrics",
    "SectionHeight",
    "LayoutConfiguration",
    "LayoutDecision",
    "LayoutTier",
    "FontSizes",
    "Spacing",
    "Margins",
]
