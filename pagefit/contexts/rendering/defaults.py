"""
Default values for layout estimation and selection.

Provides shared defaults used by:
- content_metrics.py (page geometry, per-element line heights, entry margins)
- layout_policy.py (the ordered tier table)
- tier_config.py (base table that YAML overrides are merged onto)

All heights and widths are in PostScript points (1/72 inch).
"""

from typing import Any, Dict, List

# A4 portrait
A4_WIDTH = 595.28
A4_HEIGHT = 841.89

# US Letter portrait
LETTER_WIDTH = 612.0
LETTER_HEIGHT = 792.0

MARGIN_TOP = 30
MARGIN_BOTTOM = 30
SIDEBAR_WIDTH = 170
MAIN_PADDING = 47  # 22 left + 25 right
SIDEBAR_PADDING = 30

# Single average glyph width for every font size and tier (approximates 9pt Helvetica)
AVERAGE_GLYPH_WIDTH = 5
BULLET_INDENT = 8
BULLET_LIST_MARGIN = 5
HEADLINE_MARGIN = 20
SKILL_TAGS_PER_ROW = 2

# Estimated line heights per visual element
LINE_HEIGHTS = {
    "name": 20,  # 16pt font + spacing
    "headline": 12,  # 8pt font + spacing
    "section_title": 18,  # 10pt font + margin
    "item_title": 14,  # 10pt font + company + spacing
    "bullet_item": 16,  # 8pt font + inter-bullet spacing
    "text": 12,  # 9pt font + line height
    "sidebar_section": 25,  # title + spacing
    "skill_tag": 14,  # tag height + margin
    "language_row": 12,
    "contact_item": 18,  # label + value + spacing
}

# Vertical gap after each entry, by main-column section
ENTRY_MARGINS = {
    "experience": 12,
    "education": 12,
    "projects": 10,
    "certifications": 10,
}

HOBBY_SEPARATOR = " • "

BASE_MARGINS = {"top": 30, "bottom": 30, "left": 22, "right": 25}

# Ordered compaction ladder. The first tier whose threshold (ratio of estimated
# height to usable page height) is satisfied wins; threshold None always matches.
DEFAULT_TIER_TABLE: List[Dict[str, Any]] = [
    {
        "name": "standard",
        "threshold": 0.95,
        "use_sidebar": True,
        "font_size": {"body": 9, "heading": 10, "section_title": 10, "name": 16},
        "spacing": {"section_gap": 14, "item_gap": 12, "line_height_multiplier": 1.4},
        "sidebar_width": SIDEBAR_WIDTH,
        "margins": dict(BASE_MARGINS),
        "force_one_page": False,
        "compact_mode": False,
    },
    {
        "name": "compact",
        "threshold": 1.15,
        "use_sidebar": True,
        "font_size": {"body": 8.5, "heading": 9.5, "section_title": 9.5, "name": 15},
        "spacing": {"section_gap": 12, "item_gap": 10, "line_height_multiplier": 1.35},
        "sidebar_width": SIDEBAR_WIDTH,
        "margins": dict(BASE_MARGINS),
        "force_one_page": True,
        "compact_mode": True,
    },
    {
        "name": "aggressive_compact",
        "threshold": 1.4,
        "use_sidebar": True,
        "font_size": {"body": 8, "heading": 9, "section_title": 9, "name": 14},
        "spacing": {"section_gap": 10, "item_gap": 8, "line_height_multiplier": 1.3},
        "sidebar_width": 155,
        "margins": dict(BASE_MARGINS),
        "force_one_page": True,
        "compact_mode": True,
    },
    {
        # Content far beyond one page flows over several pages at a readable size
        "name": "multi_page",
        "threshold": None,
        "use_sidebar": False,
        "font_size": {"body": 9, "heading": 10, "section_title": 10, "name": 18},
        "spacing": {"section_gap": 12, "item_gap": 10, "line_height_multiplier": 1.4},
        "sidebar_width": 0,
        "margins": {"top": 35, "bottom": 35, "left": 40, "right": 40},
        "force_one_page": False,
        "compact_mode": True,
    },
]


def get_default_tier_table() -> List[Dict[str, Any]]:
    """
    Get a deep copy of the default tier table as plain dicts.

    Used by tier_config as the base that YAML overrides are merged onto.

    Returns:
        List of tier dicts, in evaluation order
    """
    return [
        {
            key: dict(value) if isinstance(value, dict) else value
            for key, value in tier.items()
        }
        for tier in DEFAULT_TIER_TABLE
    ]
