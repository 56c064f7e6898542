"""
Content metrics estimation for fixed-size CV pages.

Estimates the rendered height of a CV without rendering it. Every visual
element gets a fixed line height; free text is converted to a line count from
its character count and an estimated number of characters per line.

Sizing model:
    chars_per_line = floor(column_width / AVERAGE_GLYPH_WIDTH)
    lines          = ceil(len(text) / chars_per_line)
    height         = lines * line_height

A single average glyph width is used whatever font size the layout policy later
picks. Downstream rendering tolerances were tuned against this approximation,
so it is kept as is.

Region split:
    Sidebar: name, headline, contact rows, skill tags (2 per row), languages, hobbies
    Main:    summary, experience, education, projects, certifications (in that order)

The overall height is that of the taller column, since both columns share the
page.
"""

import math
from typing import List, Optional, Sequence, Tuple

from pagefit.contexts.rendering.defaults import (
    AVERAGE_GLYPH_WIDTH,
    BULLET_INDENT,
    BULLET_LIST_MARGIN,
    ENTRY_MARGINS,
    HEADLINE_MARGIN,
    HOBBY_SEPARATOR,
    LINE_HEIGHTS,
    SKILL_TAGS_PER_ROW,
)
from pagefit.contexts.rendering.layout_data_structures import (
    A4,
    ContentMetrics,
    PageGeometry,
    SectionHeight,
)
from pagefit.contexts.templating.cv_data_structure import CVDocument, Entry
from pagefit.utils.text_processing import clean_text_list

# Section record prefixes for per-entry main-column blocks
SECTION_PREFIXES = {
    "experience": "exp",
    "education": "edu",
    "projects": "proj",
}


def estimate_text_height(text: Optional[str], line_height: float, max_width: float) -> float:
    """
    Estimate the height of a wrapped block of text.

    Args:
        text: Text to measure (None or empty yields 0)
        line_height: Height of one rendered line
        max_width: Available column width

    Returns:
        Number of estimated lines times line_height

    Example:
        >>> estimate_text_height("x" * 150, 12, 378.28)  # 75 chars per line
        24
    """
    if not text:
        return 0
    chars_per_line = max(1, math.floor(max_width / AVERAGE_GLYPH_WIDTH))
    return math.ceil(len(text) / chars_per_line) * line_height


def estimate_bullets_height(bullets: Optional[Sequence[str]], max_width: float) -> float:
    """
    Estimate the height of a bulleted list.

    Each bullet wraps at max_width minus the bullet indent. A non-empty list
    also carries one list-level top margin. Non-string entries are ignored.

    Args:
        bullets: Bullet strings
        max_width: Width of the column the list is rendered in

    Returns:
        Sum of bullet heights plus the list margin, or 0 for an empty list
    """
    items = clean_text_list([bullets] if isinstance(bullets, str) else bullets)
    if not items:
        return 0
    bullet_width = max_width - BULLET_INDENT
    total = sum(
        estimate_text_height(item, LINE_HEIGHTS["bullet_item"], bullet_width) for item in items
    )
    return total + BULLET_LIST_MARGIN


def estimate_entry_height(entry: Entry, max_width: float) -> float:
    """Item title line, optional location line and bullet list of one entry."""
    height = LINE_HEIGHTS["item_title"]
    if entry.location:
        height += LINE_HEIGHTS["text"]
    return height + estimate_bullets_height(entry.bullets, max_width)


def estimate_sidebar_height(document: CVDocument, geometry: PageGeometry = A4) -> float:
    """
    Estimate the sidebar column height.

    Only the number of contact fields, skills and languages matters, not their
    length. Hobbies are rendered as one paragraph joined with bullets.
    """
    height = 0

    if document.identity.name:
        height += LINE_HEIGHTS["name"]
    if document.identity.headline:
        height += LINE_HEIGHTS["headline"] + HEADLINE_MARGIN

    contact_count = document.contact.present_count
    if contact_count:
        height += LINE_HEIGHTS["sidebar_section"] + contact_count * LINE_HEIGHTS["contact_item"]

    if document.skills:
        skill_rows = math.ceil(len(document.skills) / SKILL_TAGS_PER_ROW)
        height += LINE_HEIGHTS["sidebar_section"] + skill_rows * LINE_HEIGHTS["skill_tag"]

    if document.languages:
        height += (
            LINE_HEIGHTS["sidebar_section"]
            + len(document.languages) * LINE_HEIGHTS["language_row"]
        )

    if document.hobbies:
        height += LINE_HEIGHTS["sidebar_section"] + estimate_text_height(
            HOBBY_SEPARATOR.join(document.hobbies),
            LINE_HEIGHTS["text"],
            geometry.sidebar_content_width,
        )

    return height


def _entry_section_name(prefix: str, entry: Entry, index: int) -> str:
    return f"{prefix}-{entry.organization or entry.title or index + 1}"


def estimate_main_column(
    document: CVDocument, geometry: PageGeometry = A4
) -> Tuple[float, List[SectionHeight]]:
    """
    Estimate the main column height and its per-block heights.

    Each experience, education and project entry is recorded as its own block so
    callers can make finer-grained pagination decisions. Certifications are
    recorded as a single trailing block that may break across pages.

    Returns:
        (main_height, sections) where main_height also includes section titles
        and inter-entry margins that are not part of any recorded block
    """
    main_width = geometry.main_width
    sections: List[SectionHeight] = []
    height = 0

    if document.summary:
        summary_height = LINE_HEIGHTS["section_title"] + estimate_text_height(
            document.summary, LINE_HEIGHTS["text"], main_width
        )
        sections.append(SectionHeight(name="profile", height=summary_height))
        height += summary_height

    for kind, prefix in SECTION_PREFIXES.items():
        entries = getattr(document, kind)
        if not entries:
            continue
        section_height = LINE_HEIGHTS["section_title"]
        for index, entry in enumerate(entries):
            item_height = estimate_entry_height(entry, main_width)
            sections.append(
                SectionHeight(name=_entry_section_name(prefix, entry, index), height=item_height)
            )
            section_height += item_height + ENTRY_MARGINS[kind]
        height += section_height

    if document.certifications:
        certifications_height = LINE_HEIGHTS["section_title"]
        for entry in document.certifications:
            certifications_height += (
                estimate_entry_height(entry, main_width) + ENTRY_MARGINS["certifications"]
            )
        sections.append(
            SectionHeight(name="certifications", height=certifications_height, can_break=True)
        )
        height += certifications_height

    return height, sections


def estimate(document, geometry: PageGeometry = A4) -> ContentMetrics:
    """
    Estimate the rendered size of a CV document.

    Pure function of its inputs: the same document always yields equal metrics.
    Absent sections contribute nothing, so an empty document has zero heights
    and a page count of 1.

    Args:
        document: CVDocument or CV-data mapping
        geometry: Page geometry to estimate against (default: A4)

    Returns:
        ContentMetrics with region heights, page count and main-column blocks

    Raises:
        InvalidCVStructureError: If document is neither a CVDocument nor a mapping

    Example:
        >>> metrics = estimate({"fullName": "Ada Lovelace", "summary": "..."})
        >>> metrics.page_count
        1
    """
    document = CVDocument.coerce(document)

    sidebar_height = estimate_sidebar_height(document, geometry)
    main_height, sections = estimate_main_column(document, geometry)

    usable_height = geometry.usable_height
    total_height = max(sidebar_height, main_height)
    page_count = max(1, math.ceil(total_height / usable_height))

    return ContentMetrics(
        total_height=total_height,
        sidebar_height=sidebar_height,
        main_height=main_height,
        page_count=page_count,
        sections=tuple(sections),
        usable_height=usable_height,
    )


# Name used by the surrounding rendering pipeline
calculate_content_metrics = estimate
