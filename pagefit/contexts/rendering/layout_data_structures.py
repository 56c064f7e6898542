"""
Layout Data Structures

Defines the immutable values exchanged between the metrics estimator, the
layout policy selector and the external PDF renderer: page geometry, content
metrics, layout configurations and the tiers that produce them.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from pagefit.contexts.rendering.defaults import (
    A4_HEIGHT,
    A4_WIDTH,
    LETTER_HEIGHT,
    LETTER_WIDTH,
    MAIN_PADDING,
    MARGIN_BOTTOM,
    MARGIN_TOP,
    SIDEBAR_PADDING,
    SIDEBAR_WIDTH,
)


@dataclass(frozen=True)
class PageGeometry:
    """
    Fixed page dimensions that estimation is computed against.

    Attributes:
        width: Page width
        height: Page height
        margin_top: Top margin excluded from usable height
        margin_bottom: Bottom margin excluded from usable height
        sidebar_width: Width of the narrow sidebar column
        main_padding: Horizontal padding of the main column (left + right)
        sidebar_padding: Horizontal padding inside the sidebar
    """

    width: float = A4_WIDTH
    height: float = A4_HEIGHT
    margin_top: float = MARGIN_TOP
    margin_bottom: float = MARGIN_BOTTOM
    sidebar_width: float = SIDEBAR_WIDTH
    main_padding: float = MAIN_PADDING
    sidebar_padding: float = SIDEBAR_PADDING

    @property
    def usable_height(self) -> float:
        """Page height minus top and bottom margins."""
        return self.height - self.margin_top - self.margin_bottom

    @property
    def main_width(self) -> float:
        return self.width - self.sidebar_width - self.main_padding

    @property
    def sidebar_content_width(self) -> float:
        return self.sidebar_width - self.sidebar_padding


A4 = PageGeometry()
LETTER = PageGeometry(width=LETTER_WIDTH, height=LETTER_HEIGHT)


@dataclass(frozen=True)
class SectionHeight:
    """
    Estimated height of one named main-column block.

    Attributes:
        name: Block identifier (e.g., "profile", "exp-Acme", "certifications")
        height: Estimated height in points
        can_break: Whether the block may be split across a page boundary
    """

    name: str
    height: float
    can_break: bool = False


@dataclass(frozen=True)
class ContentMetrics:
    """
    Estimated rendered size of a CV document.

    Attributes:
        total_height: Height of the taller of the two columns
        sidebar_height: Estimated sidebar column height
        main_height: Estimated main column height
        page_count: Estimated page count, never below 1
        sections: Per-block heights of the main column, in render order
        usable_height: Usable page height the estimate was computed against
    """

    total_height: float
    sidebar_height: float
    main_height: float
    page_count: int
    sections: Tuple[SectionHeight, ...] = ()
    usable_height: float = A4.usable_height

    @property
    def fill_ratio(self) -> float:
        """Estimated height as a fraction of one page's usable height."""
        return self.total_height / self.usable_height

    @property
    def fill_percentage(self) -> int:
        """Fill ratio as a whole percentage, rounded half up."""
        return int(self.fill_ratio * 100 + 0.5)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FontSizes:
    body: float
    heading: float
    section_title: float
    name: float


@dataclass(frozen=True)
class Spacing:
    section_gap: float
    item_gap: float
    line_height_multiplier: float


@dataclass(frozen=True)
class Margins:
    top: float
    bottom: float
    left: float
    right: float


@dataclass(frozen=True)
class LayoutConfiguration:
    """
    Concrete layout parameters handed to the PDF renderer.

    Attributes:
        use_sidebar: Two-column layout with sidebar (False = full-width single column)
        font_size: Font sizes for body, heading, section title and name
        spacing: Section gap, item gap and line-height multiplier
        sidebar_width: Sidebar column width (0 when the sidebar is disabled)
        margins: Page margins
        force_one_page: Renderer should suppress page breaks
        compact_mode: Any compaction is in effect
    """

    use_sidebar: bool
    font_size: FontSizes
    spacing: Spacing
    sidebar_width: float
    margins: Margins
    force_one_page: bool
    compact_mode: bool

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfiguration":
        """Build a configuration from a snake_case tier table row."""
        return cls(
            use_sidebar=bool(data["use_sidebar"]),
            font_size=FontSizes(**data["font_size"]),
            spacing=Spacing(**data["spacing"]),
            sidebar_width=data["sidebar_width"],
            margins=Margins(**data["margins"]),
            force_one_page=bool(data["force_one_page"]),
            compact_mode=bool(data["compact_mode"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the renderer's camelCase settings shape.

        Example:
            >>> config.to_dict()["fontSize"]["sectionTitle"]
            10
        """
        return {
            "useSidebar": self.use_sidebar,
            "fontSize": {
                "body": self.font_size.body,
                "heading": self.font_size.heading,
                "sectionTitle": self.font_size.section_title,
                "name": self.font_size.name,
            },
            "spacing": {
                "sectionGap": self.spacing.section_gap,
                "itemGap": self.spacing.item_gap,
                "lineHeight": self.spacing.line_height_multiplier,
            },
            "sidebarWidth": self.sidebar_width,
            "margins": asdict(self.margins),
            "forceOnePage": self.force_one_page,
            "compactMode": self.compact_mode,
        }


@dataclass(frozen=True)
class LayoutTier:
    """
    One rung of the compaction ladder.

    Attributes:
        name: Tier identifier (e.g., "standard", "compact")
        threshold: Maximum fill ratio this tier accepts; None accepts anything
        configuration: Complete parameter table applied when selected
    """

    name: str
    threshold: Optional[float]
    configuration: LayoutConfiguration

    def accepts(self, metrics: ContentMetrics) -> bool:
        """True if the estimated height fits within this tier's threshold."""
        if self.threshold is None:
            return True
        return metrics.total_height <= metrics.usable_height * self.threshold

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutTier":
        threshold = data.get("threshold")
        return cls(
            name=data["name"],
            threshold=None if threshold is None else float(threshold),
            configuration=LayoutConfiguration.from_dict(data),
        )


@dataclass(frozen=True)
class LayoutDecision:
    """
    Result of layout selection.

    Attributes:
        tier: Selected tier
        metrics: Metrics the decision was based on
    """

    tier: LayoutTier
    metrics: ContentMetrics

    @property
    def configuration(self) -> LayoutConfiguration:
        return self.tier.configuration
