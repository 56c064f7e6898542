"""
Tier Table Resolution for Layout Selection

Builds the ordered compaction ladder used by the layout policy. The default
table lives in defaults.py; a YAML override file can retune any tier without
touching code. Overrides are merged per tier (later values override earlier
ones) and the result is validated against the tier invariants before use.

Override file shape (every key optional):

    compact:
      threshold: 1.10
      font_size:
        body: 8.75
    aggressive_compact:
      sidebar_width: 150

Examples:
    >>> tiers = load_layout_tiers()                        # defaults
    >>> tiers = load_layout_tiers(Path("tiers.yaml"))      # defaults + overrides
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from pagefit.contexts.rendering.defaults import get_default_tier_table
from pagefit.contexts.rendering.exceptions import InvalidTierConfigError
from pagefit.contexts.rendering.layout_data_structures import LayoutTier
from pagefit.contexts.rendering.logger import log_tier_config_loaded, log_tier_config_rejected

FONT_KEYS = ("body", "heading", "section_title", "name")
SPACING_KEYS = ("section_gap", "item_gap", "line_height_multiplier")


def build_tiers(rows: Sequence[Dict[str, Any]], config_path: Optional[Path] = None) -> Tuple[LayoutTier, ...]:
    """
    Convert tier table rows into validated LayoutTier records.

    Args:
        rows: Tier dicts in evaluation order (see defaults.DEFAULT_TIER_TABLE)
        config_path: Source file, for error messages only

    Returns:
        Tuple of tiers, in evaluation order

    Raises:
        InvalidTierConfigError: If a row is malformed or the ladder breaks an invariant
    """
    tiers = []
    for row in rows:
        try:
            tiers.append(LayoutTier.from_dict(row))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTierConfigError(
                f"Malformed tier definition: {e}",
                tier_name=row.get("name") if isinstance(row, dict) else None,
                config_path=config_path,
            ) from e

    validate_tiers(tiers, config_path=config_path)
    return tuple(tiers)


def _check_numeric(tier: LayoutTier, config_path: Optional[Path]) -> None:
    config = tier.configuration
    values = [getattr(config.font_size, key) for key in FONT_KEYS]
    values += [getattr(config.spacing, key) for key in SPACING_KEYS]
    values += [config.sidebar_width, config.margins.top, config.margins.bottom]
    values += [config.margins.left, config.margins.right]
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
            raise InvalidTierConfigError(
                f"Layout parameters must be non-negative numbers, got {value!r}",
                tier_name=tier.name,
                config_path=config_path,
            )


def validate_tiers(tiers: Sequence[LayoutTier], config_path: Optional[Path] = None) -> None:
    """
    Check that a tier ladder is usable by the layout policy.

    Rules:
    - At least one tier; names unique
    - Every tier but the last has a positive threshold, strictly increasing
    - The last tier is unbounded (threshold None) so selection always succeeds
    - While the sidebar is kept, font sizes, spacing and sidebar width never grow
    - Once the sidebar is disabled it stays disabled
    - The first sidebar-less tier keeps a body font at least as large as the
      tier before it

    Raises:
        InvalidTierConfigError: On the first rule violated
    """
    if not tiers:
        raise InvalidTierConfigError("Tier table is empty", config_path=config_path)

    names = [tier.name for tier in tiers]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise InvalidTierConfigError(
            f"Duplicate tier names: {duplicates}", config_path=config_path
        )

    for tier in tiers:
        _check_numeric(tier, config_path)

    *bounded, final = tiers
    if final.threshold is not None:
        raise InvalidTierConfigError(
            "Last tier must be unbounded (threshold: null)",
            tier_name=final.name,
            config_path=config_path,
        )

    previous_threshold = 0.0
    for tier in bounded:
        if tier.threshold is None or tier.threshold <= previous_threshold:
            raise InvalidTierConfigError(
                f"Thresholds must be positive and strictly increasing "
                f"(got {tier.threshold} after {previous_threshold})",
                tier_name=tier.name,
                config_path=config_path,
            )
        previous_threshold = tier.threshold

    for previous, current in zip(tiers, tiers[1:]):
        prev_config = previous.configuration
        config = current.configuration

        if config.use_sidebar and not prev_config.use_sidebar:
            raise InvalidTierConfigError(
                "Sidebar cannot be re-enabled after a tier disables it",
                tier_name=current.name,
                config_path=config_path,
            )

        if not config.use_sidebar:
            if prev_config.use_sidebar and config.font_size.body < prev_config.font_size.body:
                raise InvalidTierConfigError(
                    "Multi-page tier body font must not be smaller than the tier before it",
                    tier_name=current.name,
                    config_path=config_path,
                )
            continue

        grown = [
            f"font_size.{key}"
            for key in FONT_KEYS
            if getattr(config.font_size, key) > getattr(prev_config.font_size, key)
        ]
        grown += [
            f"spacing.{key}"
            for key in SPACING_KEYS
            if getattr(config.spacing, key) > getattr(prev_config.spacing, key)
        ]
        if config.sidebar_width > prev_config.sidebar_width:
            grown.append("sidebar_width")
        if grown:
            raise InvalidTierConfigError(
                f"Values grew relative to tier '{previous.name}': {', '.join(grown)}",
                tier_name=current.name,
                config_path=config_path,
            )


def merge_tier_overrides(
    rows: List[Dict[str, Any]], overrides: Dict[str, Any], config_path: Optional[Path] = None
) -> List[Dict[str, Any]]:
    """
    Merge per-tier overrides onto tier table rows.

    Unknown tier names and unknown keys are rejected rather than ignored.

    Args:
        rows: Base tier rows (not modified)
        overrides: Mapping of tier name -> partial tier dict

    Returns:
        New list of merged tier rows
    """
    known = [row["name"] for row in rows]
    unknown = [name for name in overrides if name not in known]
    if unknown:
        raise InvalidTierConfigError(
            f"Unknown tier(s) {unknown}. Available tiers: {known}", config_path=config_path
        )

    merged_rows = []
    for row in rows:
        name = row["name"]
        override = overrides.get(name) or {}
        if not isinstance(override, dict):
            raise InvalidTierConfigError(
                "Tier override must be a mapping", tier_name=name, config_path=config_path
            )

        base = OmegaConf.create({key: value for key, value in row.items() if key != "name"})
        OmegaConf.set_struct(base, True)
        try:
            merged = OmegaConf.merge(base, override)
        except OmegaConfBaseException as e:
            raise InvalidTierConfigError(
                f"Invalid override: {e}", tier_name=name, config_path=config_path
            ) from e

        merged_rows.append({"name": name, **OmegaConf.to_container(merged, resolve=True)})

    return merged_rows


def load_layout_tiers(config_path: Optional[Path] = None) -> Tuple[LayoutTier, ...]:
    """
    Load the tier ladder, optionally retuned by a YAML override file.

    Args:
        config_path: YAML file of per-tier overrides (None = defaults only)

    Returns:
        Validated tiers, in evaluation order

    Raises:
        InvalidTierConfigError: If the file is not valid YAML, is malformed, or the merged
            ladder is invalid
        FileNotFoundError: If config_path does not exist
    """
    rows = get_default_tier_table()
    if config_path is None:
        return build_tiers(rows)

    config_path = Path(config_path)
    try:
        overrides = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    except yaml.YAMLError as e:
        log_tier_config_rejected(config_path, "not valid YAML")
        raise InvalidTierConfigError(f"Invalid YAML: {e}", config_path=config_path) from e

    try:
        if not isinstance(overrides, dict):
            raise InvalidTierConfigError(
                "Tier override file must map tier names to overrides", config_path=config_path
            )
        tiers = build_tiers(merge_tier_overrides(rows, overrides, config_path), config_path)
    except InvalidTierConfigError as e:
        log_tier_config_rejected(config_path, e.message)
        raise

    log_tier_config_loaded(config_path, [tier.name for tier in tiers])
    return tiers
