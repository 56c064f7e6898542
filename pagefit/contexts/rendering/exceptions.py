"""Custom exceptions for the rendering context."""

from pathlib import Path
from typing import Optional


class InvalidTierConfigError(ValueError):
    """
    Exception raised when a tier table is malformed or breaks the tier invariants.

    Attributes:
        message: Error description
        tier_name: Name of the offending tier, when one can be singled out
        config_path: Override file the table was loaded from, if any
    """

    def __init__(
        self,
        message: str,
        tier_name: Optional[str] = None,
        config_path: Optional[Path] = None,
    ):
        self.message = message
        self.tier_name = tier_name
        self.config_path = config_path

        parts = [message]
        if tier_name:
            parts.append(f"Tier: {tier_name}")
        if config_path:
            parts.append(f"Config: {config_path}")

        super().__init__("\n".join(parts))
