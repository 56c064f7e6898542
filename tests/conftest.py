"""Shared fixtures for pagefit tests."""

from pathlib import Path

import pytest
from omegaconf import OmegaConf

FIXTURES_PATH = Path(__file__).parent / "fixtures"


def load_cv_fixture(name: str) -> dict:
    """Load a CV-data YAML fixture as a plain dict."""
    return OmegaConf.to_container(OmegaConf.load(FIXTURES_PATH / name), resolve=False)


@pytest.fixture
def compact_cv() -> dict:
    """CV that nearly fills one A4 page (98%), enough to select the compact tier."""
    return load_cv_fixture("compact_scenario.yaml")


@pytest.fixture
def standard_cv() -> dict:
    """CV that fits comfortably on one A4 page."""
    return load_cv_fixture("standard_scenario.yaml")
