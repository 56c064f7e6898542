"""
Integration tests for end-to-end layout fitting.
Tests: CV-data YAML fixture → CVDocument → ContentMetrics → selected layout.
"""

import copy

import pytest

from pagefit.contexts.rendering import (
    LETTER,
    decide_layout,
    estimate,
    get_layout_recommendation,
    load_layout_tiers,
    select_layout,
)
from pagefit.contexts.templating import CVDocument


@pytest.mark.integration
def test_compact_scenario_metrics(compact_cv):
    """Fixture CV: 600-char summary, 4 jobs x 4 bullets averaging 90 chars, 10 flat skills."""
    document = CVDocument.from_dict(compact_cv)
    assert len(document.summary) == 600
    assert len(document.experience) == 4
    assert all(len(entry.bullets) == 4 for entry in document.experience)
    bullets = [bullet for entry in document.experience for bullet in entry.bullets]
    assert sum(len(bullet) for bullet in bullets) / len(bullets) == 90
    assert len(document.skills) == 10

    metrics = estimate(document)

    # summary 18 + 8 * 12; section title 18; each job 14 + (4 * 2 * 16 + 5) + 12
    assert metrics.main_height == 114 + 18 + 4 * 159
    # name 20, headline 32, contact 25 + 4 * 18, skills 25 + 5 * 14
    assert metrics.sidebar_height == 244
    assert metrics.page_count == 1
    assert [s.name for s in metrics.sections] == [
        "profile",
        "exp-Orbital Guidance Systems",
        "exp-Higher Order Software",
        "exp-Lincoln Laboratory",
        "exp-Meteorology Department",
    ]


@pytest.mark.integration
def test_compact_scenario_selects_compact_tier(compact_cv):
    """A CV that nearly fills the page is compacted onto one page."""
    decision = decide_layout(compact_cv)

    assert decision.tier.name == "compact"

    config = decision.configuration
    assert config.force_one_page
    assert config.compact_mode
    assert config.use_sidebar
    assert config.font_size.body == 8.5


@pytest.mark.integration
def test_compact_scenario_recommendation(compact_cv):
    """The recommendation reports the fill percentage and compact mode."""
    assert get_layout_recommendation(compact_cv) == (
        "Content is 98% of page. Using compact mode with smaller fonts to fit on one page."
    )


@pytest.mark.integration
def test_standard_scenario_fits_one_page(standard_cv):
    """A short CV keeps the standard layout and reports a comfortable fit."""
    decision = decide_layout(standard_cv)

    assert decision.tier.name == "standard"
    assert decision.metrics.page_count == 1
    assert not decision.configuration.force_one_page
    assert get_layout_recommendation(standard_cv).startswith("Content fits well on one page")


@pytest.mark.integration
def test_standard_scenario_parses_loose_shapes(standard_cv):
    """Categorized skills, social links and language rows are all counted."""
    document = CVDocument.from_dict(standard_cv)
    assert document.identity.headline == "Software Engineer"
    assert document.contact.present_count == 3
    assert document.skills == ("COBOL", "FLOW-MATIC", "Assembly", "UNIVAC I", "Mark I")
    assert document.languages == ("English",)
    assert document.education[0].bullets == ()


@pytest.mark.integration
def test_long_cv_falls_back_to_multi_page(compact_cv):
    """Doubling the work history pushes the CV past 140% and drops the sidebar."""
    long_cv = copy.deepcopy(compact_cv)
    long_cv["experience"] = long_cv["experience"] * 2

    decision = decide_layout(long_cv)

    assert decision.tier.name == "multi_page"
    assert decision.metrics.page_count == 2
    config = decision.configuration
    assert not config.use_sidebar
    assert not config.force_one_page
    assert "pages estimated" in get_layout_recommendation(long_cv)


@pytest.mark.integration
def test_letter_page_fills_further(compact_cv):
    """The same CV fills more of a shorter US Letter page."""
    a4 = decide_layout(compact_cv)
    letter = decide_layout(compact_cv, geometry=LETTER)

    # 768pt is 98% of an A4 page and 105% of a Letter page
    assert (a4.metrics.fill_percentage, a4.metrics.page_count) == (98, 1)
    assert (letter.metrics.fill_percentage, letter.metrics.page_count) == (105, 2)
    assert a4.tier.name == letter.tier.name == "compact"


@pytest.mark.integration
def test_synthetic_cv_selects_compaction():
    """Bare summary, bullets and skills of the fixture's size land on a compaction tier."""
    job = {"company": "Acme", "achievements": ["y" * 90] * 4}
    data = {
        "summary": "x" * 600,
        "experience": [dict(job) for _ in range(4)],
        "skills": [f"Skill {i}" for i in range(10)],
    }

    decision = decide_layout(data)

    assert decision.metrics.main_height == 768
    assert decision.tier.name in ("compact", "aggressive_compact")


@pytest.mark.integration
def test_retuned_tiers_change_selection(compact_cv, tmp_path):
    """Raising the standard threshold via overrides keeps the fixture on the standard tier."""
    config_path = tmp_path / "tiers.yaml"
    config_path.write_text("standard:\n  threshold: 1.12\n", encoding="utf-8")

    tiers = load_layout_tiers(config_path)
    config = select_layout(compact_cv, tiers=tiers)

    assert config == tiers[0].configuration
    assert not config.force_one_page
