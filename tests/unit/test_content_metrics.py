"""Unit tests for content metrics estimation."""

import copy

import pytest

from pagefit.contexts.rendering import (
    A4,
    ContentMetrics,
    LETTER,
    estimate,
    estimate_bullets_height,
    estimate_text_height,
)
from pagefit.contexts.rendering.content_metrics import estimate_sidebar_height
from pagefit.contexts.templating import CVDocument

# A4 main column: 595.28 - 170 - 47 = 378.28pt -> 75 chars per line
MAIN_WIDTH = A4.main_width
LONG_BULLET = "Shipped a reporting service that cut monthly close from nine days to three days overall."


# =============================================================================
# Text and bullet estimation
# =============================================================================


@pytest.mark.unit
def test_text_height_counts_wrapped_lines():
    """Line count is ceil(chars / chars_per_line)."""
    assert estimate_text_height("x" * 75, 12, MAIN_WIDTH) == 12
    assert estimate_text_height("x" * 76, 12, MAIN_WIDTH) == 24
    assert estimate_text_height("x" * 150, 12, MAIN_WIDTH) == 24
    assert estimate_text_height("x" * 151, 12, MAIN_WIDTH) == 36


@pytest.mark.unit
@pytest.mark.parametrize("text", [None, ""])
def test_text_height_empty(text):
    """Absent text has no height."""
    assert estimate_text_height(text, 12, MAIN_WIDTH) == 0


@pytest.mark.unit
def test_bullets_height_adds_list_margin():
    """Bullets wrap at the column width minus indent and carry one list margin."""
    # Bullet width 370.28pt -> 74 chars per line
    assert estimate_bullets_height(["x" * 74], MAIN_WIDTH) == 16 + 5
    assert estimate_bullets_height(["x" * 75], MAIN_WIDTH) == 32 + 5
    assert estimate_bullets_height(["x" * 74, "y" * 10], MAIN_WIDTH) == 32 + 5


@pytest.mark.unit
@pytest.mark.parametrize("bullets", [None, [], (), [None, 3, ""]])
def test_bullets_height_empty(bullets):
    """Empty or all-invalid bullet lists have no height, margin included."""
    assert estimate_bullets_height(bullets, MAIN_WIDTH) == 0


@pytest.mark.unit
def test_bullets_height_single_string():
    """A bare string is measured as one bullet."""
    assert estimate_bullets_height("x" * 74, MAIN_WIDTH) == 21


# =============================================================================
# Document estimation
# =============================================================================


@pytest.mark.unit
def test_empty_document_baseline():
    """An all-absent document has zero heights and one page."""
    metrics = estimate({})
    assert metrics.total_height == 0
    assert metrics.sidebar_height == 0
    assert metrics.main_height == 0
    assert metrics.page_count == 1
    assert metrics.sections == ()


@pytest.mark.unit
def test_estimate_accepts_document_or_mapping():
    """Mappings and parsed documents give the same metrics."""
    data = {"fullName": "Ada", "summary": "Analyst " * 20}
    assert estimate(data) == estimate(CVDocument.from_dict(data))


@pytest.mark.unit
def test_summary_section():
    """Summary is recorded as the 'profile' block: section title plus text."""
    metrics = estimate({"summary": "x" * 150})
    assert metrics.main_height == 18 + 24
    assert [(s.name, s.height, s.can_break) for s in metrics.sections] == [("profile", 42, False)]


@pytest.mark.unit
def test_experience_entries_recorded_individually():
    """Each experience entry is its own block; section title and margins are not."""
    metrics = estimate(
        {
            "experience": [
                {"company": "Acme", "location": "Paris", "achievements": [LONG_BULLET]},
                {"company": "Globex", "achievements": []},
            ]
        }
    )
    # Acme: title 14 + location 12 + bullets (32 + 5); Globex: title only
    assert [(s.name, s.height) for s in metrics.sections] == [("exp-Acme", 63), ("exp-Globex", 14)]
    assert metrics.main_height == 18 + (63 + 12) + (14 + 12)


@pytest.mark.unit
def test_education_has_experience_shape():
    """Education entries are measured like experience entries."""
    experience = estimate({"experience": [{"company": "Oxford", "location": "UK", "achievements": ["x"]}]})
    education = estimate({"education": [{"institution": "Oxford", "location": "UK", "achievements": ["x"]}]})
    assert experience.main_height == education.main_height
    assert education.sections[0].name == "edu-Oxford"


@pytest.mark.unit
def test_main_column_order_and_breakability():
    """Blocks follow summary, experience, education, projects, certifications order."""
    metrics = estimate(
        {
            "certifications": [{"name": "CKA"}, {"name": "PMP"}],
            "projects": [{"title": "Compiler"}],
            "education": [{"institution": "MIT"}],
            "experience": [{"company": "Acme"}],
            "summary": "Engineer",
        }
    )
    assert [s.name for s in metrics.sections] == [
        "profile",
        "exp-Acme",
        "edu-MIT",
        "proj-Compiler",
        "certifications",
    ]
    assert [s.can_break for s in metrics.sections] == [False, False, False, False, True]
    # Certifications: section title + 2 x (item title 14 + margin 10)
    assert metrics.sections[-1].height == 18 + 2 * 24


@pytest.mark.unit
def test_unnamed_entries_fall_back_to_title_then_position():
    """Block names use organization, then title, then the 1-based entry index."""
    metrics = estimate({"experience": [{"title": "Analyst"}, {}]})
    assert [s.name for s in metrics.sections] == ["exp-Analyst", "exp-2"]


@pytest.mark.unit
def test_sidebar_components():
    """Sidebar adds identity, contact rows, skill rows, languages and hobbies."""
    document = CVDocument.from_dict(
        {
            "fullName": "Ada",
            "title": "Analyst",
            "contact": {"email": "a@example.com", "phone": "1"},
            "skills": ["A", "B", "C"],
            "languages": ["English"],
            "hobbies": ["Chess", "Poetry"],
        }
    )
    expected = (
        20  # name
        + 12 + 20  # headline + margin
        + 25 + 2 * 18  # contact header + rows
        + 25 + 2 * 14  # skills header + ceil(3 / 2) rows
        + 25 + 12  # languages header + row
        + 25 + 12  # hobbies header + "Chess • Poetry" on one line
    )
    assert estimate_sidebar_height(document) == expected


@pytest.mark.unit
def test_contact_length_does_not_matter():
    """Contact height depends on field count, not content length."""
    short = estimate({"contact": {"email": "a@b.c"}})
    long = estimate({"contact": {"email": "a" * 200 + "@example.com"}})
    assert short.sidebar_height == long.sidebar_height == 25 + 18


@pytest.mark.unit
def test_skills_shape_equivalence():
    """Flat and categorized skills with the same count give the same sidebar height."""
    flat = estimate({"skills": ["A", "B", "C", "D"]})
    categorized = estimate({"skills": {"technical": ["A", "B"], "tools": ["C", "D"]}})
    reordered = estimate({"skills": {"tools": ["D", "C"], "technical": ["B", "A"]}})
    assert flat.sidebar_height == categorized.sidebar_height == reordered.sidebar_height
    assert flat.sidebar_height == 25 + 2 * 14


@pytest.mark.unit
def test_unrecognized_skills_shape_is_empty():
    """Skills that are neither list nor mapping contribute nothing."""
    assert estimate({"skills": 12}).sidebar_height == 0


@pytest.mark.unit
def test_total_is_taller_column():
    """Total height is the taller of the two columns."""
    sidebar_heavy = estimate({"skills": [f"S{i}" for i in range(40)], "summary": "x"})
    assert sidebar_heavy.total_height == sidebar_heavy.sidebar_height > sidebar_heavy.main_height

    main_heavy = estimate({"fullName": "Ada", "summary": "x" * 2000})
    assert main_heavy.total_height == main_heavy.main_height > main_heavy.sidebar_height


@pytest.mark.unit
def test_page_count_from_usable_height():
    """page_count = ceil(total / usable height)."""
    # 18 + 12 * 65 = 798pt > 781.89pt usable
    metrics = estimate({"summary": "x" * 75 * 65})
    assert metrics.total_height == 798
    assert metrics.page_count == 2
    assert metrics.usable_height == pytest.approx(781.89)


@pytest.mark.unit
def test_letter_page_is_shorter():
    """The same content fills more of a US Letter page than of an A4 page."""
    data = {"summary": "x" * 75 * 40}
    a4 = estimate(data, A4)
    letter = estimate(data, LETTER)
    assert letter.usable_height == 732
    assert letter.fill_ratio > a4.fill_ratio


@pytest.mark.unit
def test_fill_percentage_rounds_half_up():
    """fill_percentage rounds .5 upward."""
    metrics = ContentMetrics(
        total_height=12.5, sidebar_height=0, main_height=12.5, page_count=1, usable_height=100
    )
    assert metrics.fill_percentage == 13
    assert estimate({"summary": "x" * 75}).fill_percentage == 4  # 30 / 781.89


# =============================================================================
# Properties
# =============================================================================


@pytest.mark.unit
def test_estimate_is_idempotent(compact_cv):
    """Estimating the same document twice gives equal metrics."""
    assert estimate(compact_cv) == estimate(compact_cv)


@pytest.mark.unit
@pytest.mark.parametrize(
    "section, key",
    [
        ("experience", "achievements"),
        ("education", "achievements"),
        ("projects", "content"),
        ("certifications", "content"),
    ],
)
def test_adding_bullet_increases_height(compact_cv, section, key):
    """Appending a non-empty bullet to any main-column section strictly increases total height."""
    without_bullet = copy.deepcopy(compact_cv)
    without_bullet.setdefault(section, [{"title": "Entry"}])

    with_bullet = copy.deepcopy(without_bullet)
    with_bullet[section][0].setdefault(key, []).append(LONG_BULLET)

    assert estimate(with_bullet).total_height > estimate(without_bullet).total_height


@pytest.mark.unit
def test_adding_bullet_under_taller_sidebar(compact_cv):
    """
    With the sidebar as the taller column, a new bullet grows the main column only.

    Total height is the taller column, so it holds rather than grows here
    (see "Monotonicity" in DESIGN.md).
    """
    without_bullet = copy.deepcopy(compact_cv)
    without_bullet["skills"] = [f"Skill {i}" for i in range(120)]

    with_bullet = copy.deepcopy(without_bullet)
    with_bullet["experience"][0]["achievements"].append(LONG_BULLET)

    before = estimate(without_bullet)
    after = estimate(with_bullet)
    assert before.sidebar_height > after.main_height
    assert after.main_height > before.main_height
    assert after.total_height >= before.total_height
    assert after.total_height == before.total_height == before.sidebar_height


@pytest.mark.unit
def test_adding_empty_bullet_does_not_decrease_height(compact_cv):
    """An empty bullet never lowers the estimate."""
    baseline = estimate(compact_cv)
    extended = copy.deepcopy(compact_cv)
    extended["experience"][0]["achievements"].append("")
    assert estimate(extended).total_height >= baseline.total_height


MALFORMED_DOCUMENTS = [
    {"skills": 42},
    {"skills": "Python"},
    {"skills": {"technical": "Python", "tools": None}},
    {"experience": "many years"},
    {"experience": [None, 5, "job", {"achievements": [1, None, "ok"]}]},
    {"experience": [{"achievements": {"first": "ok"}}]},
    {"education": [{"content": 12}]},
    {"contact": "ada@example.com", "social": ["github"]},
    {"languages": [{"level": "C1"}, None, 3]},
    {"hobbies": {"chess": True}},
    {"summary": 123, "fullName": ["Ada"], "title": {"a": 1}},
    {"certifications": [{"name": None, "content": "Valid until 2030"}]},
    {"projects": [{"title": 5, "content": [None]}]},
    {"technicalSkills": 12},
]


@pytest.mark.unit
@pytest.mark.parametrize("data", MALFORMED_DOCUMENTS)
def test_malformed_fields_never_raise(data):
    """Malformed nested fields degrade to empty values instead of raising."""
    metrics = estimate(data)
    assert metrics.page_count >= 1
    assert metrics.total_height >= 0
