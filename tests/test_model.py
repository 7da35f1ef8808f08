"""
Tests for the survey structure objects.

These tests verify:
    - Rating scale membership
    - Section ranges partition the question space
    - Question to section lookup
    - Definition invariants checked on construction
"""

import pytest

from selfassess.bands import InterpretationBand
from selfassess.errors import BandTableError, InvalidRating, InvalidSection
from selfassess.model import (
    RatingScale,
    Section,
    SectionScore,
    SurveyDefinition,
    default_survey,
)


class TestRatingScale:
    """Test RatingScale objects."""

    def test_default_values(self):
        """Default scale is the four-point 0..3 scale."""
        scale = RatingScale()
        assert scale.values == (0, 1, 2, 3)
        assert scale.max_value == 3

    @pytest.mark.parametrize("value", [0, 1, 2, 3])
    def test_accepts_scale_values(self, value):
        """Every scale value is valid."""
        assert RatingScale().is_valid(value)

    @pytest.mark.parametrize("value", [-1, 4, 1.0, "2", None, True, False])
    def test_rejects_other_values(self, value):
        """Out-of-set values, non-ints and bools are invalid."""
        assert not RatingScale().is_valid(value)


class TestSectionRanges:
    """Test section_range and the question partition."""

    def test_default_shape(self):
        """Standard survey has 5 sections of 6, 30 questions, max 90."""
        survey = default_survey()
        assert survey.section_count == 5
        assert survey.section_size == 6
        assert survey.question_count == 30
        assert survey.max_total == 90

    @pytest.mark.parametrize("section,expected", [
        (1, (1, 6)),
        (2, (7, 12)),
        (3, (13, 18)),
        (4, (19, 24)),
        (5, (25, 30)),
    ])
    def test_section_range(self, section, expected):
        """Section s covers (s-1)*6+1 .. s*6."""
        assert default_survey().section_range(section) == expected

    def test_ranges_partition_questions(self):
        """The five ranges cover 1..30 exactly once each."""
        survey = default_survey()
        covered = []
        for section in range(1, 6):
            start, end = survey.section_range(section)
            assert end - start + 1 == 6
            covered.extend(range(start, end + 1))
        assert covered == list(range(1, 31))

    @pytest.mark.parametrize("section", [0, 6, -1, "1", 1.0, None, True])
    def test_invalid_section(self, section):
        """Sections outside 1..5 raise InvalidSection."""
        with pytest.raises(InvalidSection):
            default_survey().section_range(section)

    def test_get_section(self):
        """Section objects expose their questions and maximum score."""
        section = default_survey().get_section(3)
        assert section == Section(number=3, start=13, end=18)
        assert list(section.questions) == [13, 14, 15, 16, 17, 18]
        assert section.size == 6
        assert section.max_score(RatingScale()) == 18

    def test_sections_in_order(self):
        """sections() lists every section in order."""
        assert [s.number for s in default_survey().sections()] == [1, 2, 3, 4, 5]


class TestSectionForQuestion:
    """Test question to section lookup."""

    @pytest.mark.parametrize("question,section", [
        (1, 1), (6, 1), (7, 2), (12, 2), (13, 3), (24, 4), (25, 5), (30, 5),
    ])
    def test_lookup(self, question, section):
        """Boundary questions land in the right section."""
        assert default_survey().section_for_question(question) == section

    @pytest.mark.parametrize("question", [0, 31, -5, "3", None])
    def test_invalid_question(self, question):
        """Questions outside 1..30 raise InvalidRating."""
        with pytest.raises(InvalidRating):
            default_survey().section_for_question(question)


class TestSurveyDefinition:
    """Test definition invariants."""

    def test_rejects_non_positive_shape(self):
        """Section count and size must be positive."""
        with pytest.raises(ValueError):
            SurveyDefinition(section_count=0)
        with pytest.raises(ValueError):
            SurveyDefinition(section_size=0)

    def test_rejects_bands_not_matching_max_total(self):
        """Bands must cover exactly 0..max_total."""
        with pytest.raises(BandTableError):
            SurveyDefinition(section_count=4)

    def test_custom_shape_with_matching_bands(self):
        """A smaller survey works with a table sized for it."""
        bands = (
            InterpretationBand(0, 3, "Low", "", "score-low"),
            InterpretationBand(4, 6, "High", "", "score-high"),
        )
        survey = SurveyDefinition(section_count=2, section_size=1, bands=bands)
        assert survey.max_total == 6
        assert survey.section_range(2) == (2, 2)


class TestSectionScore:
    """Test breakdown entries."""

    def test_percent_and_label(self):
        """Percent is score over max; label is score/max."""
        item = SectionScore(section=1, score=9, max_score=18)
        assert item.percent == 50.0
        assert item.label == "9/18"

    def test_zero_max(self):
        """A zero maximum gives zero percent instead of dividing by zero."""
        assert SectionScore(section=1, score=0, max_score=0).percent == 0.0
