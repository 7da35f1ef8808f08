"""
Core Survey Model Objects

Defines the fixed structure of the self-assessment survey and the shape of
its results.

These are pure data classes representing:
    - The rating scale (allowed answer values)
    - Sections (fixed groups of consecutive questions)
    - The survey definition (root container)
    - Per-section and final results

ARCHITECTURAL RULE:
    These objects:
        - Hold no answers and no progress (that is engine state)
        - Are immutable
        - Know nothing about rendering or storage
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from selfassess.bands import DEFAULT_BANDS, InterpretationBand, validate_bands
from selfassess.errors import InvalidRating, InvalidSection


@dataclass(frozen=True)
class RatingScale:
    """
    The discrete set of values a statement can be rated with.

    The standard scale is a four-point inclusive ordinal, 0..3.

    Properties:
        values: Allowed rating values, ascending
    """

    values: Tuple[int, ...] = (0, 1, 2, 3)

    @property
    def max_value(self) -> int:
        return max(self.values)

    def is_valid(self, value) -> bool:
        """
        True if `value` is one of the allowed ratings.

        Booleans are rejected even though Python treats them as ints.
        """
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return value in self.values


@dataclass(frozen=True)
class Section:
    """
    One group of consecutive questions.

    Properties:
        number: 1-based section number
        start: First question index (inclusive)
        end: Last question index (inclusive)
    """

    number: int
    start: int
    end: int

    @property
    def questions(self) -> range:
        return range(self.start, self.end + 1)

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def max_score(self, scale: RatingScale) -> int:
        return self.size * scale.max_value


@dataclass(frozen=True)
class SurveyDefinition:
    """
    Root container for the survey structure.

    Section s owns questions [(s-1)*section_size+1 .. s*section_size]; with
    the defaults that is 5 sections of 6, 30 questions in total, and a
    maximum total score of 90.

    INVARIANTS:
        - section_count and section_size are positive
        - bands partition [0, max_total] exactly
        (both checked on construction)
    """

    name: str = "The Lebanese Indoctrination Self-Assessment"
    section_count: int = 5
    section_size: int = 6
    scale: RatingScale = field(default_factory=RatingScale)
    bands: Tuple[InterpretationBand, ...] = DEFAULT_BANDS

    def __post_init__(self) -> None:
        if self.section_count <= 0:
            raise ValueError(f"section_count must be positive: {self.section_count}")
        if self.section_size <= 0:
            raise ValueError(f"section_size must be positive: {self.section_size}")
        validate_bands(self.bands, self.max_total)

    @property
    def question_count(self) -> int:
        return self.section_count * self.section_size

    @property
    def max_total(self) -> int:
        return self.question_count * self.scale.max_value

    def is_valid_section(self, section) -> bool:
        if isinstance(section, bool) or not isinstance(section, int):
            return False
        return 1 <= section <= self.section_count

    def is_valid_question(self, question) -> bool:
        if isinstance(question, bool) or not isinstance(question, int):
            return False
        return 1 <= question <= self.question_count

    def section_range(self, section: int) -> Tuple[int, int]:
        """
        Return the inclusive (start, end) question indices of a section.

        Raises:
            InvalidSection: If section is outside 1..section_count
        """
        if not self.is_valid_section(section):
            raise InvalidSection(section, self.section_count)
        start = (section - 1) * self.section_size + 1
        return start, section * self.section_size

    def get_section(self, section: int) -> Section:
        start, end = self.section_range(section)
        return Section(number=section, start=start, end=end)

    def sections(self) -> List[Section]:
        return [self.get_section(s) for s in range(1, self.section_count + 1)]

    def section_for_question(self, question: int) -> int:
        """
        Return the section number owning a question.

        Raises:
            InvalidRating: If the question index is out of range
        """
        if not self.is_valid_question(question):
            raise InvalidRating(
                f"Invalid question index {question!r}: expected 1..{self.question_count}"
            )
        return (question - 1) // self.section_size + 1


@dataclass(frozen=True)
class SectionScore:
    """Score of one section as shown in the results breakdown."""

    section: int
    score: int
    max_score: int

    @property
    def percent(self) -> float:
        if self.max_score == 0:
            return 0.0
        return self.score / self.max_score * 100

    @property
    def label(self) -> str:
        return f"{self.score}/{self.max_score}"


@dataclass(frozen=True)
class SurveyResult:
    """
    Final interpretation of a completed survey.

    Properties:
        total_score: Sum of all section scores
        band: The interpretation band containing total_score
        breakdown: One SectionScore per section, in section order
    """

    total_score: int
    band: InterpretationBand
    breakdown: Tuple[SectionScore, ...]

    @property
    def band_title(self) -> str:
        return self.band.title

    @property
    def band_description(self) -> str:
        return self.band.description

    @property
    def band_classification(self) -> str:
        return self.band.classification

    @property
    def per_section(self) -> Dict[int, int]:
        return {item.section: item.score for item in self.breakdown}


def default_survey() -> SurveyDefinition:
    """The standard 30-statement, five-part definition."""
    return SurveyDefinition()
