"""
Error types raised by the survey engine.

Every error here is a local, recoverable condition. An operation that raises
one of these leaves the engine state exactly as it was before the call.
"""

from typing import Sequence, Tuple


class SurveyError(Exception):
    """Base class for all survey engine errors."""
    pass


class InvalidSection(SurveyError):
    """Raised when a section number is outside the survey's sections."""

    def __init__(self, section, section_count: int = 5):
        self.section = section
        super().__init__(f"Invalid section {section!r}: expected 1..{section_count}")


class InvalidRating(SurveyError):
    """Raised for a question index or rating value outside the allowed set."""
    pass


class IncompleteSectionError(SurveyError):
    """
    Raised when advancing or finalizing with unanswered questions.

    Attributes:
        section: The section that gates the operation
        missing: Question indices in that section with no recorded answer
    """

    def __init__(self, section: int, missing: Sequence[int]):
        self.section = section
        self.missing: Tuple[int, ...] = tuple(missing)
        super().__init__(
            f"Section {section} is incomplete: unanswered questions {list(self.missing)}"
        )


class BoundaryError(SurveyError):
    """Raised when navigation would leave the first..last section range."""
    pass


class InvalidSnapshot(SurveyError):
    """Raised when persisted data cannot be restored."""
    pass


class ScoreOutOfRange(SurveyError):
    """Raised when no interpretation band covers a total score."""
    pass


class BandTableError(SurveyError):
    """Raised when an interpretation table does not partition the score range."""
    pass
