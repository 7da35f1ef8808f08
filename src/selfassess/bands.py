"""
Interpretation bands for total survey scores.

A band is a closed score interval carrying the text shown on the results
page. The table is ordered and must partition [0, max_total]: contiguous,
non-overlapping, and covering every possible total. Lookup is a linear scan,
which is plenty for five static rows.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from selfassess.errors import BandTableError, ScoreOutOfRange


@dataclass(frozen=True)
class InterpretationBand:
    """
    A labelled, inclusive score range.

    Properties:
        min_score: Lowest total in the band (inclusive)
        max_score: Highest total in the band (inclusive)
        title: Short label, e.g. "Moderate markers"
        description: Longer text shown under the label
        classification: Presentation class, e.g. "score-moderate"
    """

    min_score: int
    max_score: int
    title: str
    description: str
    classification: str

    def contains(self, score: int) -> bool:
        return self.min_score <= score <= self.max_score


DEFAULT_BANDS: Tuple[InterpretationBand, ...] = (
    InterpretationBand(
        min_score=0,
        max_score=15,
        title="Low indoctrination markers",
        description=(
            "You appear to hold examined beliefs and maintain intellectual "
            "independence. Or you're not being honest with yourself."
        ),
        classification="score-low",
    ),
    InterpretationBand(
        min_score=16,
        max_score=35,
        title="Moderate markers",
        description=(
            "You have some inherited beliefs you haven't fully examined. "
            "This is normal — awareness is the first step."
        ),
        classification="score-moderate",
    ),
    InterpretationBand(
        min_score=36,
        max_score=55,
        title="Significant markers",
        description=(
            "Many of your political beliefs may be inherited rather than chosen. "
            "Consider seeking out perspectives that challenge your assumptions."
        ),
        classification="score-significant",
    ),
    InterpretationBand(
        min_score=56,
        max_score=75,
        title="High markers",
        description=(
            "Your worldview may be largely constructed by others. This isn't your "
            "fault — Lebanese society is designed to produce this — but breaking "
            "free requires active effort."
        ),
        classification="score-high",
    ),
    InterpretationBand(
        min_score=76,
        max_score=90,
        title="Severe markers",
        description=(
            "You are likely operating within a closed ideological system. The fact "
            "that you took this test is a positive sign. Consider: what would it "
            "take to change your mind about anything?"
        ),
        classification="score-severe",
    ),
)


def interpret_score(score: int, bands: Sequence[InterpretationBand] = DEFAULT_BANDS) -> InterpretationBand:
    """
    Return the band whose closed interval contains `score`.

    Raises:
        ScoreOutOfRange: If no band contains the score
    """
    for band in bands:
        if band.contains(score):
            return band
    raise ScoreOutOfRange(f"No interpretation band covers score {score}")


def validate_bands(bands: Sequence[InterpretationBand], max_total: int) -> None:
    """
    Check that `bands` partition [0, max_total] in ascending order.

    Raises:
        BandTableError: On an empty table, an inverted band, a gap, an
            overlap, or a table that does not span exactly 0..max_total
    """
    if not bands:
        raise BandTableError("Interpretation table is empty")

    expected_min = 0
    for band in bands:
        if band.min_score > band.max_score:
            raise BandTableError(
                f"Band {band.title!r} is inverted: {band.min_score} > {band.max_score}"
            )
        if band.min_score < expected_min:
            raise BandTableError(
                f"Band {band.title!r} overlaps the previous band at {band.min_score}"
            )
        if band.min_score > expected_min:
            raise BandTableError(
                f"Gap before band {band.title!r}: scores {expected_min}..{band.min_score - 1} uncovered"
            )
        expected_min = band.max_score + 1

    if expected_min - 1 != max_total:
        raise BandTableError(
            f"Interpretation table ends at {expected_min - 1}, expected {max_total}"
        )
