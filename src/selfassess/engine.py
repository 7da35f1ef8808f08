"""
Survey Engine: answer state, section scoring and navigation.

One SurveyEngine instance owns one session: the recorded answers, the
current section pointer and a cache of section scores. The answer set is the
source of truth; section scores are recomputed from it whenever it changes.

Operations run synchronously and either succeed or raise a SurveyError with
the state left untouched. Nothing here touches storage or rendering. Those
collaborators observe the engine through listeners (see storage.py and
presentation.py).
"""

from __future__ import annotations

import logging
import warnings
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

from selfassess.bands import interpret_score
from selfassess.errors import (
    BoundaryError,
    IncompleteSectionError,
    InvalidRating,
)
from selfassess.model import SectionScore, SurveyDefinition, SurveyResult, default_survey
from selfassess.serialization import Snapshot, snapshot_from_dict, snapshot_to_dict

logger = logging.getLogger(__name__)

# Listener signature: (event, engine). Events: "answer", "navigate", "reset", "restore".
Listener = Callable[[str, "SurveyEngine"], None]


class SurveyEngine:
    """
    State machine behind the five-part self-assessment.

    Example:
        >>> engine = SurveyEngine()
        >>> for q in range(1, 7):
        ...     engine.record_answer(q, 2)
        >>> engine.compute_section_score(1)
        12
        >>> engine.advance_section()
        2
    """

    def __init__(self, definition: Optional[SurveyDefinition] = None):
        self.definition = definition or default_survey()
        self._answers: Dict[int, int] = {}
        self._current_section = 1
        self._section_scores: Dict[int, int] = self._zero_scores()
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event, self)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def current_section(self) -> int:
        return self._current_section

    @property
    def answers(self) -> Dict[int, int]:
        return dict(self._answers)

    @property
    def section_scores(self) -> Dict[int, int]:
        return dict(self._section_scores)

    @property
    def answered_count(self) -> int:
        return len(self._answers)

    @property
    def progress_fraction(self) -> float:
        return self._current_section / self.definition.section_count

    @property
    def progress_label(self) -> str:
        return f"Part {self._current_section} of {self.definition.section_count}"

    def get_answer(self, question: int) -> Optional[int]:
        self.definition.section_for_question(question)
        return self._answers.get(question)

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def section_range(self, section: int) -> Tuple[int, int]:
        return self.definition.section_range(section)

    def compute_section_score(self, section: int) -> int:
        """Sum of recorded answers in a section; unanswered questions count 0."""
        start, end = self.section_range(section)
        return sum(self._answers.get(q, 0) for q in range(start, end + 1))

    def missing_questions(self, section: int) -> List[int]:
        start, end = self.section_range(section)
        return [q for q in range(start, end + 1) if q not in self._answers]

    def first_unanswered(self, section: int) -> Optional[int]:
        missing = self.missing_questions(section)
        return missing[0] if missing else None

    def is_section_complete(self, section: int) -> bool:
        return not self.missing_questions(section)

    def record_answer(self, question: int, value: int) -> int:
        """
        Store (or overwrite) the rating for a question.

        Args:
            question: Question index, 1..question_count
            value: Rating from the definition's scale

        Returns:
            The updated score of the section owning the question

        Raises:
            InvalidRating: If the question index or value is not allowed
        """
        section = self.definition.section_for_question(question)
        if not self.definition.scale.is_valid(value):
            raise InvalidRating(
                f"Invalid rating {value!r} for question {question}: "
                f"expected one of {list(self.definition.scale.values)}"
            )

        self._answers[question] = value
        score = self.compute_section_score(section)
        self._section_scores[section] = score
        logger.debug("Recorded q%d=%d, section %d score %d", question, value, section, score)
        self._notify("answer")
        return score

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def advance_section(self, current: Optional[int] = None) -> int:
        """
        Move from `current` (default: the progress pointer) to the next section.

        The current section must be complete. The last section has no next
        section; finishing the survey goes through finalize_and_interpret().

        Returns:
            The new current section

        Raises:
            InvalidSection: If current is not a valid section
            IncompleteSectionError: If current has unanswered questions
            BoundaryError: If current is the last section
        """
        if current is None:
            current = self._current_section
        missing = self.missing_questions(current)
        if missing:
            raise IncompleteSectionError(current, missing)

        target = current + 1
        if target > self.definition.section_count:
            raise BoundaryError(
                f"Cannot advance past section {self.definition.section_count}"
            )
        self._current_section = target
        logger.debug("Advanced to section %d", target)
        self._notify("navigate")
        return target

    def retreat_section(self, current: Optional[int] = None) -> int:
        """
        Move from `current` (default: the progress pointer) to the previous section.

        Raises:
            InvalidSection: If current is not a valid section
            BoundaryError: If current is the first section
        """
        if current is None:
            current = self._current_section
        self.section_range(current)

        target = current - 1
        if target < 1:
            raise BoundaryError("Cannot retreat before section 1")
        self._current_section = target
        logger.debug("Retreated to section %d", target)
        self._notify("navigate")
        return target

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def total_score(self) -> int:
        return sum(
            self.compute_section_score(s)
            for s in range(1, self.definition.section_count + 1)
        )

    def finalize_and_interpret(self) -> SurveyResult:
        """
        Compute the total score and its interpretation band.

        Only the last section gates this call, matching forward navigation
        which already gated every earlier section.

        Raises:
            IncompleteSectionError: If the last section has unanswered questions
        """
        last = self.definition.section_count
        missing = self.missing_questions(last)
        if missing:
            raise IncompleteSectionError(last, missing)

        breakdown = tuple(
            SectionScore(
                section=section.number,
                score=self.compute_section_score(section.number),
                max_score=section.max_score(self.definition.scale),
            )
            for section in self.definition.sections()
        )
        total = sum(item.score for item in breakdown)
        band = interpret_score(total, self.definition.bands)
        logger.info("Survey finalized: total %d (%s)", total, band.title)
        return SurveyResult(total_score=total, band=band, breakdown=breakdown)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        self._answers = {}
        self._current_section = 1
        self._section_scores = self._zero_scores()
        logger.info("Survey reset")
        self._notify("reset")

    def snapshot(self) -> Snapshot:
        return Snapshot(
            answers=dict(self._answers),
            current_section=self._current_section,
            section_scores=dict(self._section_scores),
        )

    def serialize(self) -> Dict[str, object]:
        return snapshot_to_dict(self.snapshot())

    def restore(self, snapshot: Union[Mapping, Snapshot]) -> None:
        """
        Replace the current state with a persisted snapshot.

        Section scores are recomputed from the restored answers. A cached
        sectionScores entry that disagrees is reported with a UserWarning and
        ignored.

        Raises:
            InvalidSnapshot: If the snapshot is malformed (state unchanged)
        """
        if isinstance(snapshot, Snapshot):
            snapshot = snapshot_to_dict(snapshot)
        parsed = snapshot_from_dict(snapshot, self.definition)

        answers = dict(parsed.answers)
        scores = self._zero_scores()
        for question, value in answers.items():
            scores[self.definition.section_for_question(question)] += value

        if parsed.section_scores is not None:
            stale = {
                s: cached
                for s, cached in parsed.section_scores.items()
                if cached != scores[s]
            }
            if stale:
                warnings.warn(
                    f"Snapshot section scores {stale} disagree with answers; recomputed",
                    UserWarning,
                )

        self._answers = answers
        self._current_section = parsed.current_section
        self._section_scores = scores
        logger.info(
            "Restored %d answers at section %d", len(answers), parsed.current_section
        )
        self._notify("restore")

    def _zero_scores(self) -> Dict[int, int]:
        return {s: 0 for s in range(1, self.definition.section_count + 1)}

