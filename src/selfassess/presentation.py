"""
Presentation adapter: UI events in, view updates out.

SurveyController translates what a page does (start, pick a rating, next,
back, see results, retake) into engine calls and returns a ViewUpdate the
renderer can draw from. Validation failures the user can fix become a
message on the update instead of an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from selfassess.engine import SurveyEngine
from selfassess.errors import IncompleteSectionError
from selfassess.model import SurveyResult

logger = logging.getLogger(__name__)

LANDING = "landing"
SURVEY = "survey"
RESULTS = "results"

INCOMPLETE_SECTION_MESSAGE = "Please answer all questions in this section before proceeding."
INCOMPLETE_RESULTS_MESSAGE = "Please answer all questions in this section before seeing results."


@dataclass
class ViewUpdate:
    """
    Everything the renderer needs after one user action.

    Properties:
        page: One of "landing", "survey", "results"
        current_section: Section to display
        progress_percent: Width of the progress bar, 0..100
        progress_label: e.g. "Part 2 of 5"
        section_scores: Running score per section
        message: User-facing validation message, or None
        missing: Unanswered questions behind the message, if any
        result: Final result when page == "results"
    """

    page: str
    current_section: int
    progress_percent: float
    progress_label: str
    section_scores: Dict[int, int] = field(default_factory=dict)
    message: Optional[str] = None
    missing: Tuple[int, ...] = ()
    result: Optional[SurveyResult] = None


class SurveyController:
    """
    Drives one engine from UI events.

    Only IncompleteSectionError is turned into a message. Other SurveyErrors
    mean the caller sent something the UI should never produce, so they
    propagate.
    """

    def __init__(self, engine: Optional[SurveyEngine] = None):
        self.engine = engine or SurveyEngine()
        self.page = LANDING
        self._result: Optional[SurveyResult] = None

    def view(self, message: Optional[str] = None, missing: Tuple[int, ...] = ()) -> ViewUpdate:
        return ViewUpdate(
            page=self.page,
            current_section=self.engine.current_section,
            progress_percent=self.engine.progress_fraction * 100,
            progress_label=self.engine.progress_label,
            section_scores=self.engine.section_scores,
            message=message,
            missing=missing,
            result=self._result if self.page == RESULTS else None,
        )

    def start(self) -> ViewUpdate:
        self.page = SURVEY
        return self.view()

    def back_to_landing(self) -> ViewUpdate:
        self.page = LANDING
        return self.view()

    def select(self, question: int, value: int) -> ViewUpdate:
        self.engine.record_answer(question, value)
        return self.view()

    def next_part(self) -> ViewUpdate:
        try:
            self.engine.advance_section()
        except IncompleteSectionError as e:
            logger.debug("Blocked advance from section %d: %s", e.section, e.missing)
            return self.view(INCOMPLETE_SECTION_MESSAGE, e.missing)
        return self.view()

    def previous_part(self) -> ViewUpdate:
        self.engine.retreat_section()
        return self.view()

    def show_results(self) -> ViewUpdate:
        try:
            self._result = self.engine.finalize_and_interpret()
        except IncompleteSectionError as e:
            return self.view(INCOMPLETE_RESULTS_MESSAGE, e.missing)
        self.page = RESULTS
        return self.view()

    def retake(self) -> ViewUpdate:
        self.engine.reset()
        self._result = None
        self.page = SURVEY
        return self.view()
