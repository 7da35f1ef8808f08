"""
Tests for the presentation adapter and share content.

The controller stands in for the page: it should turn incomplete-section
errors into messages and keep page and progress in step with the engine.
"""

import pytest

from selfassess.errors import BoundaryError, InvalidRating
from selfassess.presentation import (
    INCOMPLETE_RESULTS_MESSAGE,
    INCOMPLETE_SECTION_MESSAGE,
    LANDING,
    RESULTS,
    SURVEY,
    SurveyController,
)
from selfassess.sharing import SHARE_PROMPT, SHARE_TEXT, SHARE_TITLE, build_share_summary


def _fill(controller, section, value=1):
    start, end = controller.engine.section_range(section)
    for question in range(start, end + 1):
        controller.select(question, value)


class TestSurveyController:
    """Test UI event handling."""

    def test_landing_and_start(self):
        controller = SurveyController()
        assert controller.view().page == LANDING
        update = controller.start()
        assert update.page == SURVEY
        assert update.progress_percent == pytest.approx(20.0)
        assert update.progress_label == "Part 1 of 5"
        assert controller.back_to_landing().page == LANDING

    def test_select_updates_running_score(self):
        controller = SurveyController()
        controller.start()
        controller.select(1, 2)
        update = controller.select(2, 3)
        assert update.section_scores[1] == 5
        assert update.message is None

    def test_next_part_blocked_with_message(self):
        controller = SurveyController()
        controller.start()
        controller.select(1, 1)
        update = controller.next_part()
        assert update.message == INCOMPLETE_SECTION_MESSAGE
        assert update.missing == (2, 3, 4, 5, 6)
        assert update.current_section == 1

    def test_next_and_previous(self):
        controller = SurveyController()
        controller.start()
        _fill(controller, 1)
        update = controller.next_part()
        assert update.current_section == 2
        assert update.progress_percent == pytest.approx(40.0)
        assert controller.previous_part().current_section == 1

    def test_previous_from_first_part_raises(self):
        """The page never offers "back" on part 1, so this is a caller bug."""
        controller = SurveyController()
        with pytest.raises(BoundaryError):
            controller.previous_part()

    def test_invalid_rating_propagates(self):
        controller = SurveyController()
        with pytest.raises(InvalidRating):
            controller.select(1, 5)

    def test_results_blocked_with_message(self):
        controller = SurveyController()
        controller.start()
        update = controller.show_results()
        assert update.message == INCOMPLETE_RESULTS_MESSAGE
        assert update.page == SURVEY
        assert update.result is None

    def test_full_run_and_retake(self):
        controller = SurveyController()
        controller.start()
        for section in range(1, 6):
            _fill(controller, section, 3)
            if section < 5:
                controller.next_part()
        update = controller.show_results()
        assert update.page == RESULTS
        assert update.result.total_score == 90
        assert update.result.band_title == "Severe markers"

        update = controller.retake()
        assert update.page == SURVEY
        assert update.current_section == 1
        assert update.result is None
        assert update.section_scores == {1: 0, 2: 0, 3: 0, 4: 0, 5: 0}


class TestShareSummary:
    """Test share payloads."""

    def test_invitation(self):
        summary = build_share_summary("https://example.org/test")
        assert summary.title == SHARE_TITLE
        assert summary.text == SHARE_TEXT
        assert summary.as_clipboard_text() == f"{SHARE_TEXT}\n\nhttps://example.org/test"

    def test_with_result(self, completed_engine):
        result = completed_engine.finalize_and_interpret()
        summary = build_share_summary("https://example.org/test", result)
        assert summary.text.startswith("I scored 30 (Moderate markers).")

    def test_url_required(self):
        with pytest.raises(ValueError):
            build_share_summary("")

    def test_prompt_fallback(self):
        """The manual copy prompt offers the bare URL."""
        summary = build_share_summary("https://example.org/test")
        assert summary.as_prompt() == (SHARE_PROMPT, "https://example.org/test")
        assert SHARE_PROMPT == "Copy this link to share:"


def test_incomplete_view_lists_missing_questions_as_ints():
    controller = SurveyController()
    controller.start()
    controller.select(26, 1)
    update = controller.show_results()
    assert update.missing == (25, 27, 28, 29, 30)
    assert all(isinstance(q, int) for q in update.missing)
