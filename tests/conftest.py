"""Shared fixtures for survey engine tests."""

import pytest

from selfassess.engine import SurveyEngine


def answer_section(engine, section, value=1):
    start, end = engine.section_range(section)
    for question in range(start, end + 1):
        engine.record_answer(question, value)


def answer_all(engine, value=1):
    for question in range(1, engine.definition.question_count + 1):
        engine.record_answer(question, value)


@pytest.fixture
def engine():
    return SurveyEngine()


@pytest.fixture
def completed_engine():
    e = SurveyEngine()
    answer_all(e, 1)
    return e
