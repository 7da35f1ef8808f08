"""
Serialization helpers for engine snapshots and results.

Provides JSON/YAML round-trip of in-progress answers via an intermediate dict
representation. The dict shape is the persisted snapshot format:

    {"answers": {question: rating, ...},
     "currentSection": int,
     "sectionScores": {section: int, ...}}

Parsing is strict: anything malformed raises InvalidSnapshot and nothing is
partially applied. Keys may arrive as strings (JSON object keys always do)
and are normalised to ints.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import yaml

from selfassess.errors import InvalidSnapshot
from selfassess.model import SurveyDefinition, SurveyResult, default_survey


@dataclass
class Snapshot:
    answers: Dict[int, int] = field(default_factory=dict)
    current_section: int = 1
    section_scores: Optional[Dict[int, int]] = None


def _parse_index(raw: Any, what: str) -> int:
    if isinstance(raw, bool):
        raise InvalidSnapshot(f"{what} must be an integer, got {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        # ASCII only: str.isdigit() also accepts other scripts' digits.
        if text.isascii() and text.isdigit():
            return int(text)
    raise InvalidSnapshot(f"{what} must be an integer, got {raw!r}")


def _parse_int_mapping(raw: Any, what: str) -> Dict[int, Any]:
    if not isinstance(raw, Mapping):
        raise InvalidSnapshot(f"{what} must be a mapping, got {type(raw).__name__}")
    parsed: Dict[int, Any] = {}
    for key, value in raw.items():
        index = _parse_index(key, f"{what} key")
        if index in parsed:
            raise InvalidSnapshot(f"Duplicate {what} key: {index}")
        parsed[index] = value
    return parsed


def snapshot_to_dict(snapshot: Snapshot) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "answers": dict(snapshot.answers),
        "currentSection": snapshot.current_section,
    }
    if snapshot.section_scores is not None:
        data["sectionScores"] = dict(snapshot.section_scores)
    return data


def snapshot_from_dict(d: Any, definition: SurveyDefinition | None = None) -> Snapshot:
    """
    Validate and parse a snapshot dict.

    Checks every answer key is a question index and every value an allowed
    rating, and that currentSection is a valid section. A present
    sectionScores must map valid sections to integers; its values are
    returned as-is for the caller to compare against recomputed scores.

    Raises:
        InvalidSnapshot: On any shape or range violation
    """
    definition = definition or default_survey()
    if not isinstance(d, Mapping):
        raise InvalidSnapshot(f"Snapshot must be a mapping, got {type(d).__name__}")
    if "answers" not in d or "currentSection" not in d:
        raise InvalidSnapshot("Snapshot requires 'answers' and 'currentSection'")

    answers = _parse_int_mapping(d["answers"], "answers")
    for question, value in answers.items():
        if not definition.is_valid_question(question):
            raise InvalidSnapshot(f"Invalid question index in snapshot: {question}")
        if not definition.scale.is_valid(value):
            raise InvalidSnapshot(f"Invalid rating for question {question}: {value!r}")

    current = d["currentSection"]
    if not definition.is_valid_section(current):
        raise InvalidSnapshot(f"Invalid currentSection in snapshot: {current!r}")

    section_scores = None
    if d.get("sectionScores") is not None:
        section_scores = _parse_int_mapping(d["sectionScores"], "sectionScores")
        for section, score in section_scores.items():
            if not definition.is_valid_section(section):
                raise InvalidSnapshot(f"Invalid section in sectionScores: {section}")
            if isinstance(score, bool) or not isinstance(score, int):
                raise InvalidSnapshot(f"Section score must be an integer, got {score!r}")

    return Snapshot(answers=answers, current_section=current, section_scores=section_scores)


def snapshot_to_json(snapshot: Snapshot) -> str:
    return json.dumps(snapshot_to_dict(snapshot), sort_keys=True)


def snapshot_from_json(s: str, definition: SurveyDefinition | None = None) -> Snapshot:
    try:
        d = json.loads(s)
    except (TypeError, ValueError) as e:
        raise InvalidSnapshot(f"Snapshot is not valid JSON: {e}") from e
    return snapshot_from_dict(d, definition)


def snapshot_to_yaml(snapshot: Snapshot) -> str:
    return yaml.safe_dump(snapshot_to_dict(snapshot))


def snapshot_from_yaml(s: str, definition: SurveyDefinition | None = None) -> Snapshot:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise InvalidSnapshot(f"Snapshot is not valid YAML: {e}") from e
    return snapshot_from_dict(d, definition)


def result_to_dict(result: SurveyResult) -> Dict[str, Any]:
    return {
        "totalScore": result.total_score,
        "bandTitle": result.band_title,
        "bandDescription": result.band_description,
        "bandClassification": result.band_classification,
        "breakdown": [
            {"section": item.section, "score": item.score, "maxScore": item.max_score}
            for item in result.breakdown
        ],
    }
