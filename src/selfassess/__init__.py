"""
Self-Assessment Survey Engine

Scoring and navigation core for a 30-statement self-assessment: five parts
of six statements, each rated 0..3, with the total mapped to one of five
interpretation bands.

ARCHITECTURAL GUARANTEE:
------------------------
The engine contains ZERO knowledge of:
    - Page markup or rendering
    - Storage backends
    - Share or clipboard mechanisms

Those collaborators sit in presentation.py, storage.py and sharing.py and
talk to the engine through its public operations only.
"""

from selfassess.bands import DEFAULT_BANDS, InterpretationBand, interpret_score
from selfassess.engine import SurveyEngine
from selfassess.errors import (
    BandTableError,
    BoundaryError,
    IncompleteSectionError,
    InvalidRating,
    InvalidSection,
    InvalidSnapshot,
    ScoreOutOfRange,
    SurveyError,
)
from selfassess.model import SurveyDefinition, SurveyResult, default_survey

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_BANDS",
    "InterpretationBand",
    "interpret_score",
    "SurveyEngine",
    "SurveyDefinition",
    "SurveyResult",
    "default_survey",
    "SurveyError",
    "InvalidSection",
    "InvalidRating",
    "IncompleteSectionError",
    "BoundaryError",
    "InvalidSnapshot",
    "ScoreOutOfRange",
    "BandTableError",
]
