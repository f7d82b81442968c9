"""Assessment engine for standardized screening questionnaires."""

from screening.core.exceptions import (
    AssessmentError,
    IncompleteAssessment,
    InstrumentMismatch,
    InvalidAnswer,
    InvalidInstrument,
    ScoringConfigurationError,
    UnknownInstrument,
)
from screening.instruments import GAD7, PHQ9, Instrument, get_instrument
from screening.scoring import ScoringResult, score
from screening.session import (
    AssessmentSession,
    clear_answer,
    create_session,
    is_complete,
    progress,
    set_answer,
)

__all__ = [
    "AssessmentError",
    "IncompleteAssessment",
    "InstrumentMismatch",
    "InvalidAnswer",
    "InvalidInstrument",
    "ScoringConfigurationError",
    "UnknownInstrument",
    "GAD7",
    "PHQ9",
    "Instrument",
    "get_instrument",
    "ScoringResult",
    "score",
    "AssessmentSession",
    "clear_answer",
    "create_session",
    "is_complete",
    "progress",
    "set_answer",
]
