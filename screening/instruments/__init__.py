"""Instrument definitions for validated screening questionnaires."""

from screening.instruments.gad7 import GAD7
from screening.instruments.loader import (
    InstrumentRegistry,
    get_instrument,
    get_registry,
    load_instrument,
)
from screening.instruments.models import AnswerOption, Instrument, Question, SeverityBand
from screening.instruments.phq9 import PHQ9

__all__ = [
    "GAD7",
    "PHQ9",
    "AnswerOption",
    "Instrument",
    "InstrumentRegistry",
    "Question",
    "SeverityBand",
    "get_instrument",
    "get_registry",
    "load_instrument",
]
