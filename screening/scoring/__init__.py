"""Scoring for screening instrument sessions."""

from screening.scoring.engine import ScoringResult, get_severity_band, score
from screening.scoring.summary import MentalHealthSummary, summarize

__all__ = [
    "ScoringResult",
    "get_severity_band",
    "score",
    "MentalHealthSummary",
    "summarize",
]
