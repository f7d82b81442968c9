"""Scoring engine for screening instruments.

Scoring is a pure function of (session, instrument): it sums the
answered option values, classifies the total against the instrument's
published severity bands, and attaches instrument-specific flags.
Incomplete sessions produce a partial result whose band is for display
only and is not clinically valid.
"""

from dataclasses import dataclass, field
from typing import Callable, Mapping

from screening.core.config import settings
from screening.core.exceptions import (
    IncompleteAssessment,
    InstrumentMismatch,
    ScoringConfigurationError,
)
from screening.core.logging import event_logger, get_logger
from screening.instruments import phq9
from screening.instruments.models import Instrument
from screening.session import AssessmentSession

logger = get_logger(__name__)

# Instrument-specific flags computed from the answers, keyed by instrument id
FLAG_PROVIDERS: dict[str, Callable[[Mapping[str, int]], dict[str, bool]]] = {
    phq9.PHQ9_ID: phq9.flags,
}


@dataclass(frozen=True)
class ScoringResult:
    """Result of scoring one session."""
    instrument_id: str
    total_score: int
    severity_band: str
    partial: bool
    max_score: int
    answered_count: int
    question_count: int
    item_scores: dict[str, int] = field(default_factory=dict)
    flags: dict[str, bool] = field(default_factory=dict)
    definition_hash: str = ""


def get_severity_band(instrument: Instrument, total: int) -> str:
    """Determine severity band from total score.

    Bands are scanned least to greatest; the first closed interval
    containing the total wins.

    Raises:
        ScoringConfigurationError: If no band contains the total.
    """
    for band in instrument.severity_bands:
        if band.contains(total):
            return band.label

    logger.error(f"No severity band of {instrument.id} contains score {total}")
    raise ScoringConfigurationError(
        instrument.id, f"no severity band contains score {total}"
    )


def score(session: AssessmentSession, instrument: Instrument) -> ScoringResult:
    """Score a session against its instrument.

    Unanswered questions contribute 0 and mark the result partial.

    Args:
        session: Session holding the collected answers
        instrument: Instrument the session was answered against

    Returns:
        ScoringResult with total, severity band and item breakdown

    Raises:
        InstrumentMismatch: If the session answers a different instrument
        ScoringConfigurationError: If the instrument's bands are mis-authored
        IncompleteAssessment: If partial scoring is disabled and the session
            is incomplete
    """
    if session.instrument_id != instrument.id:
        raise InstrumentMismatch(expected=instrument.id, actual=session.instrument_id)

    try:
        instrument.check_bands()
    except ScoringConfigurationError as e:
        logger.error(f"Refusing to score {instrument.id}: {e.detail}")
        raise

    partial = not session.is_complete()
    if partial and not settings.partial_scoring_enabled:
        raise IncompleteAssessment(instrument.id, session.unanswered_question_ids())

    answers = session.answers
    item_scores = {qid: answers.get(qid, 0) for qid in instrument.question_ids}
    total = sum(item_scores.values())
    severity = get_severity_band(instrument, total)

    flag_provider = FLAG_PROVIDERS.get(instrument.id)
    flags = flag_provider(answers) if flag_provider else {}

    event_logger.log(
        "session_scored",
        instrument.id,
        session.session_id,
        {"partial": partial, "answered": session.answered_count},
    )

    return ScoringResult(
        instrument_id=instrument.id,
        total_score=total,
        severity_band=severity,
        partial=partial,
        max_score=instrument.max_score,
        answered_count=session.answered_count,
        question_count=len(instrument.questions),
        item_scores=item_scores,
        flags=flags,
        definition_hash=instrument.definition_hash,
    )
