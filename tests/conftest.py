"""Pytest configuration and fixtures."""

import logging
from collections.abc import Callable, Generator

import pytest

from screening.core.config import settings
from screening.instruments import GAD7, PHQ9
from screening.instruments.models import AnswerOption, Instrument, Question, SeverityBand
from screening.session import AssessmentSession, create_session


@pytest.fixture
def phq9_session() -> AssessmentSession:
    """Empty PHQ-9 session."""
    return create_session(PHQ9)


@pytest.fixture
def gad7_session() -> AssessmentSession:
    """Empty GAD-7 session."""
    return create_session(GAD7)


@pytest.fixture
def uneven_instrument() -> Instrument:
    """Instrument with non-consecutive option values and three questions."""
    options = [AnswerOption(0, "No"), AnswerOption(2, "Sometimes"), AnswerOption(5, "Often")]
    return Instrument(
        id="uneven",
        title="Uneven scale",
        description="Non-consecutive option values",
        questions=[
            Question(id="a", text="First", options=options),
            Question(id="b", text="Second", options=options),
            Question(id="c", text="Third", options=options),
        ],
        severity_bands=[
            SeverityBand(0, 5, "low"),
            SeverityBand(6, 15, "high"),
        ],
    )


@pytest.fixture
def gapped_instrument() -> Instrument:
    """Instrument whose bands leave scores 3-4 unclassified."""
    options = [AnswerOption(0, "No"), AnswerOption(1, "Yes")]
    return Instrument(
        id="gapped",
        title="Gapped bands",
        description="Mis-authored severity bands",
        questions=[Question(id=f"g{i}", text=f"Item {i}", options=options) for i in range(1, 5)],
        severity_bands=[SeverityBand(0, 2, "low")],
    )


@pytest.fixture
def no_partial_scoring(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable partial scoring for the duration of a test."""
    monkeypatch.setattr(settings, "partial_scoring_enabled", False)


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Restore root logger handlers and level after a test reconfigures logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def _answer_all(session: AssessmentSession, value: int) -> AssessmentSession:
    for question_id in session.instrument.question_ids:
        session.set_answer(question_id, value)
    return session


@pytest.fixture
def answer_all() -> Callable[[AssessmentSession, int], AssessmentSession]:
    """Helper answering every question of a session with the same value."""
    return _answer_all
