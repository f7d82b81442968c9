"""Assessment session: the answers collected against one instrument.

Answers are a presence-keyed mapping. A question is either present with
a valid option value or absent, so an explicit zero answer is never
confused with "not yet answered". Completion is derived from the
mapping on every call; no separate completed flag is stored.
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional
from uuid import uuid4

from screening.core.exceptions import InvalidAnswer
from screening.core.logging import event_logger
from screening.instruments.models import Instrument, Question


class AssessmentSession:
    """One user's in-progress or completed answers to a single instrument.

    Sessions are independent values owned by the caller's flow. The
    engine never retains them and never persists them.
    """

    def __init__(self, instrument: Instrument, session_id: str | None = None) -> None:
        self.instrument = instrument
        self.session_id = session_id or str(uuid4())
        self._answers: dict[str, int] = {}

    @property
    def instrument_id(self) -> str:
        return self.instrument.id

    @property
    def answers(self) -> Mapping[str, int]:
        """Read-only view of the answered questions."""
        return MappingProxyType(self._answers)

    @property
    def answered_count(self) -> int:
        return len(self._answers)

    def _require_question(self, question_id: str, value: Any) -> Question:
        question = self.instrument.question(question_id)
        if question is None:
            raise InvalidAnswer(
                question_id, value, f"not a question of {self.instrument_id!r}"
            )
        return question

    def set_answer(self, question_id: str, value: int) -> None:
        """Record an answer, overwriting any earlier answer to the same question.

        Args:
            question_id: Id of a question in the bound instrument
            value: One of that question's option values

        Raises:
            InvalidAnswer: If the question is unknown or the value is not an
                option. The session is left unchanged.
        """
        try:
            question = self._require_question(question_id, value)
            # bool is an int subclass; True is not the answer value 1
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidAnswer(question_id, value, "answer must be an integer")
            if value not in question.valid_values:
                raise InvalidAnswer(
                    question_id,
                    value,
                    f"expected one of {sorted(question.valid_values)}",
                )
        except InvalidAnswer as e:
            event_logger.log(
                "answer_rejected",
                self.instrument_id,
                self.session_id,
                {"question_id": question_id, "reason": e.reason},
                level=logging.WARNING,
            )
            raise

        self._answers[question_id] = value
        event_logger.log(
            "answer_set",
            self.instrument_id,
            self.session_id,
            event_logger.answer_metadata(question_id, value),
        )

    def clear_answer(self, question_id: str) -> None:
        """Remove an answer. Clearing an unanswered question is a no-op.

        Raises:
            InvalidAnswer: If the question is not part of the instrument
        """
        self._require_question(question_id, None)
        if self._answers.pop(question_id, None) is not None:
            event_logger.log(
                "answer_cleared",
                self.instrument_id,
                self.session_id,
                {"question_id": question_id},
            )

    def progress(self) -> float:
        """Fraction of questions answered, in [0, 1]."""
        return len(self._answers) / len(self.instrument.questions)

    def is_complete(self) -> bool:
        """True iff every question has an answer."""
        return len(self._answers) == len(self.instrument.questions)

    def unanswered_question_ids(self) -> list[str]:
        """Unanswered question ids in instrument order."""
        return [qid for qid in self.instrument.question_ids if qid not in self._answers]

    def next_unanswered_question(self) -> Optional[Question]:
        """First unanswered question, for step-by-step presentation."""
        for question in self.instrument.questions:
            if question.id not in self._answers:
                return question
        return None

    def __repr__(self) -> str:
        return (
            f"<AssessmentSession {self.instrument_id} {self.session_id} "
            f"{self.answered_count}/{len(self.instrument.questions)}>"
        )


def create_session(instrument: Instrument) -> AssessmentSession:
    """Start an empty session for an instrument."""
    session = AssessmentSession(instrument)
    event_logger.log("session_created", instrument.id, session.session_id)
    return session


def restore_session(
    instrument: Instrument,
    answers: Mapping[str, int],
    session_id: str | None = None,
) -> AssessmentSession:
    """Rebuild a session from caller-persisted answers.

    Every entry is validated as if it were answered again. If any entry
    is invalid, InvalidAnswer is raised and no session is returned.
    """
    session = AssessmentSession(instrument, session_id=session_id)
    for question_id, value in answers.items():
        session.set_answer(question_id, value)
    event_logger.log(
        "session_restored",
        instrument.id,
        session.session_id,
        {"answered": session.answered_count},
    )
    return session


def set_answer(session: AssessmentSession, question_id: str, value: int) -> None:
    session.set_answer(question_id, value)


def clear_answer(session: AssessmentSession, question_id: str) -> None:
    session.clear_answer(question_id)


def progress(session: AssessmentSession) -> float:
    return session.progress()


def is_complete(session: AssessmentSession) -> bool:
    return session.is_complete()
