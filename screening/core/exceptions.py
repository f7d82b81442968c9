"""Assessment engine errors.

All errors are logic errors raised at the offending call; none are
transient and none are retried.
"""

from typing import Any, Iterable


class AssessmentError(Exception):
    """Base class for assessment engine errors."""


class InvalidAnswer(AssessmentError):
    """Raised when an answer names an unknown question or an invalid option value."""

    def __init__(self, question_id: str, value: Any, reason: str) -> None:
        self.question_id = question_id
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid answer {value!r} for question {question_id!r}: {reason}")


class InstrumentMismatch(AssessmentError):
    """Raised when a session or result is paired with the wrong instrument."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Instrument mismatch: expected {expected!r}, got {actual!r}")


class ScoringConfigurationError(AssessmentError):
    """Raised when an instrument's severity bands cannot classify its score range.

    This is an authoring bug in the instrument definition, never a
    user-input problem.
    """

    def __init__(self, instrument_id: str, detail: str) -> None:
        self.instrument_id = instrument_id
        self.detail = detail
        super().__init__(f"Scoring configuration error in {instrument_id!r}: {detail}")


class InvalidInstrument(AssessmentError):
    """Raised when an instrument definition breaks a structural invariant."""


class IncompleteAssessment(AssessmentError):
    """Raised when partial scoring is disabled and a session is not complete."""

    def __init__(self, instrument_id: str, missing: Iterable[str]) -> None:
        self.instrument_id = instrument_id
        self.missing = tuple(missing)
        super().__init__(
            f"Assessment {instrument_id!r} is incomplete: "
            f"{len(self.missing)} unanswered question(s)"
        )


class UnknownInstrument(AssessmentError):
    """Raised when an instrument id is not registered."""

    def __init__(self, instrument_id: str) -> None:
        self.instrument_id = instrument_id
        super().__init__(f"Unknown instrument: {instrument_id!r}")
