"""Pydantic schemas for handing sessions and results to a caller."""

from pydantic import BaseModel, Field

from screening.session import AssessmentSession


class AnswerSubmit(BaseModel):
    """Schema for a single answer relayed from the presentation layer."""

    question_id: str
    value: int = Field(..., ge=0, strict=True)


class SessionSnapshot(BaseModel):
    """Schema for persisting or transmitting a session."""

    instrument_id: str
    session_id: str
    answers: dict[str, int]
    progress: float = Field(..., ge=0.0, le=1.0)
    is_complete: bool

    @classmethod
    def from_session(cls, session: AssessmentSession) -> "SessionSnapshot":
        return cls(
            instrument_id=session.instrument_id,
            session_id=session.session_id,
            answers=dict(session.answers),
            progress=session.progress(),
            is_complete=session.is_complete(),
        )


class ScoringResultRead(BaseModel):
    """Schema for reading a scoring result."""

    instrument_id: str
    total_score: int
    severity_band: str
    partial: bool
    max_score: int
    answered_count: int
    question_count: int
    item_scores: dict[str, int]
    flags: dict[str, bool]
    definition_hash: str

    model_config = {"from_attributes": True}
