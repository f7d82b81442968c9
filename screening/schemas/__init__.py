"""Pydantic schemas for the caller's persistence boundary."""

from screening.schemas.assessment import AnswerSubmit, ScoringResultRead, SessionSnapshot

__all__ = ["AnswerSubmit", "ScoringResultRead", "SessionSnapshot"]
