"""Instrument definition data model.

An instrument is pure, immutable data: an ordered list of questions,
each with a fixed set of ordinal answer options, plus the published
severity bands used to classify a total score.
"""

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Optional

from screening.core.exceptions import InvalidInstrument, ScoringConfigurationError


@dataclass(frozen=True)
class AnswerOption:
    """A single selectable response and its point value."""
    value: int
    label: str


@dataclass(frozen=True)
class Question:
    """One scored item within an instrument."""
    id: str
    text: str
    options: tuple[AnswerOption, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", tuple(self.options))

        if not self.id:
            raise InvalidInstrument("Question id must be a non-empty string")
        if not self.options:
            raise InvalidInstrument(f"Question {self.id!r} has no answer options")

        seen: set[int] = set()
        for option in self.options:
            # bool is an int subclass but never a valid point value
            if isinstance(option.value, bool) or not isinstance(option.value, int):
                raise InvalidInstrument(
                    f"Question {self.id!r} option values must be integers, "
                    f"got {option.value!r}"
                )
            if option.value < 0:
                raise InvalidInstrument(
                    f"Question {self.id!r} option values must be non-negative, "
                    f"got {option.value}"
                )
            if option.value in seen:
                raise InvalidInstrument(
                    f"Question {self.id!r} has duplicate option value {option.value}"
                )
            seen.add(option.value)

    @property
    def valid_values(self) -> frozenset[int]:
        """Domain of valid answers for this question."""
        return frozenset(option.value for option in self.options)

    @property
    def min_value(self) -> int:
        return min(option.value for option in self.options)

    @property
    def max_value(self) -> int:
        return max(option.value for option in self.options)

    def label_for(self, value: int) -> Optional[str]:
        """Return the option label for a value, or None if the value is not an option."""
        for option in self.options:
            if option.value == value:
                return option.label
        return None


@dataclass(frozen=True)
class SeverityBand:
    """Closed score interval [low, high] mapped to a severity label."""
    low: int
    high: int
    label: str

    def contains(self, total: int) -> bool:
        return self.low <= total <= self.high


@dataclass(frozen=True)
class Instrument:
    """A standardized questionnaire definition.

    Question order is the item numbering and is never changed after
    construction. Severity bands are ordered least to greatest.
    """
    id: str
    title: str
    description: str
    questions: tuple[Question, ...]
    severity_bands: tuple[SeverityBand, ...]
    version: str = "1.0.0"
    _index: dict[str, Question] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "questions", tuple(self.questions))
        object.__setattr__(self, "severity_bands", tuple(self.severity_bands))

        if not self.id:
            raise InvalidInstrument("Instrument id must be a non-empty string")
        if not self.questions:
            raise InvalidInstrument(f"Instrument {self.id!r} has no questions")
        if not self.severity_bands:
            raise InvalidInstrument(f"Instrument {self.id!r} has no severity bands")

        for question in self.questions:
            if question.id in self._index:
                raise InvalidInstrument(
                    f"Instrument {self.id!r} has duplicate question id {question.id!r}"
                )
            self._index[question.id] = question

    def question(self, question_id: str) -> Optional[Question]:
        """Look up a question by id."""
        return self._index.get(question_id)

    @property
    def question_ids(self) -> tuple[str, ...]:
        return tuple(question.id for question in self.questions)

    @property
    def min_score(self) -> int:
        return sum(question.min_value for question in self.questions)

    @property
    def max_score(self) -> int:
        return sum(question.max_value for question in self.questions)

    def check_bands(self) -> None:
        """Verify the severity bands cover [min_score, max_score] without gaps or overlaps.

        Bands may extend below min_score or above max_score, so a 1-based
        scale can use bands that start at 0.

        Raises:
            ScoringConfigurationError: If the bands are mis-authored.
        """
        expected_low = min(self.min_score, self.severity_bands[0].low)
        for band in self.severity_bands:
            if band.low > band.high:
                raise ScoringConfigurationError(
                    self.id, f"band {band.label!r} has low {band.low} > high {band.high}"
                )
            if band.low < expected_low:
                raise ScoringConfigurationError(
                    self.id, f"band {band.label!r} overlaps or is out of order at {band.low}"
                )
            if band.low > expected_low:
                raise ScoringConfigurationError(
                    self.id,
                    f"scores {expected_low}-{band.low - 1} are not covered by any band",
                )
            expected_low = band.high + 1

        if expected_low <= self.max_score:
            raise ScoringConfigurationError(
                self.id,
                f"scores {expected_low}-{self.max_score} are not covered by any band",
            )

    def to_dict(self) -> dict[str, Any]:
        """Plain-data rendering, the same shape the YAML loader reads."""
        return {
            "id": self.id,
            "version": self.version,
            "title": self.title,
            "description": self.description,
            "questions": [
                {
                    "id": question.id,
                    "text": question.text,
                    "options": [
                        {"value": option.value, "label": option.label}
                        for option in question.options
                    ],
                }
                for question in self.questions
            ],
            "severity_bands": [
                {"low": band.low, "high": band.high, "label": band.label}
                for band in self.severity_bands
            ],
        }

    @property
    def definition_hash(self) -> str:
        """SHA256 of the canonical JSON rendering of this definition."""
        canonical = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
