"""Tests for instrument definition invariants."""

import pytest

from screening.core.exceptions import InvalidInstrument, ScoringConfigurationError
from screening.instruments import GAD7, PHQ9
from screening.instruments.models import AnswerOption, Instrument, Question, SeverityBand
from screening.scoring import score
from screening.session import create_session

OPTIONS = [AnswerOption(0, "No"), AnswerOption(1, "Yes")]


def _instrument(**overrides) -> Instrument:
    fields = {
        "id": "yesno",
        "title": "Yes/No",
        "description": "",
        "questions": [Question("q1", "One", OPTIONS), Question("q2", "Two", OPTIONS)],
        "severity_bands": [SeverityBand(0, 1, "low"), SeverityBand(2, 2, "high")],
    }
    fields.update(overrides)
    return Instrument(**fields)


class TestQuestionInvariants:
    """Tests for question construction."""

    def test_options_stored_in_order(self) -> None:
        """Test options keep their declared order as a tuple."""
        question = Question("q", "Text", [AnswerOption(3, "c"), AnswerOption(1, "a")])

        assert question.options == (AnswerOption(3, "c"), AnswerOption(1, "a"))
        assert question.min_value == 1
        assert question.max_value == 3

    def test_label_for_unknown_value(self) -> None:
        """Test label lookup for a value that is not an option."""
        assert Question("q", "Text", OPTIONS).label_for(2) is None

    def test_empty_options_rejected(self) -> None:
        """Test a question needs at least one option."""
        with pytest.raises(InvalidInstrument):
            Question("q", "Text", [])

    def test_negative_value_rejected(self) -> None:
        """Test option values must be non-negative."""
        with pytest.raises(InvalidInstrument):
            Question("q", "Text", [AnswerOption(-1, "Less")])

    def test_duplicate_value_rejected(self) -> None:
        """Test option values must be unique within a question."""
        with pytest.raises(InvalidInstrument):
            Question("q", "Text", [AnswerOption(1, "a"), AnswerOption(1, "b")])

    def test_bool_value_rejected(self) -> None:
        """Test booleans are not accepted as option values."""
        with pytest.raises(InvalidInstrument):
            Question("q", "Text", [AnswerOption(True, "Yes")])


class TestInstrumentInvariants:
    """Tests for instrument construction and lookup."""

    def test_empty_questions_rejected(self) -> None:
        """Test an instrument needs at least one question."""
        with pytest.raises(InvalidInstrument):
            _instrument(questions=[])

    def test_duplicate_question_ids_rejected(self) -> None:
        """Test question ids must be unique."""
        with pytest.raises(InvalidInstrument):
            _instrument(questions=[Question("q1", "One", OPTIONS), Question("q1", "Again", OPTIONS)])

    def test_empty_bands_rejected(self) -> None:
        """Test an instrument needs severity bands."""
        with pytest.raises(InvalidInstrument):
            _instrument(severity_bands=[])

    def test_question_lookup(self) -> None:
        """Test questions are found by id, not position."""
        instrument = _instrument()

        assert instrument.question("q2").text == "Two"
        assert instrument.question("q3") is None

    def test_instruments_are_immutable(self) -> None:
        """Test instrument fields cannot be reassigned."""
        with pytest.raises(AttributeError):
            PHQ9.id = "other"  # type: ignore[misc]


class TestCheckBands:
    """Tests for severity band coverage checks."""

    def test_well_formed_bands(self) -> None:
        """Test contiguous bands covering the range pass."""
        _instrument().check_bands()
        PHQ9.check_bands()
        GAD7.check_bands()

    def test_bands_below_min_score_accepted(self) -> None:
        """Test a 1-based scale may use bands starting at 0."""
        options = [AnswerOption(1, "Rarely"), AnswerOption(2, "Often")]
        instrument = _instrument(
            questions=[Question(f"q{i}", f"Item {i}", options) for i in range(1, 4)],
            severity_bands=[SeverityBand(0, 4, "low"), SeverityBand(5, 6, "high")],
        )
        session = create_session(instrument)
        for question_id in instrument.question_ids:
            session.set_answer(question_id, 1)

        instrument.check_bands()
        result = score(session, instrument)

        assert instrument.min_score == 3
        assert result.total_score == 3
        assert result.severity_band == "low"

    def test_first_band_above_min_score_detected(self) -> None:
        """Test bands starting above the lowest achievable score are reported."""
        instrument = _instrument(
            severity_bands=[SeverityBand(1, 1, "low"), SeverityBand(2, 2, "high")]
        )
        with pytest.raises(ScoringConfigurationError, match="0-0"):
            instrument.check_bands()

    def test_gap_detected(self) -> None:
        """Test a gap between bands is reported."""
        instrument = _instrument(
            severity_bands=[SeverityBand(0, 0, "low"), SeverityBand(2, 2, "high")]
        )
        with pytest.raises(ScoringConfigurationError, match="1-1"):
            instrument.check_bands()

    def test_overlap_detected(self) -> None:
        """Test overlapping bands are reported."""
        instrument = _instrument(
            severity_bands=[SeverityBand(0, 1, "low"), SeverityBand(1, 2, "high")]
        )
        with pytest.raises(ScoringConfigurationError):
            instrument.check_bands()

    def test_uncovered_top_detected(self) -> None:
        """Test bands that stop short of the maximum score are reported."""
        instrument = _instrument(severity_bands=[SeverityBand(0, 1, "low")])
        with pytest.raises(ScoringConfigurationError):
            instrument.check_bands()

    def test_inverted_band_detected(self) -> None:
        """Test a band with low above high is reported."""
        instrument = _instrument(
            severity_bands=[SeverityBand(0, 1, "low"), SeverityBand(2, 1, "high")]
        )
        with pytest.raises(ScoringConfigurationError):
            instrument.check_bands()


class TestDefinitionHash:
    """Tests for definition hashing."""

    def test_hash_is_stable(self) -> None:
        """Test hashing the same definition twice is stable."""
        assert PHQ9.definition_hash == PHQ9.definition_hash
        assert len(PHQ9.definition_hash) == 64

    def test_hash_changes_with_definition(self) -> None:
        """Test different definitions hash differently."""
        assert _instrument().definition_hash != _instrument(version="2.0.0").definition_hash
        assert PHQ9.definition_hash != GAD7.definition_hash
