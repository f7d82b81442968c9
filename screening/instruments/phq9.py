"""PHQ-9 (Patient Health Questionnaire-9) definition.

The PHQ-9 is a validated 9-item depression screening instrument.
Each item is scored 0-3:
- 0 = Not at all
- 1 = Several days
- 2 = More than half the days
- 3 = Nearly every day

Total score ranges 0-27.

Severity bands (per Kroenke et al., 2001):
- 0-4: Minimal
- 5-9: Mild
- 10-14: Moderate
- 15-19: Moderately Severe
- 20-27: Severe

Item 9 asks about thoughts of self-harm and is flagged whenever it is
answered above zero, regardless of the total.
"""

from typing import TYPE_CHECKING, Mapping

from screening.core.exceptions import InstrumentMismatch
from screening.instruments.models import AnswerOption, Instrument, Question, SeverityBand

if TYPE_CHECKING:
    from screening.scoring.engine import ScoringResult


PHQ9_ID = "phq9"

FREQUENCY_OPTIONS = (
    AnswerOption(0, "Not at all"),
    AnswerOption(1, "Several days"),
    AnswerOption(2, "More than half the days"),
    AnswerOption(3, "Nearly every day"),
)

ITEMS = [
    "Little interest or pleasure in doing things",
    "Feeling down, depressed, or hopeless",
    "Trouble falling or staying asleep, or sleeping too much",
    "Feeling tired or having little energy",
    "Poor appetite or overeating",
    "Feeling bad about yourself, or that you are a failure or have let "
    "yourself or your family down",
    "Trouble concentrating on things, such as reading the newspaper or "
    "watching television",
    "Moving or speaking so slowly that other people could have noticed, or "
    "the opposite, being so fidgety or restless that you have been moving "
    "around a lot more than usual",
    "Thoughts that you would be better off dead, or of hurting yourself in "
    "some way",
]

# Severity band thresholds
SEVERITY_BANDS = [
    SeverityBand(0, 4, "minimal"),
    SeverityBand(5, 9, "mild"),
    SeverityBand(10, 14, "moderate"),
    SeverityBand(15, 19, "moderately_severe"),
    SeverityBand(20, 27, "severe"),
]

ITEM9_ID = "phq9-9"
CORE_ITEM_IDS = ("phq9-1", "phq9-2")

PHQ9 = Instrument(
    id=PHQ9_ID,
    title="PHQ-9 Depression Screening",
    description=(
        "Over the last 2 weeks, how often have you been bothered by any of "
        "the following problems?"
    ),
    questions=[
        Question(id=f"phq9-{number}", text=text, options=FREQUENCY_OPTIONS)
        for number, text in enumerate(ITEMS, start=1)
    ],
    severity_bands=SEVERITY_BANDS,
)


def item9_positive(answers: Mapping[str, int]) -> bool:
    """Check whether the self-harm item was answered above zero.

    An unanswered item 9 is not positive.
    """
    return answers.get(ITEM9_ID, 0) > 0


def flags(answers: Mapping[str, int]) -> dict[str, bool]:
    """Instrument-specific flags attached to every PHQ-9 scoring result."""
    return {"item9_positive": item9_positive(answers)}


def is_major_depression_likely(result: "ScoringResult") -> bool:
    """Check if major depression is likely based on DSM-5 criteria.

    Major depression requires:
    - At least 5 items scored >= 2 (more than half the days)
    - Must include item 1 OR item 2 (core symptoms)

    Partial results never qualify.

    Raises:
        InstrumentMismatch: If the result is not a PHQ-9 result
    """
    if result.instrument_id != PHQ9_ID:
        raise InstrumentMismatch(expected=PHQ9_ID, actual=result.instrument_id)
    if result.partial:
        return False

    items_ge_2 = sum(1 for v in result.item_scores.values() if v >= 2)
    core_symptom_present = any(result.item_scores[item] >= 2 for item in CORE_ITEM_IDS)

    return items_ge_2 >= 5 and core_symptom_present


def get_functional_impairment_question() -> str:
    """Return the standard PHQ-9 functional impairment question.

    This is asked after the 9 items and is not scored.
    """
    return (
        "If you checked off any problems, how difficult have these problems "
        "made it for you to do your work, take care of things at home, or get "
        "along with other people?"
    )
