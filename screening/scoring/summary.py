"""Combined mental-health summary from a PHQ-9 and a GAD-7 result."""

from dataclasses import dataclass, field

from screening.core.exceptions import InstrumentMismatch
from screening.instruments.gad7 import GAD7_ID
from screening.instruments.phq9 import PHQ9_ID
from screening.scoring.engine import ScoringResult

HIGH_RISK_BANDS = {"moderately_severe", "severe"}
MEDIUM_RISK_BANDS = {"moderate"}

CRISIS_GUIDANCE = (
    "If you are having thoughts of harming yourself, contact a crisis "
    "helpline or emergency services now."
)

RECOMMENDATIONS = {
    "critical": [
        CRISIS_GUIDANCE,
        "Speak to a mental health professional as soon as possible.",
        "Let someone you trust know how you are feeling.",
    ],
    "high": [
        "Book an appointment with a doctor or mental health professional.",
        "Share these results with your clinician.",
        "Keep regular routines for sleep, meals and activity.",
    ],
    "medium": [
        "Consider talking to a doctor about your symptoms.",
        "Try regular exercise, sleep hygiene and stress-reduction techniques.",
        "Repeat this screening in two weeks to track changes.",
    ],
    "low": [
        "Keep up healthy habits that support your wellbeing.",
        "Repeat this screening if your mood or anxiety changes.",
    ],
}

INTERPRETATIONS = {
    "critical": "Your answers indicate a need for immediate support.",
    "high": "Your answers suggest significant symptoms of depression or anxiety.",
    "medium": "Your answers suggest moderate symptoms that may benefit from support.",
    "low": "Your answers suggest minimal or mild symptoms.",
}


@dataclass(frozen=True)
class MentalHealthSummary:
    """Overall wellbeing picture across depression and anxiety screening."""
    overall_score: int
    risk_level: str
    interpretation: str
    recommendations: list[str] = field(default_factory=list)
    partial: bool = False


def get_risk_level(phq9_result: ScoringResult, gad7_result: ScoringResult) -> str:
    """Determine the combined risk level.

    A positive PHQ-9 item 9 is critical regardless of either total.
    """
    if phq9_result.flags.get("item9_positive"):
        return "critical"

    bands = {phq9_result.severity_band, gad7_result.severity_band}
    if bands & HIGH_RISK_BANDS:
        return "high"
    if bands & MEDIUM_RISK_BANDS:
        return "medium"
    return "low"


def summarize(phq9_result: ScoringResult, gad7_result: ScoringResult) -> MentalHealthSummary:
    """Combine PHQ-9 and GAD-7 results into a 0-100 wellbeing summary.

    Raises:
        InstrumentMismatch: If the results are not a PHQ-9 and a GAD-7 result
    """
    if phq9_result.instrument_id != PHQ9_ID:
        raise InstrumentMismatch(expected=PHQ9_ID, actual=phq9_result.instrument_id)
    if gad7_result.instrument_id != GAD7_ID:
        raise InstrumentMismatch(expected=GAD7_ID, actual=gad7_result.instrument_id)

    # Each instrument carries half the weight of the wellbeing score
    burden = (
        50 * phq9_result.total_score / phq9_result.max_score
        + 50 * gad7_result.total_score / gad7_result.max_score
    )
    risk_level = get_risk_level(phq9_result, gad7_result)

    return MentalHealthSummary(
        overall_score=round(100 - burden),
        risk_level=risk_level,
        interpretation=INTERPRETATIONS[risk_level],
        recommendations=list(RECOMMENDATIONS[risk_level]),
        partial=phq9_result.partial or gad7_result.partial,
    )
