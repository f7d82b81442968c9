"""GAD-7 (Generalized Anxiety Disorder-7) definition.

The GAD-7 is a validated 7-item anxiety screening instrument.
Each item is scored 0-3:
- 0 = Not at all
- 1 = Several days
- 2 = More than half the days
- 3 = Nearly every day

Total score ranges 0-21.

Severity bands (per Spitzer et al., 2006):
- 0-4: Minimal
- 5-9: Mild
- 10-14: Moderate
- 15-21: Severe
"""

from typing import TYPE_CHECKING

from screening.core.exceptions import InstrumentMismatch
from screening.instruments.models import Instrument, Question, SeverityBand
from screening.instruments.phq9 import FREQUENCY_OPTIONS

if TYPE_CHECKING:
    from screening.scoring.engine import ScoringResult


GAD7_ID = "gad7"

ITEMS = [
    "Feeling nervous, anxious, or on edge",
    "Not being able to stop or control worrying",
    "Worrying too much about different things",
    "Trouble relaxing",
    "Being so restless that it is hard to sit still",
    "Becoming easily annoyed or irritable",
    "Feeling afraid, as if something awful might happen",
]

# Severity band thresholds
SEVERITY_BANDS = [
    SeverityBand(0, 4, "minimal"),
    SeverityBand(5, 9, "mild"),
    SeverityBand(10, 14, "moderate"),
    SeverityBand(15, 21, "severe"),
]

# Score at or above which clinically significant anxiety is likely
GAD_THRESHOLD = 10

GAD7 = Instrument(
    id=GAD7_ID,
    title="GAD-7 Anxiety Screening",
    description=(
        "Over the last 2 weeks, how often have you been bothered by the "
        "following problems?"
    ),
    questions=[
        Question(id=f"gad7-{number}", text=text, options=FREQUENCY_OPTIONS)
        for number, text in enumerate(ITEMS, start=1)
    ],
    severity_bands=SEVERITY_BANDS,
)


def is_gad_likely(result: "ScoringResult") -> bool:
    """Check if GAD is likely based on screening criteria.

    A final score >= 10 suggests clinically significant anxiety.

    Raises:
        InstrumentMismatch: If the result is not a GAD-7 result
    """
    if result.instrument_id != GAD7_ID:
        raise InstrumentMismatch(expected=GAD7_ID, actual=result.instrument_id)
    return not result.partial and result.total_score >= GAD_THRESHOLD
