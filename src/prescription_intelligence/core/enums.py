# ============================================================================
# src/prescription_intelligence/core/enums.py
# ============================================================================
"""
Enumerations shared across the pipeline
- Extraction source tag
- Interaction severity (explicit ordinal rank)
- Canonical dosing frequency labels
"""

from enum import Enum, IntEnum


class ExtractionSource(Enum):
    """Which strategy produced an extraction result."""
    CAPABILITY = "capability"  # Structured generation by a language model
    HEURISTIC = "heuristic"    # Rule-based fallback parser


class Severity(IntEnum):
    """
    Clinical risk of a drug pair.

    Ordered by integer rank; comparisons and sorting never look at the
    display label.
    """
    MINOR = 0
    MODERATE = 1
    MAJOR = 2
    CONTRAINDICATED = 3

    @property
    def label(self) -> str:
        """Spanish display label."""
        return _SEVERITY_LABELS[self]


_SEVERITY_LABELS = {
    Severity.MINOR: "Menor",
    Severity.MODERATE: "Moderada",
    Severity.MAJOR: "Mayor",
    Severity.CONTRAINDICATED: "Contraindicada",
}


class CanonicalFrequency(Enum):
    """Closed set of dosing frequencies that drive schedule generation."""
    ONCE_DAILY = "1 vez al día"
    TWICE_DAILY = "2 veces al día"
    THREE_TIMES_DAILY = "3 veces al día"
    FOUR_TIMES_DAILY = "4 veces al día"
    SIX_TIMES_DAILY = "6 veces al día"

    @property
    def times_per_day(self) -> int:
        return int(self.value.split()[0])
