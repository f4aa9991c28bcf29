# ============================================================================
# src/prescription_intelligence/processors/prescription/agents/dosage_parser.py
# ============================================================================
"""
Dosage and Frequency Parser

- Parses dosage strings ("500 mg", "2.5 ml") into amount + unit
- Maps free-form frequency phrasings (Spanish and English) onto the closed
  set of canonical labels
- Generates the dose-time schedule for a canonical label

The dose-time table below is the single authoritative schedule; callers
that persist or notify build their reminders from it.
"""

from datetime import date, datetime, timedelta
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple
import logging
import re

from ....core.enums import CanonicalFrequency
from ....core.models import ParsedDosage
from ....core.rules import PatternRule, RuleSet

logger = logging.getLogger(__name__)


class DoseSlot(NamedTuple):
    """Time of day for one dose; day_offset=1 means the next calendar day."""
    hour: int
    minute: int
    day_offset: int = 0

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


# Canonical unit spelling for each accepted token (lowercase key)
UNIT_VOCABULARY = {
    "mg/ml": "mg/ml",
    "ml/hora": "ml/hora",
    "mcg": "mcg",
    "mg": "mg",
    "ml": "ml",
    "ui": "UI",
    "gr": "gr",
    "g": "g",
}

# Compound units listed first, otherwise "mg" would always win over "mg/ml".
# Decimal comma or point; a match never starts inside a number.
DOSAGE_PATTERN = re.compile(
    r'(?<![\d.,])(\d+(?:[.,]\d+)?)\s*(mg/ml|ml/hora|mcg|mg|ml|ui|gr|g)(?![a-záéíóúñ])',
    re.IGNORECASE
)


def _tier(*alternatives: str) -> str:
    """Join alternative phrasings of one canonical label into a single pattern."""
    return "|".join(alternatives)


_ONCE = CanonicalFrequency.ONCE_DAILY
_TWICE = CanonicalFrequency.TWICE_DAILY
_THRICE = CanonicalFrequency.THREE_TIMES_DAILY
_FOUR = CanonicalFrequency.FOUR_TIMES_DAILY
_SIX = CanonicalFrequency.SIX_TIMES_DAILY


def _label(freq: CanonicalFrequency):
    return lambda match: freq


# Priority order: interval/count phrasings first, then English shorthand.
# Numbers are digit-bounded so "cada 4" never matches "cada 48".
FREQUENCY_NORMALIZATION_RULES = RuleSet([
    PatternRule("once", _tier(
        r'cada\s*24(?!\d)', r'(?<!\d)1\s*vez', r'\buna\s+vez', r'\bonce\b',
        r'every\s*24(?!\d)'), _label(_ONCE)),
    PatternRule("twice", _tier(
        r'cada\s*12(?!\d)', r'(?<!\d)2\s*veces', r'\btwice\b',
        r'every\s*12(?!\d)'), _label(_TWICE)),
    PatternRule("three_times", _tier(
        r'cada\s*8(?!\d)', r'(?<!\d)3\s*veces', r'\bthree\s+times\b',
        r'every\s*8(?!\d)'), _label(_THRICE)),
    PatternRule("four_times", _tier(
        r'cada\s*6(?!\d)', r'(?<!\d)4\s*veces', r'\bfour\s+times\b',
        r'every\s*6(?!\d)'), _label(_FOUR)),
    PatternRule("six_times", _tier(
        r'cada\s*4(?!\d)', r'(?<!\d)6\s*veces', r'every\s*4(?!\d)'), _label(_SIX)),
    PatternRule("daily", r'\bdaily\b|\bevery\s+day\b', _label(_ONCE)),
    PatternRule("bid", r'\bb\.?i\.?d\b', _label(_TWICE)),
    PatternRule("tid", r'\bt\.?i\.?d\b', _label(_THRICE)),
    PatternRule("qid", r'\bq\.?i\.?d\b', _label(_FOUR)),
])


DOSE_TIME_TABLE: Dict[CanonicalFrequency, Tuple[DoseSlot, ...]] = {
    CanonicalFrequency.ONCE_DAILY: (
        DoseSlot(8, 0),
    ),
    CanonicalFrequency.TWICE_DAILY: (
        DoseSlot(8, 0), DoseSlot(20, 0),
    ),
    CanonicalFrequency.THREE_TIMES_DAILY: (
        DoseSlot(8, 0), DoseSlot(14, 0), DoseSlot(20, 0),
    ),
    CanonicalFrequency.FOUR_TIMES_DAILY: (
        DoseSlot(8, 0), DoseSlot(12, 0), DoseSlot(16, 0), DoseSlot(20, 0),
    ),
    CanonicalFrequency.SIX_TIMES_DAILY: (
        DoseSlot(6, 0), DoseSlot(10, 0), DoseSlot(14, 0),
        DoseSlot(18, 0), DoseSlot(22, 0), DoseSlot(2, 0, day_offset=1),
    ),
}


def parse_dosage(text: str) -> Optional[ParsedDosage]:
    """
    Parse the first dosage in text.

    Args:
        text: Free-form dosage string, e.g. "Tomar 2.5 ml"

    Returns:
        ParsedDosage, or None if no number+unit is present
    """
    if not text:
        return None
    match = DOSAGE_PATTERN.search(text)
    if not match:
        return None

    number = match.group(1).replace(",", ".")
    unit = UNIT_VOCABULARY[match.group(2).lower()]
    return ParsedDosage(
        amount=float(number),
        unit=unit,
        formatted=f"{number} {unit}",
    )


def canonical_frequency(text: str) -> Optional[CanonicalFrequency]:
    """Canonical label for a frequency phrasing, or None if unrecognized."""
    if not text:
        return None
    hit = FREQUENCY_NORMALIZATION_RULES.first_match(text.lower())
    return hit.value if hit else None


def normalize_frequency(text: str) -> str:
    """
    Map a frequency phrasing to its canonical label.

    Unrecognized input is returned unchanged, so applying this twice is the
    same as applying it once.
    """
    freq = canonical_frequency(text)
    return freq.value if freq else text


def generate_times(label: str) -> List[DoseSlot]:
    """
    Dose times of day for a frequency label.

    The label is normalized first, so free-form phrasings work too.
    Unrecognized labels get the once-daily schedule.
    """
    freq = canonical_frequency(label) or CanonicalFrequency.ONCE_DAILY
    return list(DOSE_TIME_TABLE[freq])


def schedule_for(label: str, start: date) -> List[datetime]:
    """Concrete dose datetimes for the day `start`."""
    base = datetime(start.year, start.month, start.day)
    return [
        base + timedelta(days=slot.day_offset, hours=slot.hour, minutes=slot.minute)
        for slot in generate_times(label)
    ]


def next_dose_time(slots: Sequence[DoseSlot], now: datetime) -> Optional[datetime]:
    """
    Next dose after `now`.

    Looks for the first slot later today by time of day; if none is left,
    returns the earliest slot tomorrow.
    """
    if not slots:
        return None

    ordered = sorted(slots, key=lambda s: (s.hour, s.minute))
    today = datetime(now.year, now.month, now.day)

    for slot in ordered:
        candidate = today + timedelta(hours=slot.hour, minutes=slot.minute)
        if candidate > now:
            return candidate

    first = ordered[0]
    return today + timedelta(days=1, hours=first.hour, minutes=first.minute)
