# ============================================================================
# src/prescription_intelligence/processors/prescription/agents/medication_segmenter.py
# ============================================================================
"""
Medication Segmenter

Splits the normalized line sequence into one group per medication.

A line with a dosage-shaped substring ("500 mg", "10 ml", "1 UI") is a
trigger line: it opens a new medication and closes the previous one.
Lines after a trigger (that are not section headers) are that
medication's instructions.

States:
    IdleState           no medication open
    AccumulatingState   a medication is open and collecting instructions

Transitions (per line):
    trigger,  Idle          -> Accumulating(seeded from line)
    trigger,  Accumulating  -> flush, Accumulating(seeded from line)
    other,    Accumulating  -> Accumulating(+instructions)   unless header
    other,    Idle          -> Idle
    end of input            -> flush if Accumulating

If no trigger line exists at all, a token-level scan pairs capitalized
words with the next "<n>mg"/"<n>ml" token as a last resort.
"""

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple, Union
import logging
import re
import string

from ....constants.policy import (
    FALLBACK_DOSAGE,
    FALLBACK_FREQUENCY,
    HEADER_WORDS,
    NAME_STOP_WORDS,
    UNKNOWN_MEDICATION_NAME,
)
from ....core.models import ExtractedMedication
from ....core.rules import PatternRule, RuleSet

logger = logging.getLogger(__name__)


TRIGGER_PATTERN = re.compile(
    r'\d+(?:[.,]\d+)?\s*(?:mg|ml|mcg|ui|gramos?|gr|g|unidad(?:es)?)(?![a-záéíóúñ])',
    re.IGNORECASE
)

# Frequency phrasings captured verbatim (lowercased) from a trigger line
FREQUENCY_CAPTURE_RULES = RuleSet([
    PatternRule("cada_n", r'cada\s+\d+\s*(?:horas?|hrs?|h|d[ií]as?)\b'),
    PatternRule("n_veces_al_dia", r'\d+\s*veces\s+(?:al|por)\s+d[ií]a'),
    PatternRule("una_vez_al_dia", r'\b(?:una|1)\s+vez\s+(?:al|por)\s+d[ií]a'),
    PatternRule("every_n_hours", r'every\s+\d+\s*hours?'),
    PatternRule("n_times_daily", r'\b(?:once|twice|three\s+times|four\s+times)\s+(?:daily|a\s+day)'),
    PatternRule("latin_abbrev", r'\b(?:bid|tid|qid)\b'),
    PatternRule("n_veces", r'\b\d+\s*(?:vez|veces|times)\b'),
])

_STOP_WORDS_RE = re.compile(
    r'(?<!\w)(?:' + "|".join(re.escape(w) for w in NAME_STOP_WORDS) + r')(?!\w)',
    re.IGNORECASE
)

# "1.", "2)", "-", "•", "Rx:" at the start of a medication line
_LIST_MARKER_RE = re.compile(r'^\s*(?:\d+\s*[.)]|[-•*]|rx\s*[:.])\s*', re.IGNORECASE)

_FALLBACK_DOSAGE_RE = re.compile(r'\d+\s*(?:mg|ml)', re.IGNORECASE)


@dataclass(frozen=True)
class IdleState:
    pass


@dataclass(frozen=True)
class AccumulatingState:
    name: str
    dosage: str
    frequency: str
    instructions: Tuple[str, ...] = ()


SegmenterState = Union[IdleState, AccumulatingState]

IDLE = IdleState()


def find_dosage(line: str) -> Optional["re.Match[str]"]:
    """Dosage-shaped substring of a line, if any."""
    return TRIGGER_PATTERN.search(line)


def is_header_line(line: str) -> bool:
    lowered = line.lower()
    return any(word in lowered for word in HEADER_WORDS)


def extract_frequency(line: str) -> str:
    hit = FREQUENCY_CAPTURE_RULES.first_match(line)
    return hit.span_text.lower() if hit else ""


def _capitalize_word(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def derive_name(line: str, dosage_text: str, frequency_text: str = "") -> str:
    """
    Medication name from a trigger line.

    Removes the dosage and frequency text, list markers and stop words,
    drops punctuation-only leftovers and capitalizes each word.
    """
    name = line.replace(dosage_text, " ", 1)
    if frequency_text:
        name = re.sub(re.escape(frequency_text), " ", name, count=1, flags=re.IGNORECASE)
    name = _LIST_MARKER_RE.sub("", name)
    name = _STOP_WORDS_RE.sub(" ", name)

    words = [w.strip(string.punctuation + "•") for w in name.split()]
    words = [_capitalize_word(w) for w in words if w]
    return " ".join(words) or UNKNOWN_MEDICATION_NAME


def seed_from_line(line: str, dosage_match: "re.Match[str]") -> AccumulatingState:
    dosage_text = dosage_match.group(0)
    frequency = extract_frequency(line)
    return AccumulatingState(
        name=derive_name(line, dosage_text, frequency),
        dosage=dosage_text.lower(),
        frequency=frequency,
    )


def flush(state: AccumulatingState) -> ExtractedMedication:
    """Close an open medication, applying sentinels to empty fields."""
    instructions = " ".join(state.instructions).strip()
    return ExtractedMedication(
        name=state.name or UNKNOWN_MEDICATION_NAME,
        dosage=state.dosage or FALLBACK_DOSAGE,
        frequency=state.frequency or FALLBACK_FREQUENCY,
        instructions=instructions or None,
    )


def step(state: SegmenterState, line: str) -> Tuple[SegmenterState, Optional[ExtractedMedication]]:
    """
    Advance the state machine by one line.

    Returns the next state and the medication flushed by this line, if any.
    """
    dosage_match = find_dosage(line)

    if dosage_match:
        emitted = flush(state) if isinstance(state, AccumulatingState) else None
        return seed_from_line(line, dosage_match), emitted

    if isinstance(state, AccumulatingState) and not is_header_line(line):
        return replace(state, instructions=state.instructions + (line,)), None

    return state, None


class MedicationSegmenter:
    """
    Groups prescription lines into medication records.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def segment(self, lines: Sequence[str]) -> List[ExtractedMedication]:
        medications: List[ExtractedMedication] = []
        state: SegmenterState = IDLE

        for line in lines:
            state, emitted = step(state, line)
            if emitted is not None:
                medications.append(emitted)

        if isinstance(state, AccumulatingState):
            medications.append(flush(state))

        if not medications:
            medications = self.fallback_tokens(lines)
            if medications:
                self.logger.info(f"Token fallback recovered {len(medications)} medications")

        self.logger.debug(f"Segmented {len(lines)} lines into {len(medications)} medications")
        return medications

    def fallback_tokens(self, lines: Sequence[str]) -> List[ExtractedMedication]:
        """
        Last-resort pairing of capitalized tokens with dosage tokens.

        Tokens are processed strictly in order. A dosage token consumes the
        most recent candidate name; consuming (or finding none) clears it.
        """
        extracted: List[ExtractedMedication] = []
        candidate: Optional[str] = None

        for line in lines:
            for token in line.split():
                cleaned = token.strip(string.punctuation + "•")
                if not cleaned:
                    continue
                if _FALLBACK_DOSAGE_RE.search(cleaned):
                    if candidate:
                        extracted.append(ExtractedMedication(
                            name=candidate,
                            dosage=cleaned,
                            frequency=FALLBACK_FREQUENCY,
                        ))
                    candidate = None
                elif len(cleaned) > 3 and cleaned[0].isupper():
                    candidate = cleaned

        return extracted
