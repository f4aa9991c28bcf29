# ============================================================================
# src/prescription_intelligence/processors/prescription/agents/field_extractor.py
# ============================================================================
"""
Prescriber and Date Extraction

Pulls the doctor name and the prescription date out of the normalized
line sequence.

Doctor name: first line (in document order) matching any prescriber
prefix wins; the text after the prefix is the name.

Date: the lines are joined and scanned for date shapes in priority
order; the first shape whose text actually parses is the date. Spanish
month names are tried before English ones.
"""

from datetime import date, datetime
from typing import Optional, Sequence, Tuple
import logging
import re

from ....core.rules import PatternRule, RuleSet, first_group

logger = logging.getLogger(__name__)


# Name must start with a word character, so a bare "Dr." line is skipped
_NAME = r'(\w.*)'

DOCTOR_RULES = RuleSet([
    PatternRule("medico_tratante", r'\bm[ée]dico\s+tratante\s*[.:]?\s*' + _NAME, first_group),
    PatternRule("prescribe", r'\bprescribe\s*[.:]?\s*' + _NAME, first_group),
    PatternRule("doctora", r'\bdoctora\b\s*[.:]?\s*' + _NAME, first_group),
    PatternRule("doctor", r'\bdoctor\b\s*[.:]?\s*' + _NAME, first_group),
    PatternRule("dra", r'\bdra\b\s*[.:]?\s*' + _NAME, first_group),
    PatternRule("dr", r'\bdr\b\s*[.:]?\s*' + _NAME, first_group),
    PatternRule("medico", r'\bm[ée]dico\b\s*[.:]?\s*' + _NAME, first_group),
])

SPANISH_MONTHS = {
    "enero": "January",
    "febrero": "February",
    "marzo": "March",
    "abril": "April",
    "mayo": "May",
    "junio": "June",
    "julio": "July",
    "agosto": "August",
    "septiembre": "September",
    "setiembre": "September",
    "octubre": "October",
    "noviembre": "November",
    "diciembre": "December",
}

_SPANISH_MONTH_RE = re.compile(r'\b(' + "|".join(SPANISH_MONTHS) + r')\b', re.IGNORECASE)

DATE_SHAPE_RULES = RuleSet([
    PatternRule(
        "numeric_dmy",
        r'(?<!\d)(\d{1,2}[/-]\d{1,2}[/-](?:\d{4}|\d{2}))(?!\d)',
        first_group,
    ),
    PatternRule(
        "numeric_ymd",
        r'(?<!\d)(\d{4}[/-]\d{1,2}[/-]\d{1,2})(?!\d)',
        first_group,
    ),
    PatternRule(
        "spanish_long",
        r'(\d{1,2}\s+de\s+(?:' + "|".join(SPANISH_MONTHS) + r')\s+de\s+\d{4})',
        first_group,
    ),
    PatternRule(
        "english_long",
        r'((?:January|February|March|April|May|June|July|August|September|'
        r'October|November|December)\s+\d{1,2},?\s+\d{4})',
        first_group,
    ),
])

DATE_FORMATS = (
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d/%m/%y",
    "%d-%m-%y",
    "%m/%d/%Y",
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%d %B %Y",
    "%d de %B de %Y",
    "%B %d, %Y",
    "%B %d %Y",
)


def _translate_spanish_months(text: str) -> str:
    return _SPANISH_MONTH_RE.sub(lambda m: SPANISH_MONTHS[m.group(1).lower()], text)


def _try_formats(text: str) -> Optional[date]:
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_date_string(raw: str) -> Optional[date]:
    """
    Parse a date substring: Spanish pass first, then English.

    Returns None when no format fits.
    """
    cleaned = raw.strip()
    if not cleaned:
        return None
    return _try_formats(_translate_spanish_months(cleaned)) or _try_formats(cleaned)


class FieldExtractor:
    """
    Extracts doctor name and prescription date from normalized lines.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract(self, lines: Sequence[str]) -> Tuple[Optional[str], Optional[date]]:
        return self.extract_doctor_name(lines), self.extract_prescription_date(lines)

    def extract_doctor_name(self, lines: Sequence[str]) -> Optional[str]:
        for line in lines:
            hit = DOCTOR_RULES.first_match(line)
            if hit:
                self.logger.debug(f"Doctor name via '{hit.rule_name}': {hit.value}")
                return hit.value
        return None

    def extract_prescription_date(self, lines: Sequence[str]) -> Optional[date]:
        joined = " ".join(lines)
        if not joined:
            return None

        for rule in DATE_SHAPE_RULES.rules:
            hit = rule.apply(joined)
            if hit is None:
                continue
            parsed = parse_date_string(hit.value)
            if parsed is not None:
                self.logger.debug(f"Prescription date via '{rule.name}': {parsed.isoformat()}")
                return parsed
            self.logger.debug(f"Date shape '{rule.name}' matched {hit.value!r} but did not parse")

        return None
