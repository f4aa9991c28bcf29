# ============================================================================
# src/prescription_intelligence/processors/prescription/agents/__init__.py
# ============================================================================
"""
Heuristic prescription parsing agents.
"""

from .field_extractor import FieldExtractor
from .medication_segmenter import MedicationSegmenter
from .dosage_parser import (
    DoseSlot,
    parse_dosage,
    normalize_frequency,
    canonical_frequency,
    generate_times,
    schedule_for,
    next_dose_time,
)

__all__ = [
    'FieldExtractor',
    'MedicationSegmenter',
    'DoseSlot',
    'parse_dosage',
    'normalize_frequency',
    'canonical_frequency',
    'generate_times',
    'schedule_for',
    'next_dose_time',
]
