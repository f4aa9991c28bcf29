# ============================================================================
# src/prescription_intelligence/constants/__init__.py
# ============================================================================
"""
Policy constants and static reference data.
"""

from .policy import (
    UNKNOWN_MEDICATION_NAME,
    FALLBACK_DOSAGE,
    FALLBACK_FREQUENCY,
    NAME_STOP_WORDS,
    HEADER_WORDS,
)
from .interactions import INTERACTION_TABLE

__all__ = [
    'UNKNOWN_MEDICATION_NAME',
    'FALLBACK_DOSAGE',
    'FALLBACK_FREQUENCY',
    'NAME_STOP_WORDS',
    'HEADER_WORDS',
    'INTERACTION_TABLE',
]
