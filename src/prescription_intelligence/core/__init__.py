# ============================================================================
# src/prescription_intelligence/core/__init__.py
# ============================================================================
"""
Core data model, rule engine and scoring.

The orchestrator is imported from core.orchestrator directly; it pulls
in the processors and the LLM client.
"""

from .enums import ExtractionSource, Severity, CanonicalFrequency
from .models import (
    ExtractedMedication,
    ExtractionResult,
    ParsedDosage,
    InteractionTableEntry,
    Interaction,
    ScanReport,
)
from .rules import PatternRule, RuleMatch, RuleSet
from .confidence import ConfidenceScorer, ConfidenceThresholds

__all__ = [
    'ExtractionSource',
    'Severity',
    'CanonicalFrequency',
    'ExtractedMedication',
    'ExtractionResult',
    'ParsedDosage',
    'InteractionTableEntry',
    'Interaction',
    'ScanReport',
    'PatternRule',
    'RuleMatch',
    'RuleSet',
    'ConfidenceScorer',
    'ConfidenceThresholds',
]
