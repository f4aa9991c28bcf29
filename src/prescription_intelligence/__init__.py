# ============================================================================
# src/prescription_intelligence/__init__.py
# ============================================================================
"""
Prescription Intelligence Engine

Turns prescription OCR text into structured medication records, a doctor
name, a prescription date and a confidence score, then checks the
medications against a drug-interaction table.

Usage:
    from prescription_intelligence import ExtractionOrchestrator

    orchestrator = ExtractionOrchestrator.from_config()
    report = await orchestrator.scan(ocr_text)
"""

__version__ = "0.1.0"

from .core.enums import ExtractionSource, Severity, CanonicalFrequency
from .core.models import (
    ExtractedMedication,
    ExtractionResult,
    Interaction,
    ScanReport,
)
from .core.orchestrator import ExtractionOrchestrator
from .processors import HeuristicExtractor, CapabilityExtractor
from .processors.prescription.agents.dosage_parser import (
    parse_dosage,
    normalize_frequency,
    generate_times,
)
from .validators import InteractionChecker, MedicationValidator

__all__ = [
    'ExtractionSource',
    'Severity',
    'CanonicalFrequency',
    'ExtractedMedication',
    'ExtractionResult',
    'Interaction',
    'ScanReport',
    'ExtractionOrchestrator',
    'HeuristicExtractor',
    'CapabilityExtractor',
    'parse_dosage',
    'normalize_frequency',
    'generate_times',
    'InteractionChecker',
    'MedicationValidator',
]
