# ============================================================================
# src/prescription_intelligence/core/models.py
# ============================================================================
"""
Value types produced by the extraction pipeline.

Results are created fresh per scan and are immutable; the caller owns
persistence.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple, FrozenSet
import uuid

from .enums import ExtractionSource, Severity


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class ExtractedMedication:
    name: str
    dosage: str
    frequency: str
    instructions: Optional[str] = None
    duration: Optional[str] = None
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "instructions": self.instructions,
            "duration": self.duration,
        }


@dataclass(frozen=True)
class ExtractionResult:
    medications: Tuple[ExtractedMedication, ...]
    source: ExtractionSource
    doctor_name: Optional[str] = None
    prescription_date: Optional[date] = None
    confidence: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.medications

    def to_dict(self) -> Dict[str, Any]:
        return {
            "medications": [med.to_dict() for med in self.medications],
            "doctor_name": self.doctor_name,
            "prescription_date": (
                self.prescription_date.isoformat() if self.prescription_date else None
            ),
            "source": self.source.value,
            "confidence": round(self.confidence, 4),
        }


@dataclass(frozen=True)
class ParsedDosage:
    amount: float
    unit: str
    formatted: str


@dataclass(frozen=True)
class InteractionTableEntry:
    """One row of the static interaction reference table."""
    drugs: Tuple[str, ...]
    severity: Severity
    description: str
    recommendation: str

    @property
    def tokens(self) -> FrozenSet[str]:
        return frozenset(drug.lower() for drug in self.drugs)


@dataclass(frozen=True)
class Interaction:
    drug1: str
    drug2: str
    severity: Severity
    description: str
    recommendation: str
    id: str = field(default_factory=_new_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "drug1": self.drug1,
            "drug2": self.drug2,
            "severity": self.severity.name.lower(),
            "severity_label": self.severity.label,
            "description": self.description,
            "recommendation": self.recommendation,
        }


@dataclass(frozen=True)
class ScanReport:
    """Extraction result plus the interactions found in its medication list."""
    result: ExtractionResult
    interactions: Tuple[Interaction, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.result.to_dict(),
            "interactions": [i.to_dict() for i in self.interactions],
        }
