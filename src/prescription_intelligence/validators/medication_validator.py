# ============================================================================
# src/prescription_intelligence/validators/medication_validator.py
# ============================================================================
"""
Medication Validator

Sanity checks run before a scanned medication is accepted into the
user's list. Messages are Spanish and user-facing.
"""

import calendar
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..core.models import ExtractedMedication

MAX_DOSES_PER_DAY = 5
PRESCRIPTION_MAX_AGE_MONTHS = 6


class IssueLevel(Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    message: str
    level: IssueLevel

    @property
    def is_error(self) -> bool:
        return self.level is IssueLevel.ERROR

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "message": self.message, "level": self.level.value}


def _months_before(day: date, months: int) -> date:
    """Same day-of-month `months` earlier, clamped to the month's length."""
    total = day.year * 12 + (day.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


class MedicationValidator:
    """
    Validates medication records and prescription dates.
    """

    def validate(
        self,
        medication: ExtractedMedication,
        times: Optional[Sequence[Any]] = None
    ) -> List[ValidationIssue]:
        """
        Validate one medication.

        Args:
            medication: Record to check
            times: Planned dose times; schedule checks are skipped when None

        Returns:
            Issues found, errors and warnings mixed, in check order
        """
        issues = []

        if not medication.name.strip():
            issues.append(ValidationIssue(
                field="nombre",
                message="El nombre del medicamento es obligatorio",
                level=IssueLevel.ERROR,
            ))

        if not medication.dosage.strip():
            issues.append(ValidationIssue(
                field="dosis",
                message="La dosis es obligatoria",
                level=IssueLevel.ERROR,
            ))

        if times is not None:
            if len(times) == 0:
                issues.append(ValidationIssue(
                    field="horarios",
                    message="Debe configurar al menos un horario",
                    level=IssueLevel.ERROR,
                ))
            elif len(times) > MAX_DOSES_PER_DAY:
                issues.append(ValidationIssue(
                    field="frecuencia",
                    message=f"Más de {MAX_DOSES_PER_DAY} tomas al día. Verificar con el médico.",
                    level=IssueLevel.WARNING,
                ))

        return issues

    def validate_prescription_date(
        self,
        prescription_date: Optional[date],
        today: Optional[date] = None
    ) -> Optional[ValidationIssue]:
        """Error for a future date, warning when older than six months."""
        if prescription_date is None:
            return None

        today = today or date.today()

        if prescription_date > today:
            return ValidationIssue(
                field="fecha",
                message="La fecha de la receta está en el futuro",
                level=IssueLevel.ERROR,
            )

        if prescription_date < _months_before(today, PRESCRIPTION_MAX_AGE_MONTHS):
            return ValidationIssue(
                field="fecha",
                message=f"La receta tiene más de {PRESCRIPTION_MAX_AGE_MONTHS} meses. Considerar renovar.",
                level=IssueLevel.WARNING,
            )

        return None
