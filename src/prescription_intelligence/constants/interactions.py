# ============================================================================
# src/prescription_intelligence/constants/interactions.py
# ============================================================================
"""
Known drug-interaction reference table (simplified).

Tokens are lowercase substrings matched against extracted medication
names. The table is built once at import and never mutated.
"""

from ..core.enums import Severity
from ..core.models import InteractionTableEntry


INTERACTION_TABLE = (
    # Psychiatric
    InteractionTableEntry(
        drugs=("escitalopram", "mirtazapina"),
        severity=Severity.MODERATE,
        description="Ambos son antidepresivos. Puede aumentar el riesgo de síndrome serotoninérgico.",
        recommendation="Monitorear síntomas. Consultar con el psiquiatra si hay agitación, confusión o fiebre.",
    ),
    InteractionTableEntry(
        drugs=("escitalopram", "pregabalina"),
        severity=Severity.MINOR,
        description="Puede aumentar ligeramente los efectos sedantes.",
        recommendation="Evitar conducir hasta conocer los efectos. No suspender sin consultar.",
    ),
    InteractionTableEntry(
        drugs=("mirtazapina", "pregabalina"),
        severity=Severity.MODERATE,
        description="Aumento significativo de sedación y somnolencia.",
        recommendation="Tomar antes de dormir. Evitar alcohol. Informar al médico si hay exceso de sueño.",
    ),
    # Common interactions
    InteractionTableEntry(
        drugs=("warfarina", "aspirina"),
        severity=Severity.MAJOR,
        description="Aumento del riesgo de sangrado.",
        recommendation="Requiere monitoreo cercano del INR. Consultar al médico inmediatamente.",
    ),
    InteractionTableEntry(
        drugs=("metformina", "alcohol"),
        severity=Severity.MODERATE,
        description="Riesgo de acidosis láctica.",
        recommendation="Limitar consumo de alcohol. Informar al médico sobre hábitos de consumo.",
    ),
    InteractionTableEntry(
        drugs=("ibuprofeno", "aspirina"),
        severity=Severity.MINOR,
        description="El ibuprofeno puede reducir el efecto cardioprotector de la aspirina.",
        recommendation="Espaciar la toma o considerar alternativas. Consultar al médico.",
    ),
    InteractionTableEntry(
        drugs=("fluoxetina", "tramadol"),
        severity=Severity.MAJOR,
        description="Alto riesgo de síndrome serotoninérgico.",
        recommendation="EVITAR esta combinación. Buscar atención médica inmediata si hay síntomas.",
    ),
    InteractionTableEntry(
        drugs=("clonazepam", "alcohol"),
        severity=Severity.MAJOR,
        description="Depresión severa del sistema nervioso central.",
        recommendation="NO combinar con alcohol. Riesgo de coma o paro respiratorio.",
    ),
)
