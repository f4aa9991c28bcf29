# ============================================================================
# src/prescription_intelligence/constants/policy.py
# ============================================================================
"""
Sentinel values and word lists shared by the heuristic segmenter and the
capability result mapper. A sentinel stands for "not determined"; it is
never an error.
"""

# Sentinels
UNKNOWN_MEDICATION_NAME = "Medicamento"
FALLBACK_DOSAGE = "Según indicación"
FALLBACK_FREQUENCY = "Según indicación médica"

# Words stripped from a trigger line when deriving the medication name.
# Whole-word, case-insensitive; multi-word entries first.
NAME_STOP_WORDS = (
    "al día",
    "al dia",
    "tomar",
    "tome",
    "take",
    "oral",
    "por",
    "vía",
    "via",
    "cada",
    "veces",
    "daily",
)

# A non-trigger line containing any of these is a section header, not
# instructions for the open medication.
HEADER_WORDS = (
    "receta",
    "prescripción",
    "prescripcion",
    "indicaciones",
    "nombre",
    "paciente",
    "doctor",
    "fecha",
    "rx",
    "medicamentos",
)

# Decoration the language model tends to copy from the OCR text.
BULLET_CHAR = "•"
LIST_DASH = "- "
