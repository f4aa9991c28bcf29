# ============================================================================
# src/prescription_intelligence/llm/prompts.py
# ============================================================================
"""
Prompts and response schema for structured prescription extraction.

Every schema field is a string; the model is told to answer "" rather
than omit a field or return null.
"""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


SYSTEM_INSTRUCTIONS = """Eres un asistente para interpretar recetas medicas escritas en espanol.
Extrae solo datos que esten presentes en el texto OCR.
Si no hay dato, responde con cadena vacia.
No inventes medicamentos, dosis ni frecuencias."""


PRESCRIPTION_PROMPT_TEMPLATE = """Analiza esta receta medica OCR y devuelve:
- Nombre del doctor (doctorName)
- Fecha de receta en formato yyyy-MM-dd (prescriptionDateISO8601)
- Lista de medicamentos con nombre, dosis, frecuencia, instrucciones y duracion.

Texto OCR:
{text}"""


def _none_as_empty(value: Any) -> Any:
    return "" if value is None else value


class MedicationSchema(BaseModel):
    """Medicamento recetado"""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Nombre del medicamento")
    dosage: str = Field(default="", description="Dosis exacta, por ejemplo 500 mg o 10 ml")
    frequency: str = Field(default="", description="Frecuencia de toma, por ejemplo cada 8 horas")
    instructions: str = Field(default="", description="Indicaciones adicionales de uso. Cadena vacia si no existe")
    duration: str = Field(default="", description="Duracion del tratamiento. Cadena vacia si no existe")

    # Models occasionally answer null despite the schema
    coerce_null = field_validator("*", mode="before")(_none_as_empty)


class PrescriptionSchema(BaseModel):
    """Datos estructurados extraidos de una receta medica"""
    model_config = ConfigDict(extra="ignore")

    doctorName: str = Field(default="", description="Nombre del doctor que firma la receta. Cadena vacia si no existe")
    prescriptionDateISO8601: str = Field(default="", description="Fecha de la receta en formato yyyy-MM-dd. Cadena vacia si no existe")
    medications: List[MedicationSchema] = Field(default_factory=list, description="Lista de medicamentos indicados en la receta")

    coerce_null = field_validator("doctorName", "prescriptionDateISO8601", mode="before")(_none_as_empty)

    @field_validator("medications", mode="before")
    @classmethod
    def null_medications_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


def build_prescription_prompt(text: str) -> str:
    return PRESCRIPTION_PROMPT_TEMPLATE.format(text=text)


def prescription_json_schema() -> dict:
    """JSON schema sent to the backend; all fields required so none are omitted."""
    schema = PrescriptionSchema.model_json_schema()
    schema["required"] = list(PrescriptionSchema.model_fields)
    medication = schema.get("$defs", {}).get("MedicationSchema")
    if medication is not None:
        medication["required"] = list(MedicationSchema.model_fields)
    return schema
