# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import json
from typing import Any, Dict, Optional

import pytest

from prescription_intelligence.core.models import ExtractedMedication
from prescription_intelligence.llm.base import BaseLLMClient, BackendType


class StubLLMClient(BaseLLMClient):
    """In-memory structured-generation client; records every call."""

    def __init__(
        self,
        response: Any = None,
        healthy: bool = True,
        error: Optional[Exception] = None
    ):
        super().__init__({})
        self.response = response
        self.healthy = healthy
        self.error = error
        self.generate_calls = []
        self.health_calls = 0
        self.closed = False

    @property
    def backend_type(self) -> BackendType:
        return BackendType.OLLAMA

    @property
    def model_name(self) -> str:
        return "stub-model"

    async def generate(self, prompt, system=None, json_schema=None,
                       max_tokens=None, temperature=None) -> Dict[str, Any]:
        self.generate_calls.append({
            "prompt": prompt,
            "system": system,
            "json_schema": json_schema,
        })
        if self.error is not None:
            raise self.error
        text = self.response if isinstance(self.response, str) else json.dumps(self.response)
        return {"text": text, "model": self.model_name, "backend": "stub", "inference_time": 0.0}

    async def health_check(self) -> Dict[str, Any]:
        self.health_calls += 1
        return {
            "healthy": self.healthy,
            "backend": "stub",
            "model": self.model_name,
            "details": "stub" if self.healthy else "stub offline",
        }

    async def close(self):
        self.closed = True


@pytest.fixture
def sample_prescription_text():
    """Typical line-oriented Spanish prescription OCR output"""
    return """
    CLÍNICA SAN RAFAEL
    Dr. Juan Pérez
    Fecha: 15/03/2024
    Paciente: María González

    Rx:
    1. Amoxicilina 500 mg cada 8 horas
    Tomar con alimentos
    Durante 7 días
    2. Ibuprofeno 400 mg cada 12 horas
    Si hay dolor
    """


@pytest.fixture
def interacting_prescription_text():
    """Prescription whose medications appear in the interaction table"""
    return "Escitalopram 10mg\nMirtazapina 15mg"


@pytest.fixture
def capability_response():
    """Well-formed structured answer from the language model"""
    return {
        "doctorName": "Dra. Ana Ruiz",
        "prescriptionDateISO8601": "2024-03-15",
        "medications": [
            {
                "name": "• Amoxicilina",
                "dosage": "- 500 mg",
                "frequency": "cada 8 horas",
                "instructions": "",
                "duration": "7 días",
            },
        ],
    }


@pytest.fixture
def stub_client_factory():
    """Build StubLLMClient instances with custom behavior"""
    return StubLLMClient


@pytest.fixture
def make_medication():
    def _make(name="Paracetamol", dosage="500 mg", frequency="cada 8 horas", instructions=None):
        return ExtractedMedication(
            name=name,
            dosage=dosage,
            frequency=frequency,
            instructions=instructions,
        )
    return _make
