# ============================================================================
# FILE: tests/unit/test_heuristic_extractor.py
# ============================================================================
"""
Unit tests for the rule-based fallback extractor
"""

from datetime import date

import pytest

from prescription_intelligence.core.enums import ExtractionSource
from prescription_intelligence.processors.fallback.processor import HeuristicExtractor


@pytest.fixture
def extractor():
    return HeuristicExtractor()


def test_full_prescription(extractor, sample_prescription_text):
    result = extractor.parse(sample_prescription_text)

    assert result.source == ExtractionSource.HEURISTIC
    assert result.doctor_name == "Juan Pérez"
    assert result.prescription_date == date(2024, 3, 15)
    assert [m.name for m in result.medications] == ["Amoxicilina", "Ibuprofeno"]
    assert result.medications[0].dosage == "500 mg"
    assert result.medications[0].frequency == "cada 8 horas"
    assert result.confidence == pytest.approx(1.0)


def test_single_line(extractor):
    result = extractor.parse("Paracetamol 500 mg cada 8 horas")

    assert len(result.medications) == 1
    med = result.medications[0]
    assert "500 mg" in med.dosage
    assert "8" in med.frequency and "horas" in med.frequency


@pytest.mark.parametrize("text", ["", "   ", "\n\n\t\n", None])
def test_empty_input(extractor, text):
    """Blank input is an empty result, not an error"""
    result = extractor.parse(text)

    assert result.medications == ()
    assert result.confidence == 0.0
    assert result.source == ExtractionSource.HEURISTIC
    assert result.is_empty


@pytest.mark.parametrize("text", [
    "asdf qwer zxcv",
    "500 mg",
    "0 mg 0 ml 0 UI",
    "Dr.\nFecha: 99/99/9999\n•••",
    "Aspirina 100 mg\n" * 50,
    "🙂 Ibuprofeno 400 mg 🙂",
    "cada cada cada 8 horas mg ml",
])
def test_confidence_always_in_range(extractor, text):
    """Arbitrary noisy input never raises and stays within [0, 1]"""
    result = extractor.parse(text)
    assert 0.0 <= result.confidence <= 1.0


@pytest.mark.asyncio
async def test_extract_is_async_parse(extractor):
    """The strategy interface always returns a result"""
    result = await extractor.extract("Omeprazol 20 mg")
    assert result is not None
    assert result.medications[0].name == "Omeprazol"
