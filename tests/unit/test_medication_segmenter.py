# ============================================================================
# FILE: tests/unit/test_medication_segmenter.py
# ============================================================================
"""
Unit tests for the medication segmentation state machine
"""

import pytest

from prescription_intelligence.constants.policy import (
    FALLBACK_FREQUENCY,
    UNKNOWN_MEDICATION_NAME,
)
from prescription_intelligence.processors.prescription.agents.medication_segmenter import (
    IDLE,
    AccumulatingState,
    MedicationSegmenter,
    derive_name,
    extract_frequency,
    step,
)


@pytest.fixture
def segmenter():
    return MedicationSegmenter()


def test_single_trigger_line(segmenter):
    """Name, dosage and frequency come from one trigger line"""
    meds = segmenter.segment(["Paracetamol 500 mg cada 8 horas"])

    assert len(meds) == 1
    assert meds[0].name == "Paracetamol"
    assert "500 mg" in meds[0].dosage
    assert "8" in meds[0].frequency
    assert "horas" in meds[0].frequency
    assert meds[0].instructions is None


def test_consecutive_triggers_do_not_bleed(segmenter):
    """Two trigger lines in a row are two medications with no instructions"""
    meds = segmenter.segment(["Escitalopram 10mg", "Mirtazapina 15mg"])

    assert [m.name for m in meds] == ["Escitalopram", "Mirtazapina"]
    assert [m.dosage for m in meds] == ["10mg", "15mg"]
    assert all(m.instructions is None for m in meds)


def test_instructions_accumulate_until_next_trigger(segmenter):
    lines = [
        "1. Amoxicilina 500 mg cada 8 horas",
        "Tomar con alimentos",
        "Durante 7 días",
        "2. Ibuprofeno 400 mg cada 12 horas",
        "Si hay dolor",
    ]
    meds = segmenter.segment(lines)

    assert len(meds) == 2
    assert meds[0].name == "Amoxicilina"
    assert meds[0].instructions == "Tomar con alimentos Durante 7 días"
    assert meds[1].name == "Ibuprofeno"
    assert meds[1].frequency == "cada 12 horas"
    assert meds[1].instructions == "Si hay dolor"


def test_header_lines_are_not_instructions(segmenter):
    """Section headers after a trigger are ignored"""
    meds = segmenter.segment(["Losartán 50 mg", "Indicaciones:", "En ayunas"])

    assert meds[0].instructions == "En ayunas"


def test_lines_before_first_trigger_ignored(segmenter):
    meds = segmenter.segment(["Paciente: Juan", "Control en 1 semana", "Metformina 850 mg"])

    assert len(meds) == 1
    assert meds[0].instructions is None


def test_sentinels_applied(segmenter):
    """A bare dosage line gets the placeholder name and default frequency"""
    meds = segmenter.segment(["500 mg"])

    assert meds[0].name == UNKNOWN_MEDICATION_NAME
    assert meds[0].dosage == "500 mg"
    assert meds[0].frequency == FALLBACK_FREQUENCY


def test_spanish_daily_frequency(segmenter):
    meds = segmenter.segment(["Losartán 50 mg 1 vez al día"])

    assert meds[0].name == "Losartán"
    assert meds[0].frequency == "1 vez al día"


def test_token_fallback(segmenter):
    """Without any trigger line, capitalized words pair with mg tokens"""
    meds = segmenter.segment(["Ibuprofeno 400mgs"])

    assert len(meds) == 1
    assert meds[0].name == "Ibuprofeno"
    assert meds[0].dosage == "400mgs"
    assert meds[0].frequency == FALLBACK_FREQUENCY


def test_token_fallback_dosage_clears_candidate(segmenter):
    """A dosage token consumes the candidate; a second one finds none"""
    meds = segmenter.fallback_tokens(["Naproxeno 250mg 500mg", "diario"])

    assert [(m.name, m.dosage) for m in meds] == [("Naproxeno", "250mg")]


def test_no_medications(segmenter):
    assert segmenter.segment([]) == []
    assert segmenter.segment(["Receta médica", "Reposo"]) == []


def test_step_transitions():
    """Idle ignores text; a trigger opens; a second trigger flushes"""
    state, emitted = step(IDLE, "texto suelto")
    assert state is IDLE and emitted is None

    state, emitted = step(state, "Aspirina 100 mg")
    assert isinstance(state, AccumulatingState) and emitted is None

    state, emitted = step(state, "Después del almuerzo")
    assert state.instructions == ("Después del almuerzo",)

    state, emitted = step(state, "Omeprazol 20 mg")
    assert emitted.name == "Aspirina"
    assert emitted.instructions == "Después del almuerzo"
    assert state.name == "Omeprazol"


def test_derive_name_strips_noise():
    name = derive_name("• Tomar Salbutamol 100 mcg vía oral", "100 mcg")
    assert name == "Salbutamol"


def test_extract_frequency_variants():
    assert extract_frequency("Tomar cada 6 hrs") == "cada 6 hrs"
    assert extract_frequency("2 veces al día") == "2 veces al día"
    assert extract_frequency("Take twice daily") == "twice daily"
    assert extract_frequency("Aspirina 100 mg") == ""
