# ============================================================================
# FILE: tests/unit/test_orchestrator.py
# ============================================================================
"""
Unit tests for the extraction fallback chain
"""

import logging
from unittest.mock import AsyncMock

import pytest

from prescription_intelligence.core.enums import ExtractionSource, Severity
from prescription_intelligence.core.orchestrator import ExtractionOrchestrator
from prescription_intelligence.processors.prescription.processor import CapabilityExtractor
from prescription_intelligence.utils.exceptions import CapabilityUnavailableError


def _orchestrator(client):
    return ExtractionOrchestrator(capability=CapabilityExtractor(client))


def test_chain_order(stub_client_factory):
    orchestrator = _orchestrator(stub_client_factory())
    assert [s.get_name() for s in orchestrator.strategies] == [
        "CapabilityExtractor", "HeuristicExtractor"
    ]


def test_heuristic_only_by_default():
    orchestrator = ExtractionOrchestrator()
    assert [s.get_name() for s in orchestrator.strategies] == ["HeuristicExtractor"]


def test_from_config_backend_none():
    orchestrator = ExtractionOrchestrator.from_config({'backend': 'none'})
    assert len(orchestrator.strategies) == 1


def test_from_config_ollama():
    orchestrator = ExtractionOrchestrator.from_config({'backend': 'ollama'})
    assert orchestrator.strategies[0].get_name() == "CapabilityExtractor"


@pytest.mark.asyncio
async def test_capability_result_returned_unchanged(stub_client_factory, capability_response,
                                                   sample_prescription_text):
    orchestrator = _orchestrator(stub_client_factory(response=capability_response))

    result = await orchestrator.extract(sample_prescription_text)

    assert result.source == ExtractionSource.CAPABILITY
    assert [m.name for m in result.medications] == ["Amoxicilina"]
    assert result.confidence == pytest.approx(0.95)


@pytest.mark.asyncio
async def test_capability_zero_medications_falls_back(stub_client_factory, sample_prescription_text):
    """A successful answer with nothing usable is treated as unavailable"""
    client = stub_client_factory(response={
        "doctorName": "Dr. Modelo",
        "prescriptionDateISO8601": "2030-01-01",
        "medications": [{"name": "", "dosage": "1 mg", "frequency": "", "instructions": "", "duration": ""}],
    })
    result = await _orchestrator(client).extract(sample_prescription_text)

    assert result.source == ExtractionSource.HEURISTIC
    assert result.doctor_name == "Juan Pérez"
    assert [m.name for m in result.medications] == ["Amoxicilina", "Ibuprofeno"]


@pytest.mark.asyncio
async def test_unhealthy_capability_falls_back(stub_client_factory, capability_response,
                                               sample_prescription_text):
    client = stub_client_factory(response=capability_response, healthy=False)
    result = await _orchestrator(client).extract(sample_prescription_text)

    assert result.source == ExtractionSource.HEURISTIC
    assert client.generate_calls == []


@pytest.mark.asyncio
async def test_capability_error_falls_back(stub_client_factory, sample_prescription_text):
    client = stub_client_factory(error=CapabilityUnavailableError("offline"))
    result = await _orchestrator(client).extract(sample_prescription_text)

    assert result.source == ExtractionSource.HEURISTIC
    assert len(result.medications) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   \n\t", None])
async def test_empty_input_skips_capability(stub_client_factory, capability_response, text):
    client = stub_client_factory(response=capability_response)
    client.generate = AsyncMock()

    result = await _orchestrator(client).extract(text)

    assert result.medications == ()
    assert result.confidence == 0.0
    assert result.source == ExtractionSource.HEURISTIC
    client.generate.assert_not_called()
    assert client.health_calls == 0


@pytest.mark.asyncio
async def test_nothing_found_anywhere(stub_client_factory):
    """Both strategies empty gives the empty heuristic result"""
    client = stub_client_factory(response={"doctorName": "", "prescriptionDateISO8601": "", "medications": []})
    result = await _orchestrator(client).extract("Reposo relativo")

    assert result.source == ExtractionSource.HEURISTIC
    assert result.is_empty
    assert result.confidence == 0.0


@pytest.mark.asyncio
async def test_scan_reports_interactions(interacting_prescription_text):
    orchestrator = ExtractionOrchestrator()

    report = await orchestrator.scan(interacting_prescription_text)

    assert len(report.result.medications) == 2
    assert len(report.interactions) == 1
    assert report.interactions[0].severity == Severity.MODERATE
    assert report.to_dict()["interactions"][0]["severity"] == "moderate"


@pytest.mark.asyncio
async def test_scan_without_interactions(sample_prescription_text):
    report = await ExtractionOrchestrator().scan(sample_prescription_text)
    assert report.interactions == ()


@pytest.mark.asyncio
async def test_close_releases_clients(stub_client_factory):
    client = stub_client_factory()
    orchestrator = _orchestrator(client)
    await orchestrator.close()
    assert client.closed


@pytest.mark.asyncio
async def test_close_logs_client_statistics(stub_client_factory, caplog):
    caplog.set_level(logging.INFO)
    orchestrator = _orchestrator(stub_client_factory())

    await orchestrator.close()

    record = next(r for r in caplog.records if getattr(r, "backend", None) == "ollama")
    assert record.getMessage() == "stub-model: 0 inferences, 0.00s average"
    assert record.strategy == "CapabilityExtractor"


@pytest.mark.asyncio
async def test_winning_strategy_logged_with_fields(stub_client_factory, capability_response,
                                                   sample_prescription_text, caplog):
    caplog.set_level(logging.INFO)
    orchestrator = _orchestrator(stub_client_factory(response=capability_response))

    await orchestrator.extract(sample_prescription_text)

    routed = [r for r in caplog.records if hasattr(r, "medications")]
    assert len(routed) == 1
    assert (routed[0].strategy, routed[0].source, routed[0].medications) == (
        "CapabilityExtractor", "capability", 1
    )
