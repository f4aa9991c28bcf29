# ============================================================================
# src/prescription_intelligence/processors/prescription/processor.py
# ============================================================================
"""
Capability Extractor

Structured prescription extraction backed by a language model:
- Sends fixed instructions plus a prompt embedding the OCR text
- Requests JSON conforming to PrescriptionSchema
- Cleans and maps the answer into ExtractedMedication records

Reports "unavailable" (returns None) when the backend is disabled or
unhealthy, when the call raises, when the answer does not fit the
schema, or when no medication survives cleaning. Failures are logged and
never propagated; the orchestrator falls back to the heuristic parser.
"""

from datetime import date, datetime
from typing import Dict, Any, List, Optional

from pydantic import ValidationError

from ..base_processor import ExtractionStrategy
from ...constants.policy import BULLET_CHAR, LIST_DASH, FALLBACK_DOSAGE, FALLBACK_FREQUENCY
from ...core.enums import ExtractionSource
from ...core.models import ExtractedMedication, ExtractionResult
from ...llm.base import BaseLLMClient
from ...llm.prompts import (
    SYSTEM_INSTRUCTIONS,
    PrescriptionSchema,
    build_prescription_prompt,
    prescription_json_schema,
)
from ...utils.exceptions import CapabilityUnavailableError, SchemaMismatchError
from ...utils.text_normalizer import join_lines, normalize_lines

ISO_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d")


def clean_field(value: Optional[str]) -> str:
    """Trim and strip bullet decoration copied from the OCR text."""
    cleaned = (value or "").replace(BULLET_CHAR, "").strip()
    while cleaned.startswith(LIST_DASH):
        cleaned = cleaned[len(LIST_DASH):].strip()
    return cleaned


def parse_iso_date(raw: str) -> Optional[date]:
    cleaned = (raw or "").strip()
    if not cleaned:
        return None
    for fmt in ISO_DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
    return None


class CapabilityExtractor(ExtractionStrategy):
    """
    Language-model-backed extraction strategy. Optional: built without a
    client it always reports unavailable.
    """

    def __init__(
        self,
        client: Optional[BaseLLMClient],
        config: Optional[Dict[str, Any]] = None
    ):
        super().__init__(config)
        self.client = client
        self.confidence = float(self.config.get('capability_confidence', 0.95))
        self._schema = prescription_json_schema()

    def get_name(self) -> str:
        return "CapabilityExtractor"

    @property
    def source(self) -> ExtractionSource:
        return ExtractionSource.CAPABILITY

    async def is_available(self) -> bool:
        if self.client is None:
            return False
        try:
            health = await self.client.health_check()
        except Exception as e:
            self.logger.warning(
                f"Capability health check raised: {e}",
                extra=self._log_fields("health_check_error")
            )
            return False
        if not health.get("healthy", False):
            self.logger.info(
                f"Capability unavailable: {health.get('details', 'unknown reason')}",
                extra=self._log_fields("unhealthy")
            )
            return False
        return True

    async def extract(self, text: str) -> Optional[ExtractionResult]:
        if not text or not text.strip():
            return None
        if not await self.is_available():
            return None

        try:
            parsed = await self._request_structured(text)
        except Exception as e:
            # Any collaborator failure means "unavailable", never a caller-visible error
            self.logger.warning(
                f"Capability extraction failed, falling back: {e}",
                extra=self._log_fields(type(e).__name__)
            )
            return None

        result = self._to_result(parsed)
        if result.is_empty:
            self.logger.info(
                "Capability returned no usable medications",
                extra=self._log_fields("no_medications")
            )
            return None

        self.logger.info(f"Capability extraction: {len(result.medications)} medications")
        return result

    def _log_fields(self, reason: str) -> Dict[str, Any]:
        fields = {"strategy": self.get_name(), "reason": reason}
        if self.client is not None:
            fields["backend"] = self.client.backend_type.value
        return fields

    async def _request_structured(self, text: str) -> PrescriptionSchema:
        if self.client is None:
            raise CapabilityUnavailableError("No capability client configured")

        response = await self.client.generate(
            prompt=build_prescription_prompt(join_lines(normalize_lines(text))),
            system=SYSTEM_INSTRUCTIONS,
            json_schema=self._schema,
        )

        data = self.client.extract_json(response.get("text", ""))
        if data is None:
            raise SchemaMismatchError("Response did not contain a JSON object")

        try:
            return PrescriptionSchema.model_validate(data)
        except ValidationError as e:
            raise SchemaMismatchError(f"Response does not match prescription schema: {e}") from e

    def _to_result(self, parsed: PrescriptionSchema) -> ExtractionResult:
        medications = self._map_medications(parsed)
        return ExtractionResult(
            medications=tuple(medications),
            source=self.source,
            doctor_name=clean_field(parsed.doctorName) or None,
            prescription_date=parse_iso_date(parsed.prescriptionDateISO8601),
            confidence=self.confidence,
        )

    def _map_medications(self, parsed: PrescriptionSchema) -> List[ExtractedMedication]:
        medications = []
        for item in parsed.medications:
            name = clean_field(item.name)
            if not name:
                continue
            medications.append(ExtractedMedication(
                name=name,
                dosage=clean_field(item.dosage) or FALLBACK_DOSAGE,
                frequency=clean_field(item.frequency) or FALLBACK_FREQUENCY,
                instructions=clean_field(item.instructions) or None,
                duration=clean_field(item.duration) or None,
            ))
        return medications
