# ============================================================================
# src/prescription_intelligence/processors/fallback/processor.py
# ============================================================================
"""
Heuristic Extractor - Rule-Based Prescription Parser

The terminal strategy of the extraction chain. Runs whenever the
language-model capability is unavailable or comes back empty.

Pipeline:
1. Normalize text into trimmed, non-empty lines
2. Extract doctor name and prescription date
3. Segment lines into medication records
4. Score completeness

Pure and synchronous: no I/O, never raises for string input. The worst
case is an empty medication list with confidence 0.
"""

from typing import Dict, Any, Optional

from ..base_processor import ExtractionStrategy
from ..prescription.agents.field_extractor import FieldExtractor
from ..prescription.agents.medication_segmenter import MedicationSegmenter
from ...core.confidence import ConfidenceScorer
from ...core.enums import ExtractionSource
from ...core.models import ExtractionResult
from ...utils.text_normalizer import normalize_lines


class HeuristicExtractor(ExtractionStrategy):
    """
    Deterministic prescription parser; always produces a result.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.field_extractor = FieldExtractor()
        self.segmenter = MedicationSegmenter()
        self.scorer = ConfidenceScorer(self.config)

    def get_name(self) -> str:
        return "HeuristicExtractor"

    @property
    def source(self) -> ExtractionSource:
        return ExtractionSource.HEURISTIC

    def parse(self, text: Optional[str]) -> ExtractionResult:
        """
        Parse prescription text.

        Args:
            text: Raw or normalized OCR text

        Returns:
            ExtractionResult tagged HEURISTIC
        """
        lines = normalize_lines(text)
        if not lines:
            return self.empty_result()

        doctor_name, prescription_date = self.field_extractor.extract(lines)
        medications = self.segmenter.segment(lines)
        confidence = self.scorer.score(medications)

        self.logger.info(
            f"Heuristic extraction: {len(medications)} medications, "
            f"confidence {confidence:.2f} ({self.scorer.level(confidence)})"
        )

        return ExtractionResult(
            medications=tuple(medications),
            source=self.source,
            doctor_name=doctor_name,
            prescription_date=prescription_date,
            confidence=confidence,
        )

    async def extract(self, text: str) -> ExtractionResult:
        return self.parse(text)

    def empty_result(self) -> ExtractionResult:
        return ExtractionResult(medications=(), source=self.source, confidence=0.0)
