# ============================================================================
# src/prescription_intelligence/core/confidence.py
# ============================================================================
"""
Confidence Scoring

Completeness-based confidence for heuristic extraction results. Each
medication earns points for the fields the parser actually determined
(not filled with a sentinel); the overall score is the mean.

Capability-sourced results are not scored here: the model answered in a
fixed schema, so they carry the configured fixed confidence instead.
"""

from typing import Dict, Any, Optional, Sequence
from dataclasses import dataclass

from ..constants.policy import FALLBACK_FREQUENCY, UNKNOWN_MEDICATION_NAME
from .models import ExtractedMedication

NAME_WEIGHT = 0.4
DOSAGE_WEIGHT = 0.3
FREQUENCY_WEIGHT = 0.2
INSTRUCTIONS_WEIGHT = 0.1


@dataclass
class ConfidenceThresholds:
    """Confidence level thresholds"""
    high: float = 0.85
    medium: float = 0.70

    def get_level(self, score: float) -> str:
        """
        Get confidence level from score.

        Returns:
            Level string: "high", "medium", or "low"
        """
        if score >= self.high:
            return "high"
        elif score >= self.medium:
            return "medium"
        else:
            return "low"


class ConfidenceScorer:
    """
    Scores heuristic extraction completeness.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        config = config or {}
        self.thresholds = ConfidenceThresholds(
            high=config.get('high_confidence', 0.85),
            medium=config.get('medium_confidence', 0.70),
        )

    def score_medication(self, medication: ExtractedMedication) -> float:
        score = 0.0
        if medication.name and medication.name != UNKNOWN_MEDICATION_NAME:
            score += NAME_WEIGHT
        if medication.dosage:
            score += DOSAGE_WEIGHT
        if medication.frequency != FALLBACK_FREQUENCY:
            score += FREQUENCY_WEIGHT
        if medication.instructions is not None:
            score += INSTRUCTIONS_WEIGHT
        return score

    def score(self, medications: Sequence[ExtractedMedication]) -> float:
        """Mean per-medication score; 0.0 for no medications."""
        if not medications:
            return 0.0
        total = sum(self.score_medication(med) for med in medications)
        return max(0.0, min(1.0, total / len(medications)))

    def level(self, score: float) -> str:
        return self.thresholds.get_level(score)
