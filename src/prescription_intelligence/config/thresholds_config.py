# ============================================================================
# src/prescription_intelligence/config/thresholds_config.py
# ============================================================================
"""
Confidence Thresholds
- Levels used to label heuristic extraction confidence
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ThresholdSettings(BaseSettings):
    HIGH_CONFIDENCE: float = Field(
        default=0.85,
        ge=0.0, le=1.0,
        description="At or above this, an extraction is labelled 'high'"
    )
    MEDIUM_CONFIDENCE: float = Field(
        default=0.70,
        ge=0.0, le=1.0,
        description="At or above this (and below HIGH), an extraction is labelled 'medium'"
    )
