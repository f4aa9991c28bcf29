# ============================================================================
# src/prescription_intelligence/config/capability_config.py
# ============================================================================
"""
Structured-Generation Capability Configuration
- Backend selection (ollama / none)
- Server and model
- Sampling and timeout
- Fixed confidence reported for capability-sourced results
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class CapabilitySettings(BaseSettings):
    LLM_BACKEND: str = Field(
        default="ollama",
        description="Structured extraction backend: 'ollama', or 'none' to always use the heuristic parser"
    )
    OLLAMA_HOST: str = Field(
        default="http://localhost:11434",
        description="Ollama server URL"
    )
    OLLAMA_MODEL: str = Field(
        default="llama3.1:8b",
        description="Model used for prescription structuring"
    )
    LLM_MAX_TOKENS: int = Field(
        default=1000,
        description="Maximum tokens for the structured response"
    )
    LLM_TEMPERATURE: float = Field(
        default=0.0,
        ge=0.0, le=2.0,
        description="Sampling temperature (0.0 = deterministic)"
    )
    LLM_TIMEOUT: int = Field(
        default=60,
        description="Per-request timeout for the capability call (seconds)"
    )
    CAPABILITY_CONFIDENCE: float = Field(
        default=0.95,
        ge=0.0, le=1.0,
        description="Confidence assigned to capability results; the schema is trusted over field completeness"
    )
