# ============================================================================
# src/prescription_intelligence/llm/base.py
# ============================================================================
"""
Base Language Model Client Interface

Defines the abstract interface for the structured-generation capability
used by the capability extractor. Backends:
- ollama: Ollama server (local, HTTP)
- none: capability disabled (always reports unavailable)
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
from enum import Enum
import logging
import json

from json_repair import repair_json


class BackendType(Enum):
    """Supported inference backends."""
    OLLAMA = "ollama"    # Ollama server
    NONE = "none"        # Capability disabled


class BaseLLMClient(ABC):
    """
    Abstract base class for structured-generation clients.

    All backends must implement:
    - generate(): Async text generation, optionally schema-constrained
    - health_check(): Verify backend is available
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(self.__class__.__name__)

        self._inference_count = 0
        self._total_inference_time = 0.0

    @property
    @abstractmethod
    def backend_type(self) -> BackendType:
        """Return the backend type."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model identifier."""
        pass

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system: Optional[str] = None,
        json_schema: Optional[Dict[str, Any]] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Generate response from prompt.

        Args:
            prompt: Input text prompt
            system: Fixed instruction string for the model
            json_schema: If given, constrain output to JSON matching this schema
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature (0.0 = deterministic)

        Returns:
            {
                "text": str,              # Generated text
                "model": str,             # Model identifier
                "backend": str,           # Backend type
                "inference_time": float,  # Seconds
            }
        """
        pass

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        """
        Check if the backend is available and ready.

        Returns:
            {
                "healthy": bool,
                "backend": str,
                "model": str,
                "details": str
            }
        """
        pass

    async def close(self) -> None:
        """Release backend resources (HTTP sessions etc)."""
        return None

    def extract_json(self, response_text: str) -> Optional[Dict]:
        """
        Extract JSON object from generated text.

        Models sometimes wrap JSON in prose or emit slightly malformed JSON
        (single quotes, trailing commas). Falls back to json_repair.
        """
        if not response_text or not response_text.strip():
            self.logger.warning("Empty response text, no JSON to extract")
            return None

        # Try 1: Direct parse of entire response
        try:
            parsed = json.loads(response_text.strip())
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError:
            pass

        # Try 2: Extract the outermost {...} block
        start_idx = response_text.find('{')
        end_idx = response_text.rfind('}')
        if start_idx != -1 and end_idx > start_idx:
            try:
                parsed = json.loads(response_text[start_idx:end_idx + 1])
                if isinstance(parsed, dict):
                    return parsed
            except json.JSONDecodeError:
                pass

        # Try 3: json_repair on entire response
        repaired = repair_json(response_text, return_objects=True)
        if isinstance(repaired, dict) and repaired:
            self.logger.debug("json_repair fixed response")
            return repaired

        self.logger.warning(f"Could not parse JSON from response: {response_text[:200]}...")
        return None

    def get_statistics(self) -> Dict[str, Any]:
        """Get inference statistics."""
        avg_time = (
            self._total_inference_time / self._inference_count
            if self._inference_count > 0
            else 0.0
        )

        return {
            "backend": self.backend_type.value,
            "model": self.model_name,
            "inference_count": self._inference_count,
            "total_inference_time": self._total_inference_time,
            "average_inference_time": avg_time,
        }
