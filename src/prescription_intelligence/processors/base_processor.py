# ============================================================================
# src/prescription_intelligence/processors/base_processor.py
# ============================================================================
"""
Base Extraction Strategy

Both ways of turning prescription text into an ExtractionResult implement
this interface:
- CapabilityExtractor: structured generation by a language model (optional)
- HeuristicExtractor: deterministic rule-based parser (always available)

The orchestrator walks an ordered chain of strategies; which one runs is
decided there, not by feature flags inside the pipeline.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import logging

from ..core.config import get_config
from ..core.enums import ExtractionSource
from ..core.models import ExtractionResult


class ExtractionStrategy(ABC):
    """
    Abstract base class for extraction strategies.

    Subclasses must implement:
    - get_name(): Strategy identifier
    - source: Tag stamped on results
    - extract(): Text to result, or None when the strategy cannot answer
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        # Merge env config with passed config (passed config takes precedence)
        env_config = get_config()
        self.config = {**env_config, **(config or {})}
        self.logger = logging.getLogger(f"{__name__}.{self.get_name()}")

    @abstractmethod
    def get_name(self) -> str:
        """Return strategy name (e.g., 'HeuristicExtractor')"""
        pass

    @property
    @abstractmethod
    def source(self) -> ExtractionSource:
        pass

    @abstractmethod
    async def extract(self, text: str) -> Optional[ExtractionResult]:
        """
        Extract a prescription from normalized OCR text.

        Returns:
            ExtractionResult, or None if this strategy is unavailable for
            this input (the orchestrator then moves down the chain)
        """
        pass
