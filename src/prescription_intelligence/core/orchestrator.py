# ============================================================================
# src/prescription_intelligence/core/orchestrator.py
# ============================================================================
"""
Extraction Orchestrator

This is the MAIN entry point for prescription text.

Flow:
1. Blank input short-circuits to the empty heuristic result
2. Walk the strategy chain: capability first (if configured), heuristic last
3. First non-empty result wins and is returned unchanged
4. (scan) Check the winning medication list for drug interactions

Results are never merged across strategies.
"""

from typing import Dict, Any, List, Optional
import logging

from .config import get_config
from .models import ExtractionResult, ScanReport
from ..llm.client import create_client
from ..processors.base_processor import ExtractionStrategy
from ..processors.fallback.processor import HeuristicExtractor
from ..processors.prescription.processor import CapabilityExtractor
from ..validators.interaction_checker import InteractionChecker


def _route_fields(strategy: ExtractionStrategy, result: ExtractionResult) -> Dict[str, Any]:
    return {
        "strategy": strategy.get_name(),
        "source": result.source.value,
        "medications": len(result.medications),
    }


class ExtractionOrchestrator:
    """
    Coordinates the capability/heuristic fallback chain.

    The heuristic extractor is always the terminal strategy; it cannot
    answer "unavailable".
    """

    def __init__(
        self,
        capability: Optional[CapabilityExtractor] = None,
        heuristic: Optional[HeuristicExtractor] = None,
        checker: Optional[InteractionChecker] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        self.config = {**get_config(), **(config or {})}
        self.logger = logging.getLogger(__name__)

        self.heuristic = heuristic or HeuristicExtractor(self.config)
        self.checker = checker or InteractionChecker()

        self.strategies: List[ExtractionStrategy] = []
        if capability is not None:
            self.strategies.append(capability)
        self.strategies.append(self.heuristic)

        self.logger.info(
            f"Extraction chain: {' -> '.join(s.get_name() for s in self.strategies)}"
        )

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "ExtractionOrchestrator":
        """Build the chain from settings; LLM_BACKEND=none gives heuristic only."""
        merged = {**get_config(), **(config or {})}
        client = create_client(merged)
        capability = CapabilityExtractor(client, merged) if client is not None else None
        return cls(capability=capability, config=merged)

    async def extract(self, text: Optional[str]) -> ExtractionResult:
        """
        Extract structured prescription data from OCR text.

        Args:
            text: Raw recognized text

        Returns:
            ExtractionResult from exactly one strategy
        """
        if not text or not text.strip():
            self.logger.info("Empty prescription text, nothing to extract")
            return self.heuristic.empty_result()

        for strategy in self.strategies[:-1]:
            result = await strategy.extract(text)
            if result is not None and not result.is_empty:
                self.logger.info(
                    f"Extraction by {strategy.get_name()}: "
                    f"{len(result.medications)} medications",
                    extra=_route_fields(strategy, result)
                )
                return result
            self.logger.info(
                f"{strategy.get_name()} produced nothing, trying next strategy",
                extra={"strategy": strategy.get_name(), "reason": "no_result"}
            )

        result = self.heuristic.parse(text)
        self.logger.info(
            f"Extraction by {self.heuristic.get_name()}: "
            f"{len(result.medications)} medications",
            extra=_route_fields(self.heuristic, result)
        )
        return result

    async def scan(self, text: Optional[str]) -> ScanReport:
        """Extract, then check the extracted medications for interactions."""
        result = await self.extract(text)
        interactions = self.checker.check(result.medications)
        if interactions:
            self.logger.warning(
                f"Found {len(interactions)} drug interactions",
                extra={"interactions": len(interactions)}
            )
        return ScanReport(result=result, interactions=tuple(interactions))

    async def close(self):
        for strategy in self.strategies:
            client = getattr(strategy, "client", None)
            if client is not None:
                stats = client.get_statistics()
                self.logger.info(
                    f"{stats['model']}: {stats['inference_count']} inferences, "
                    f"{stats['average_inference_time']:.2f}s average",
                    extra={"strategy": strategy.get_name(), "backend": stats["backend"]}
                )
                await client.close()
