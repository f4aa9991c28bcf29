# ============================================================================
# src/prescription_intelligence/processors/__init__.py
# ============================================================================
"""
Extraction strategies.
"""

from .base_processor import ExtractionStrategy
from .fallback import HeuristicExtractor
from .prescription import CapabilityExtractor

__all__ = [
    'ExtractionStrategy',
    'HeuristicExtractor',
    'CapabilityExtractor',
]
