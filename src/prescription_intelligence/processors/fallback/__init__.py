# ============================================================================
# src/prescription_intelligence/processors/fallback/__init__.py
# ============================================================================
"""
Rule-based fallback extraction.
"""

from .processor import HeuristicExtractor

__all__ = ['HeuristicExtractor']
