# ============================================================================
# src/prescription_intelligence/processors/prescription/__init__.py
# ============================================================================
"""
Prescription extraction module.
"""

from .processor import CapabilityExtractor

__all__ = ['CapabilityExtractor']
