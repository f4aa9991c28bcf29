# ============================================================================
# src/prescription_intelligence/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .capability_config import CapabilitySettings
from .thresholds_config import ThresholdSettings
from .logging_config import LoggingSettings

__all__ = ["CapabilitySettings", "ThresholdSettings", "LoggingSettings"]
