# ============================================================================
# src/prescription_intelligence/utils/__init__.py
# ============================================================================
"""
Utility modules for the prescription intelligence engine.
"""

from .exceptions import (
    PrescriptionIntelligenceError,
    ConfigurationError,
    ModelError,
    CapabilityUnavailableError,
    InferenceError,
    SchemaMismatchError,
)

from .logging import (
    setup_logging,
    scan_fields,
    JsonFormatter,
    ScanTextFormatter,
)

from .text_normalizer import (
    normalize_lines,
    join_lines,
)

__all__ = [
    # Exceptions
    'PrescriptionIntelligenceError',
    'ConfigurationError',
    'ModelError',
    'CapabilityUnavailableError',
    'InferenceError',
    'SchemaMismatchError',
    # Logging
    'setup_logging',
    'scan_fields',
    'JsonFormatter',
    'ScanTextFormatter',
    # Text
    'normalize_lines',
    'join_lines',
]
