# ============================================================================
# src/prescription_intelligence/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the prescription intelligence engine.

None of these reach the caller of the extraction pipeline: they are raised
inside the language-model collaborator and absorbed by the capability
extractor, which then reports itself unavailable.
"""


class PrescriptionIntelligenceError(Exception):
    """Base exception for all prescription intelligence errors."""
    pass


class ConfigurationError(PrescriptionIntelligenceError):
    """Invalid configuration."""
    pass


class ModelError(PrescriptionIntelligenceError):
    """Error with the language model backend."""
    pass


class CapabilityUnavailableError(ModelError):
    """Backend is not reachable or the model is not installed."""
    pass


class InferenceError(ModelError):
    """Error during model inference."""
    pass


class SchemaMismatchError(InferenceError):
    """Model answered, but not with the requested structure."""
    pass
