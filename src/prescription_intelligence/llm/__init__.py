# ============================================================================
# src/prescription_intelligence/llm/__init__.py
# ============================================================================
"""
Structured-generation capability clients.
"""

from .base import BaseLLMClient, BackendType
from .ollama_client import OllamaClient
from .client import create_client

__all__ = [
    "BaseLLMClient",
    "BackendType",
    "OllamaClient",
    "create_client",
]
