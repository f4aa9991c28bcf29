# ============================================================================
# src/prescription_intelligence/llm/client.py
# ============================================================================
"""
Language Model Client Factory

Usage:
    from prescription_intelligence.llm.client import create_client

    client = create_client({'backend': 'ollama'})
    result = await client.generate("...", system="...", json_schema=schema)

    create_client({'backend': 'none'})  # -> None, capability disabled
"""

from typing import Dict, Any, Optional
import logging

from .base import BaseLLMClient, BackendType
from .ollama_client import OllamaClient
from ..core.config import get_config
from ..utils.exceptions import ConfigurationError

_logger = logging.getLogger(__name__)

DEFAULT_BACKEND = BackendType.OLLAMA.value


def create_client(config: Optional[Dict[str, Any]] = None) -> Optional[BaseLLMClient]:
    """
    Create a structured-generation client.

    Configuration is loaded from .env and merged with any passed config;
    passed values take precedence.

    Args:
        config: Configuration dict with at minimum:
            - backend: "ollama" | "none" (default: "ollama")

    Returns:
        Configured client, or None when the backend is "none"

    Raises:
        ConfigurationError: If backend type is not supported
    """
    config = {**get_config(), **(config or {})}
    backend = str(config.get('backend') or DEFAULT_BACKEND).lower()

    if backend == BackendType.NONE.value:
        _logger.info("Structured extraction capability disabled (backend=none)")
        return None

    if backend == BackendType.OLLAMA.value:
        return OllamaClient(config)

    raise ConfigurationError(
        f"Unknown backend: {backend}. Supported backends: ollama, none"
    )
