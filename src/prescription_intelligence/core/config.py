# ============================================================================
# src/prescription_intelligence/core/config.py
# ============================================================================
"""
Centralized Configuration Management

Loads the .env file, then flattens the pydantic settings into the
lower-case dict that components take. Values passed explicitly to a
component override these.

Usage:
    from prescription_intelligence.core.config import get_config

    config = get_config()
    print(config['ollama_host'])
"""

from pathlib import Path
from typing import Dict, Any
from functools import lru_cache

from dotenv import load_dotenv


def _load_dotenv() -> bool:
    """Load .env file from the project root or the working directory."""
    env_path = Path(__file__).parent.parent.parent.parent / '.env'
    if env_path.exists():
        load_dotenv(env_path)
        return True

    cwd_env = Path.cwd() / '.env'
    if cwd_env.exists():
        load_dotenv(cwd_env)
        return True

    return False


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """
    Get configuration dictionary.

    Cached - call once and pass to components.
    """
    _load_dotenv()

    # Settings classes read the environment on construction, so build fresh
    # instances after .env has been loaded.
    from ..config.capability_config import CapabilitySettings
    from ..config.thresholds_config import ThresholdSettings
    from ..config.logging_config import LoggingSettings

    capability = CapabilitySettings()
    thresholds = ThresholdSettings()
    logging_cfg = LoggingSettings()

    return {
        # Capability
        'backend': capability.LLM_BACKEND,
        'ollama_host': capability.OLLAMA_HOST,
        'ollama_model': capability.OLLAMA_MODEL,
        'max_tokens': capability.LLM_MAX_TOKENS,
        'temperature': capability.LLM_TEMPERATURE,
        'timeout': capability.LLM_TIMEOUT,
        'capability_confidence': capability.CAPABILITY_CONFIDENCE,

        # Thresholds
        'high_confidence': thresholds.HIGH_CONFIDENCE,
        'medium_confidence': thresholds.MEDIUM_CONFIDENCE,

        # Logging
        'log_level': logging_cfg.LOG_LEVEL,
        'log_json': logging_cfg.LOG_JSON,
    }


def reload_config() -> Dict[str, Any]:
    """Reload configuration from environment."""
    get_config.cache_clear()
    return get_config()
