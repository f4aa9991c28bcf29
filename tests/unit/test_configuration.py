# ============================================================================
# FILE: tests/unit/test_configuration.py
# ============================================================================
"""
Unit tests for settings and the merged configuration dict
"""

import pytest

from prescription_intelligence.config import CapabilitySettings, LoggingSettings, ThresholdSettings
from prescription_intelligence.core.config import get_config, reload_config


@pytest.fixture
def fresh_config():
    """Rebuild the cached config around a test"""
    get_config.cache_clear()
    yield
    get_config.cache_clear()


def test_settings_defaults():
    thresholds = ThresholdSettings()
    assert CapabilitySettings().CAPABILITY_CONFIDENCE == pytest.approx(0.95)
    assert thresholds.HIGH_CONFIDENCE > thresholds.MEDIUM_CONFIDENCE
    assert LoggingSettings().LOG_LEVEL


def test_config_dict_keys(fresh_config):
    config = get_config()
    for key in ('backend', 'ollama_host', 'ollama_model', 'max_tokens', 'temperature',
                'timeout', 'capability_confidence', 'high_confidence',
                'medium_confidence', 'log_level', 'log_json'):
        assert key in config


def test_config_is_cached(fresh_config):
    assert get_config() is get_config()


def test_environment_overrides(fresh_config, monkeypatch):
    monkeypatch.setenv("LLM_BACKEND", "none")
    monkeypatch.setenv("CAPABILITY_CONFIDENCE", "0.9")
    monkeypatch.setenv("HIGH_CONFIDENCE", "0.8")

    config = reload_config()

    assert config['backend'] == "none"
    assert config['capability_confidence'] == pytest.approx(0.9)
    assert config['high_confidence'] == pytest.approx(0.8)


def test_confidence_out_of_range_rejected(monkeypatch):
    monkeypatch.setenv("CAPABILITY_CONFIDENCE", "1.5")
    with pytest.raises(ValueError):
        CapabilitySettings()
