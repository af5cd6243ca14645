"""Tests for ono_selfie.core.config: environment-driven configuration."""

import tempfile

import pytest

from ono_selfie.core.config import (
    DEFAULT_GATEWAY_URL,
    DEFAULT_IMAGE_MODEL,
    SelfieConfig,
)
from ono_selfie.core.errors import ConfigurationError


class TestConfigDefaults:
    def test_defaults_from_empty_environment(self):
        cfg = SelfieConfig.from_env(environ={})
        assert cfg.api_key is None
        assert cfg.gateway_url == DEFAULT_GATEWAY_URL
        assert cfg.gateway_token is None
        assert cfg.image_model == DEFAULT_IMAGE_MODEL
        assert cfg.messaging_cli == "openclaw"
        assert cfg.request_timeout == 120.0
        assert cfg.temp_dir == tempfile.gettempdir()

    def test_image_url_uses_model(self):
        cfg = SelfieConfig(image_model="imagen-3.0-generate-002")
        assert cfg.image_url == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "imagen-3.0-generate-002:predict"
        )


class TestConfigEnvironment:
    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "abc")
        monkeypatch.setenv("OPENCLAW_GATEWAY_URL", "http://gw:9000/")
        monkeypatch.setenv("OPENCLAW_GATEWAY_TOKEN", "tok")
        monkeypatch.setenv("ONO_SELFIE_TIMEOUT", "30")

        cfg = SelfieConfig.from_env()

        assert cfg.api_key == "abc"
        assert cfg.gateway_url == "http://gw:9000"
        assert cfg.gateway_token == "tok"
        assert cfg.request_timeout == 30.0

    def test_blank_values_are_ignored(self):
        cfg = SelfieConfig.from_env(environ={"GEMINI_API_KEY": "  ", "OPENCLAW_GATEWAY_URL": ""})
        assert cfg.api_key is None
        assert cfg.gateway_url == DEFAULT_GATEWAY_URL

    def test_invalid_timeout_raises(self):
        with pytest.raises(ConfigurationError):
            SelfieConfig.from_env(environ={"ONO_SELFIE_TIMEOUT": "soon"})


class TestConfigValidation:
    def test_missing_key_raises(self):
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            SelfieConfig().validate()

    def test_validate_returns_self(self):
        cfg = SelfieConfig(api_key="k")
        assert cfg.validate() is cfg
