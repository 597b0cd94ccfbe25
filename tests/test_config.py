"""Tests for client configuration."""

from dataclasses import FrozenInstanceError
from datetime import timedelta

import pytest

from deepseek_client.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, DeepSeekConfig
from deepseek_client.exceptions import ConfigError


class TestConstruction:
    """Test explicit construction and validation."""

    def test_new_uses_defaults(self):
        config = DeepSeekConfig.new("test-key")

        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == DEFAULT_TIMEOUT
        assert config.validate_certs is True
        assert config.proxy is None

    @pytest.mark.parametrize("api_key", ["", "   "])
    def test_rejects_empty_api_key(self, api_key):
        with pytest.raises(ConfigError):
            DeepSeekConfig.new(api_key)

    def test_accepts_plain_string_key(self):
        config = DeepSeekConfig(api_key="test-key")
        assert config.authorization_header() == "Bearer test-key"

    def test_is_immutable(self):
        config = DeepSeekConfig.new("test-key")
        with pytest.raises(FrozenInstanceError):
            config.timeout = 5.0


class TestWithHelpers:
    """Test the with_* helpers."""

    def test_returns_new_instance(self):
        config = DeepSeekConfig.new("test-key")

        custom = (
            config.with_base_url("https://custom.api.com/")
            .with_timeout(timedelta(seconds=60))
            .with_proxy("http://proxy.example.com")
            .with_validate_certs(False)
            .with_user_agent("my-app/1.0")
        )

        assert custom.base_url == "https://custom.api.com"
        assert custom.timeout == 60.0
        assert custom.proxy == "http://proxy.example.com"
        assert custom.validate_certs is False
        assert custom.user_agent == "my-app/1.0"
        assert config.base_url == DEFAULT_BASE_URL

    @pytest.mark.parametrize("url", ["not-a-url", "ftp://api.example.com", "https://", ""])
    def test_rejects_malformed_base_url(self, url):
        with pytest.raises(ConfigError):
            DeepSeekConfig.new("test-key").with_base_url(url)

    @pytest.mark.parametrize(
        "timeout", [0, -1.0, timedelta(0), float("nan"), float("inf")]
    )
    def test_rejects_non_positive_or_non_finite_timeout(self, timeout):
        with pytest.raises(ConfigError):
            DeepSeekConfig.new("test-key").with_timeout(timeout)


class TestSecretHandling:
    """The API key must never leak through textual representations."""

    def test_repr_redacts_key(self):
        config = DeepSeekConfig.new("sk-very-secret")

        assert "sk-very-secret" not in repr(config)
        assert "sk-very-secret" not in str(config)
        assert "sk-very-secret" not in str(config.api_key)

    def test_authorization_header_unwraps_key(self):
        config = DeepSeekConfig.new("sk-very-secret")
        assert config.authorization_header() == "Bearer sk-very-secret"


class TestFromEnvironment:
    """Test environment-based construction."""

    def test_reads_all_keys(self):
        config = DeepSeekConfig.from_environment(
            {
                "DEEPSEEK_API_KEY": "env-key",
                "DEEPSEEK_API_BASE_URL": "http://localhost:8080",
                "DEEPSEEK_TIMEOUT_SECONDS": "12.5",
            }
        )

        assert config.authorization_header() == "Bearer env-key"
        assert config.base_url == "http://localhost:8080"
        assert config.timeout == 12.5

    def test_optional_keys_default(self):
        config = DeepSeekConfig.from_environment({"DEEPSEEK_API_KEY": "env-key"})

        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == DEFAULT_TIMEOUT

    def test_missing_api_key_raises(self):
        with pytest.raises(ConfigError, match="DEEPSEEK_API_KEY"):
            DeepSeekConfig.from_environment({})

    def test_empty_api_key_raises(self):
        with pytest.raises(ConfigError):
            DeepSeekConfig.from_environment({"DEEPSEEK_API_KEY": ""})

    def test_non_numeric_timeout_raises(self):
        with pytest.raises(ConfigError, match="DEEPSEEK_TIMEOUT_SECONDS"):
            DeepSeekConfig.from_environment(
                {"DEEPSEEK_API_KEY": "env-key", "DEEPSEEK_TIMEOUT_SECONDS": "soon"}
            )

    @pytest.mark.parametrize("raw", ["nan", "inf", "0", "-5"])
    def test_unusable_timeout_raises(self, raw):
        with pytest.raises(ConfigError, match="Timeout"):
            DeepSeekConfig.from_environment(
                {"DEEPSEEK_API_KEY": "env-key", "DEEPSEEK_TIMEOUT_SECONDS": raw}
            )

    def test_invalid_base_url_raises(self):
        with pytest.raises(ConfigError):
            DeepSeekConfig.from_environment(
                {"DEEPSEEK_API_KEY": "env-key", "DEEPSEEK_API_BASE_URL": "api.deepseek.com"}
            )

    def test_process_environment_is_used_by_default(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DEEPSEEK_API_KEY", "process-key")
        monkeypatch.delenv("DEEPSEEK_API_BASE_URL", raising=False)
        monkeypatch.delenv("DEEPSEEK_TIMEOUT_SECONDS", raising=False)

        config = DeepSeekConfig.from_environment()

        assert config.authorization_header() == "Bearer process-key"
