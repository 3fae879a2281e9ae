# tests/unit/config/test_settings.py — v1
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from bankchat.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_model(self):
        s = Settings(_env_file=None)
        assert s.llm_default_model == "gpt-4.1-mini"
        assert s.llm_max_output_tokens == 800

    def test_default_cache_ttl_is_two_hours(self):
        s = Settings(_env_file=None)
        assert s.document_cache_ttl_seconds == 7200

    def test_default_documents_folder(self):
        s = Settings(_env_file=None)
        assert s.documents_folder == Path("./documents")

    def test_default_server(self):
        s = Settings(_env_file=None)
        assert s.port == 3000
        assert s.host == "0.0.0.0"


class TestEnvironment:
    def test_reads_documents_folder_and_port(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DOCUMENTS_FOLDER", str(tmp_path))
        monkeypatch.setenv("PORT", "8080")
        s = Settings(_env_file=None)
        assert s.documents_folder == tmp_path
        assert s.port == 8080

    def test_reads_api_key(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
        assert Settings(_env_file=None).openai_api_key == "sk-from-env"


class TestSettingsValidation:
    def test_temperature_out_of_range(self):
        with pytest.raises(ConfigurationError, match="LLM_TEMPERATURE"):
            Settings(_env_file=None, llm_temperature=3.0)

    def test_timeout_must_be_positive(self):
        with pytest.raises(ConfigurationError, match="LLM_TIMEOUT_SECONDS"):
            Settings(_env_file=None, llm_timeout_seconds=0)

    def test_base_url_must_be_http(self):
        with pytest.raises(ConfigurationError, match="OPENAI_BASE_URL"):
            Settings(_env_file=None, openai_base_url="ftp://example.com")

    def test_errors_are_joined(self):
        with pytest.raises(ConfigurationError, match="LLM_TEMPERATURE.*LLM_TIMEOUT"):
            Settings(_env_file=None, llm_temperature=-1, llm_timeout_seconds=-1)

    def test_ttl_must_be_positive(self):
        with pytest.raises(ValidationError, match="document_cache_ttl_seconds"):
            Settings(_env_file=None, document_cache_ttl_seconds=0)

    def test_max_tokens_must_be_positive(self):
        with pytest.raises(ValidationError, match="llm_max_output_tokens"):
            Settings(_env_file=None, llm_max_output_tokens=0)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="TRACE")


class TestHelpers:
    def test_reasoning_models_list(self):
        s = Settings(_env_file=None, llm_reasoning_models="gpt-5, o3 ,")
        assert s.llm_reasoning_models_list == ["gpt-5", "o3"]

    def test_ignore_prefixes_list(self):
        s = Settings(_env_file=None, documents_ignore_prefixes="~$,.~lock")
        assert s.documents_ignore_prefixes_list == ["~$", ".~lock"]


class TestLoadSettings:
    def test_overrides(self, tmp_path):
        s = load_settings(_env_file=None, documents_folder=tmp_path, port=9000)
        assert s.documents_folder == tmp_path
        assert s.port == 9000
