"""
Test suite for application settings.

System role: Verification of environment-driven configuration
"""

import pytest
from pydantic import ValidationError

from ragchat.configs import AgentSettings, DatabaseSettings, LLMSettings, RetrievalSettings, Settings
from ragchat.core.exceptions import ConfigError


class TestRetrievalSettings:
    def test_defaults_match_lcel_setup(self, monkeypatch) -> None:
        for name in ("RETRIEVAL_CHUNK_SIZE", "RETRIEVAL_CHUNK_OVERLAP", "RETRIEVAL_TOP_K"):
            monkeypatch.delenv(name, raising=False)

        settings = RetrievalSettings()

        assert settings.chunk_size == 100
        assert settings.chunk_overlap == 20
        assert settings.top_k == 2
        assert settings.source_urls == ["https://js.langchain.com/v0.1/docs/expression_language/"]

    def test_environment_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("RETRIEVAL_TOP_K", "5")
        monkeypatch.setenv("RETRIEVAL_SOURCE_PATHS", '["a.txt", "b.txt"]')

        settings = RetrievalSettings()

        assert settings.top_k == 5
        assert settings.source_paths == ["a.txt", "b.txt"]

    def test_overlap_must_be_smaller_than_chunk_size(self) -> None:
        """Overlap errors surface as ConfigError, like chunker construction errors."""
        with pytest.raises(ConfigError) as excinfo:
            RetrievalSettings(chunk_size=50, chunk_overlap=50)

        assert not isinstance(excinfo.value, ValidationError)
        assert excinfo.value.details["field"] == "chunk_overlap"
        assert excinfo.value.details["chunk_size"] == 50

    def test_overlap_from_environment_raises_config_error(self, monkeypatch) -> None:
        monkeypatch.setenv("RETRIEVAL_CHUNK_SIZE", "10")
        monkeypatch.setenv("RETRIEVAL_CHUNK_OVERLAP", "10")

        with pytest.raises(ConfigError):
            RetrievalSettings()


class TestLLMSettings:
    def test_api_key_from_google_variable(self, monkeypatch) -> None:
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("GOOGLE_API_KEY", "google-key")

        assert LLMSettings().api_key == "google-key"

    def test_temperature_bounds(self) -> None:
        with pytest.raises(ValidationError):
            LLMSettings(temperature=3.0)


class TestAgentSettings:
    def test_memory_backend_restricted(self) -> None:
        with pytest.raises(ValidationError):
            AgentSettings(memory_backend="redis")

    def test_negative_history_window_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AgentSettings(history_window=-1)


class TestDatabaseSettings:
    def test_sqlite_detection(self) -> None:
        assert DatabaseSettings(url="sqlite:///:memory:").is_sqlite
        assert not DatabaseSettings(url="postgresql://localhost/ragchat").is_sqlite


class TestSettings:
    def test_aggregates_sub_settings(self) -> None:
        settings = Settings()

        assert isinstance(settings.llm, LLMSettings)
        assert isinstance(settings.retrieval, RetrievalSettings)
        assert isinstance(settings.agent, AgentSettings)
        assert isinstance(settings.database, DatabaseSettings)

    def test_log_level_normalized(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings().log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")
