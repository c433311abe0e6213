"""Unit tests for provider configuration and service error translation."""

import pytest

from toditox.utils.llm import (
    DEFAULT_MODELS,
    AnthropicProvider,
    GenerationServiceError,
    OpenAIProvider,
    _status_error_message,
    get_max_tokens,
    get_provider,
    get_timeout,
)


@pytest.fixture
def clean_llm_env(monkeypatch):
    for name in (
        "LLM_PROVIDER",
        "LLM_MODEL",
        "LLM_MAX_TOKENS",
        "LLM_TIMEOUT",
        "ANTHROPIC_API_KEY",
        "OPENAI_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestGenerationServiceError:
    def test_with_status(self):
        error = GenerationServiceError("Overloaded", status=529, provider="anthropic/x")

        assert str(error) == "529 Overloaded"
        assert (error.status, error.message, error.provider) == (529, "Overloaded", "anthropic/x")

    def test_without_status(self):
        assert str(GenerationServiceError("Connection reset")) == "Connection reset"

    @pytest.mark.parametrize(
        "body,message",
        [
            ({"error": {"type": "overloaded_error", "message": "Overloaded"}}, "Overloaded"),
            ({"error": "Bad gateway"}, "Bad gateway"),
            ({"detail": "nope"}, "fallback message"),
            (None, "fallback message"),
        ],
    )
    def test_status_error_message(self, status_error, body, message):
        assert _status_error_message(status_error(500, "fallback message", body=body)) == message


@pytest.mark.unit
class TestConfiguration:
    def test_defaults(self, clean_llm_env):
        assert get_max_tokens() == 4096
        assert get_timeout() == 60.0

    def test_overrides(self, clean_llm_env):
        clean_llm_env.setenv("LLM_MAX_TOKENS", "1024")
        clean_llm_env.setenv("LLM_TIMEOUT", "5")

        assert get_max_tokens() == 1024
        assert get_timeout() == 5.0

    def test_unknown_provider(self, clean_llm_env):
        with pytest.raises(GenerationServiceError, match="Unknown provider: mistral"):
            get_provider("mistral")

    def test_unknown_provider_from_env(self, clean_llm_env):
        clean_llm_env.setenv("LLM_PROVIDER", "Mistral")

        with pytest.raises(GenerationServiceError, match="Unknown provider: mistral"):
            get_provider()

    def test_missing_anthropic_key(self, clean_llm_env):
        with pytest.raises(GenerationServiceError, match="ANTHROPIC_API_KEY"):
            get_provider("anthropic")

    def test_missing_openai_key(self, clean_llm_env):
        with pytest.raises(GenerationServiceError, match="OPENAI_API_KEY") as exc_info:
            get_provider("openai")

        assert exc_info.value.status is None


@pytest.mark.unit
class TestProviders:
    def test_anthropic_defaults(self, clean_llm_env):
        clean_llm_env.setenv("ANTHROPIC_API_KEY", "test-key")
        provider = get_provider()

        assert isinstance(provider, AnthropicProvider)
        assert provider.model == DEFAULT_MODELS["anthropic"] == "claude-3-haiku-20240307"
        assert provider.name == "anthropic/claude-3-haiku-20240307"
        assert provider.max_tokens == 4096
        assert provider.client.max_retries == 0

    def test_openai_from_env(self, clean_llm_env):
        clean_llm_env.setenv("OPENAI_API_KEY", "test-key")
        clean_llm_env.setenv("LLM_PROVIDER", "openai")
        clean_llm_env.setenv("LLM_MODEL", "gpt-4o")
        provider = get_provider()

        assert isinstance(provider, OpenAIProvider)
        assert provider.name == "openai/gpt-4o"
        assert provider.client.max_retries == 0
