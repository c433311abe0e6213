"""Shared fixtures: stable identity configuration and a scripted LLM provider."""

import pytest
from loguru import logger

from toditox.utils.llm import LLMProvider, LLMResponse


class FakeStatusError(Exception):
    """Stands in for an SDK status error (has status_code and body)."""

    def __init__(self, status_code: int, message: str, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.body = body


class FakeConnectionError(Exception):
    pass


class FakeProvider(LLMProvider):
    """
    Provider that returns scripted responses instead of calling a service.

    Each entry in `responses` is either a string (returned as content) or an
    exception instance (raised from the API call).
    """

    _provider_prefix = "fake"
    _status_exception = FakeStatusError
    _connection_exception = FakeConnectionError

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.update_model("scripted")

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        self.calls.append({"system_prompt": system_prompt, "user_prompt": user_prompt})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return LLMResponse(content=response, model=self.model, input_tokens=10, output_tokens=20)


@pytest.fixture(autouse=True)
def default_identity(monkeypatch):
    """Pin the configured identity so a local .env cannot change expectations."""
    monkeypatch.delenv("TODITOX_DEFAULT_ASSIGNEE", raising=False)
    monkeypatch.delenv("TODITOX_ASSIGNEE_ALIAS", raising=False)


@pytest.fixture
def fake_provider():
    """Factory for FakeProvider with scripted responses."""
    return FakeProvider


@pytest.fixture
def status_error():
    """Factory for a provider status error (status_code, message, body=None)."""
    return FakeStatusError


@pytest.fixture
def connection_error():
    """Factory for a provider connection error."""
    return FakeConnectionError


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
