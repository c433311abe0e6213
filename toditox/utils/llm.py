"""
LLM provider abstraction for the generation service.

Provides a provider-agnostic interface for single, non-retried LLM API calls.
Every provider failure is surfaced as a GenerationServiceError carrying the
HTTP status (when there is one) and a message; retry policy belongs to the caller.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

DEFAULT_MAX_TOKENS = 4096
DEFAULT_TIMEOUT = 60.0

DEFAULT_MODELS = {
    "anthropic": "claude-3-haiku-20240307",
    "openai": "gpt-4o-mini",
}


class GenerationServiceError(Exception):
    """
    Raised when the generation service call does not succeed.

    Attributes:
        status: HTTP status code from the service, or None for transport/config failures
        message: Error description from the service
        provider: Provider name (e.g., "anthropic/claude-3-haiku-20240307")
    """

    def __init__(self, message: str, status: Optional[int] = None, provider: Optional[str] = None):
        self.status = status
        self.message = message
        self.provider = provider

        prefix = f"{status} " if status is not None else ""
        super().__init__(f"{prefix}{message}")


def get_max_tokens() -> int:
    return int(os.getenv("LLM_MAX_TOKENS", DEFAULT_MAX_TOKENS))


def get_timeout() -> float:
    return float(os.getenv("LLM_TIMEOUT", DEFAULT_TIMEOUT))


# --- LLM Provider Classes ---


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "anthropic", "openai")
    - Set self._status_exception / self._connection_exception to the SDK error types
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str
    _status_exception: type[Exception]
    _connection_exception: type[Exception]

    name: str
    model: str
    max_tokens: int = DEFAULT_MAX_TOKENS

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Make a single API call. Implemented by subclasses."""
        pass

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """
        Generate a response from the LLM with exactly one outbound request.

        Raises:
            GenerationServiceError: On a non-success status or a transport failure
        """
        logger.debug(f"[llm] {self.name}: sending {len(user_prompt)} chars")
        try:
            response = self._call_api(system_prompt, user_prompt)
        except self._status_exception as e:
            raise GenerationServiceError(
                _status_error_message(e), status=getattr(e, "status_code", None), provider=self.name
            ) from e
        except self._connection_exception as e:
            raise GenerationServiceError(str(e) or type(e).__name__, provider=self.name) from e

        logger.debug(
            f"[llm] {self.name}: received {len(response.content)} chars "
            f"({response.input_tokens} in / {response.output_tokens} out tokens)"
        )
        return response


def _status_error_message(error: Exception) -> str:
    """Pull the service's own error message out of an SDK status error."""
    body = getattr(error, "body", None)
    if isinstance(body, dict):
        detail = body.get("error")
        if isinstance(detail, dict) and detail.get("message"):
            return detail["message"]
        if isinstance(detail, str) and detail:
            return detail
    return getattr(error, "message", None) or str(error)


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider (SDK retries disabled)."""

    _provider_prefix = "anthropic"

    def __init__(
        self,
        model: str = DEFAULT_MODELS["anthropic"],
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        # Lazy import - anthropic SDK is heavy, only load if this provider is used
        import anthropic

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise GenerationServiceError("ANTHROPIC_API_KEY environment variable not set")

        self.client = anthropic.Anthropic(
            api_key=api_key,
            timeout=timeout if timeout is not None else get_timeout(),
            max_retries=0,
        )
        self._status_exception = anthropic.APIStatusError
        self._connection_exception = anthropic.APIConnectionError
        self.max_tokens = max_tokens or get_max_tokens()
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        if not response.content or response.content[0].type != "text":
            raise GenerationServiceError(
                "Unexpected response type from Anthropic API", provider=self.name
            )
        return LLMResponse(
            content=response.content[0].text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider (SDK retries disabled)."""

    _provider_prefix = "openai"

    def __init__(
        self,
        model: str = DEFAULT_MODELS["openai"],
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        # Lazy import - openai SDK is heavy, only load if this provider is used
        import openai

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise GenerationServiceError("OPENAI_API_KEY environment variable not set")

        self.client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout if timeout is not None else get_timeout(),
            max_retries=0,
        )
        self._status_exception = openai.APIStatusError
        self._connection_exception = openai.APIConnectionError
        self.max_tokens = max_tokens or get_max_tokens()
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=self.max_tokens,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        content = response.choices[0].message.content
        if content is None:
            raise GenerationServiceError(
                "Unexpected response type from OpenAI API", provider=self.name
            )
        return LLMResponse(
            content=content,
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


# --- Provider Factory ---


def get_provider(provider_name: str = None, model: str = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "anthropic" or "openai" (default: from LLM_PROVIDER env var)
        model: Model name (default: LLM_MODEL env var, then provider-specific default)

    Returns:
        LLMProvider instance

    Raises:
        GenerationServiceError: Unknown provider or missing API key
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "anthropic").lower()
    if model is None:
        model = os.getenv("LLM_MODEL") or None

    if provider_name == "anthropic":
        return AnthropicProvider(model=model) if model else AnthropicProvider()
    elif provider_name == "openai":
        return OpenAIProvider(model=model) if model else OpenAIProvider()
    else:
        raise GenerationServiceError(
            f"Unknown provider: {provider_name}. Use 'anthropic' or 'openai'"
        )
