"""
Shared utilities for TODITOX.

Common functionality used across contexts:
- LLM provider access
- Logger setup
"""

from toditox.utils.llm import GenerationServiceError, LLMProvider, LLMResponse, get_provider

__all__ = ["GenerationServiceError", "LLMProvider", "LLMResponse", "get_provider"]
