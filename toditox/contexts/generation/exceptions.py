"""Custom exceptions for the generation context."""

from typing import Optional

from toditox.utils.llm import GenerationServiceError


class ProjectDraftParseError(ValueError):
    """
    Exception raised when a project-creation response is not a JSON object.

    Attributes:
        message: Error description
        response_text: Response text after fence stripping
        original_error: The json.JSONDecodeError, if any
    """

    def __init__(
        self,
        message: str,
        response_text: str = "",
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.response_text = response_text
        self.original_error = original_error

        parts = [message]

        if original_error:
            parts.append(f"Original error: {original_error}")

        if response_text:
            snippet = response_text[:200] + "..." if len(response_text) > 200 else response_text
            parts.append(f"Response:\n{snippet}")

        super().__init__("\n".join(parts))


__all__ = ["GenerationServiceError", "ProjectDraftParseError"]
