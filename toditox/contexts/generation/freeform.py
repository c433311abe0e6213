"""
Freeform notes normalization through the generation service.

The service rewrites arbitrary notes into the structured grammar; the
response is then read by the same deterministic parser used for
hand-written structured notes. This module never interprets JSON, and it
makes exactly one request per call with no retry.
"""

from typing import Optional

from toditox.contexts.extraction.records import ParseResult
from toditox.contexts.extraction.result import empty_result, normalize_result
from toditox.contexts.extraction.structured_parser import parse_structured_notes
from toditox.contexts.generation.logger import _log_debug, _log_error, _log_info
from toditox.contexts.generation.prompts import build_normalization_prompt, is_no_tasks_response
from toditox.utils.llm import GenerationServiceError, LLMProvider, get_provider


def normalize_freeform(
    text: Optional[str],
    llm: Optional[LLMProvider] = None,
    default_assignee: Optional[str] = None,
) -> Optional[str]:
    """
    Send freeform notes to the generation service for normalization.

    Args:
        text: Raw notes
        llm: Provider to use (default: get_provider() from environment)
        default_assignee: Owner named in the instruction contract

    Returns:
        Response text in the structured grammar (or the no-tasks sentinel),
        None for empty input (no request is made)

    Raises:
        GenerationServiceError: On a failed service call
    """
    if not text or not text.strip():
        return None

    llm = llm or get_provider()
    system_prompt = build_normalization_prompt(default_assignee)

    _log_info(f"Normalizing {len(text)} chars of freeform notes via {llm.name}")
    try:
        response = llm.generate(system_prompt=system_prompt, user_prompt=text)
    except GenerationServiceError as e:
        _log_error(f"Normalization failed: {e}")
        raise

    _log_debug(f"Normalization response: {len(response.content)} chars")
    return response.content


def normalize_and_parse(
    text: Optional[str],
    llm: Optional[LLMProvider] = None,
    default_assignee: Optional[str] = None,
    assignee_alias: Optional[str] = None,
) -> ParseResult:
    """
    Normalize freeform notes and parse the response.

    Returns the canonical empty result when the input is empty or the
    service reports there is nothing actionable.

    Raises:
        GenerationServiceError: On a failed service call
    """
    normalized = normalize_freeform(text, llm=llm, default_assignee=default_assignee)

    if is_no_tasks_response(normalized):
        _log_info("No actionable tasks in freeform notes")
        return empty_result()

    return normalize_result(
        parse_structured_notes(
            normalized, default_assignee=default_assignee, assignee_alias=assignee_alias
        )
    )
