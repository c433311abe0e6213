"""
Project-creation extraction through the generation service.

Returns a single JSON-shaped project draft (fields, milestones, tasks, links)
straight from the service. Unlike the grammar path there is no deterministic
parser behind this one, so a response that is not a JSON object is an error.
"""

import json
import re
from typing import Any, Optional

from toditox.contexts.generation.exceptions import ProjectDraftParseError
from toditox.contexts.generation.logger import _log_debug, _log_error, _log_info, _log_warning
from toditox.contexts.generation.prompts import PROJECT_CREATION_PROMPT
from toditox.utils.llm import GenerationServiceError, LLMProvider, get_provider

PROJECT_DRAFT_FIELDS = (
    "name",
    "client",
    "phase",
    "deadline",
    "budget",
    "hours_estimate",
    "scope",
    "notes",
    "milestones",
    "tasks",
    "links",
)


def empty_project_draft() -> dict[str, Any]:
    """Draft with every field empty/null."""
    return {
        "name": "",
        "client": "",
        "phase": "",
        "deadline": "",
        "budget": None,
        "hours_estimate": None,
        "scope": "",
        "notes": "",
        "milestones": [],
        "tasks": [],
        "links": [],
    }


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ``` / ```json fence, if present."""
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\s*", "", text)
        text = re.sub(r"\s*```$", "", text)
    return text


def parse_project_draft_response(text: str) -> dict[str, Any]:
    """
    Parse a project-creation response into a draft dict.

    Missing fields are filled from empty_project_draft().

    Raises:
        ProjectDraftParseError: Response is not valid JSON or not a JSON object
    """
    cleaned = strip_code_fence(text or "")

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ProjectDraftParseError(
            "Project draft response is not valid JSON", response_text=cleaned, original_error=e
        ) from e

    if not isinstance(parsed, dict):
        raise ProjectDraftParseError(
            f"Project draft response is a JSON {type(parsed).__name__}, expected an object",
            response_text=cleaned,
        )

    missing = [name for name in PROJECT_DRAFT_FIELDS if name not in parsed]
    if missing:
        _log_warning(f"Project draft response missing fields: {', '.join(missing)}")

    return {**empty_project_draft(), **parsed}


def extract_project_draft(text: Optional[str], llm: Optional[LLMProvider] = None) -> dict[str, Any]:
    """
    Extract a new-project draft from freeform notes.

    Args:
        text: Raw notes about a project
        llm: Provider to use (default: get_provider() from environment)

    Returns:
        Draft dict with every field in PROJECT_DRAFT_FIELDS; an empty draft
        for empty input (no request is made)

    Raises:
        GenerationServiceError: On a failed service call
        ProjectDraftParseError: Response does not honor the JSON contract
    """
    if not text or not text.strip():
        return empty_project_draft()

    llm = llm or get_provider()

    _log_info(f"Extracting project draft from {len(text)} chars via {llm.name}")
    try:
        response = llm.generate(system_prompt=PROJECT_CREATION_PROMPT, user_prompt=text)
    except GenerationServiceError as e:
        _log_error(f"Project draft request failed: {e}")
        raise

    draft = parse_project_draft_response(response.content)
    _log_debug(
        f"Project draft: {len(draft['tasks'] or [])} tasks, "
        f"{len(draft['milestones'] or [])} milestones, {len(draft['links'] or [])} links"
    )
    return draft
