"""
Generation Context

Responsibilities:
- Holds the fixed instruction contracts sent to the text-generation service
- Normalizes freeform notes into the structured grammar (then hands them to the parser)
- Extracts JSON project drafts

Owns: Prompt contracts, response cleanup, service error translation
Never: Retries failed calls or persists results
"""

from toditox.contexts.generation.exceptions import GenerationServiceError, ProjectDraftParseError
from toditox.contexts.generation.freeform import normalize_and_parse, normalize_freeform
from toditox.contexts.generation.project_draft import empty_project_draft, extract_project_draft
from toditox.contexts.generation.prompts import NO_TASKS_SENTINEL, is_no_tasks_response

__all__ = [
    "GenerationServiceError",
    "ProjectDraftParseError",
    "normalize_freeform",
    "normalize_and_parse",
    "extract_project_draft",
    "empty_project_draft",
    "NO_TASKS_SENTINEL",
    "is_no_tasks_response",
]
