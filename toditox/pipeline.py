"""
Extraction pipeline orchestration.

Picks a pipeline for a block of notes, runs it, and always returns the
canonical result shape. Also builds the plain records handed to the
storage collaborators (notes archive, deferred "later" items); nothing
here persists them.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

from toditox.contexts.extraction.classifier import is_structured_format
from toditox.contexts.extraction.fallback_parser import parse_with_patterns
from toditox.contexts.extraction.logger import _log_info
from toditox.contexts.extraction.records import ParseResult
from toditox.contexts.extraction.result import normalize_result
from toditox.contexts.extraction.structured_parser import parse_structured_notes
from toditox.contexts.generation.freeform import normalize_and_parse
from toditox.utils.llm import LLMProvider

METHOD_AUTO = "auto"
METHOD_STRUCTURED = "structured"
METHOD_FREEFORM = "freeform"
METHOD_FALLBACK = "fallback"

METHODS = (METHOD_AUTO, METHOD_STRUCTURED, METHOD_FREEFORM, METHOD_FALLBACK)

ARCHIVE_TITLE_MAX = 50
DEFAULT_ARCHIVE_TITLE = "Parsed Notes"


@dataclass
class ExtractionResult:
    """Normalized result plus the pipeline that produced it."""

    result: ParseResult
    method: str


def resolve_method(text: Optional[str], method: str = METHOD_AUTO) -> str:
    """Concrete pipeline for a request; "auto" picks structured or freeform."""
    if method not in METHODS:
        raise ValueError(f"Unknown extraction method: {method}. Use one of {', '.join(METHODS)}")
    if method != METHOD_AUTO:
        return method
    return METHOD_STRUCTURED if is_structured_format(text) else METHOD_FREEFORM


def extract_notes(
    text: Optional[str],
    method: str = METHOD_AUTO,
    llm: Optional[LLMProvider] = None,
    default_assignee: Optional[str] = None,
    assignee_alias: Optional[str] = None,
) -> ExtractionResult:
    """
    Extract records from notes with the chosen pipeline.

    Args:
        text: Raw notes
        method: "auto", "structured", "freeform" or "fallback"
        llm: Provider for the freeform pipeline (default: from environment)
        default_assignee: Identity owning unassigned tasks
        assignee_alias: Another name for the default identity

    Returns:
        ExtractionResult with a normalized ParseResult

    Raises:
        ValueError: Unknown method
        GenerationServiceError: Freeform pipeline service call failed
    """
    resolved = resolve_method(text, method)
    _log_info(f"Using {resolved} pipeline")

    if resolved == METHOD_STRUCTURED:
        raw = parse_structured_notes(
            text, default_assignee=default_assignee, assignee_alias=assignee_alias
        )
    elif resolved == METHOD_FREEFORM:
        raw = normalize_and_parse(
            text, llm=llm, default_assignee=default_assignee, assignee_alias=assignee_alias
        )
    else:
        raw = parse_with_patterns(text, default_assignee=default_assignee)

    return ExtractionResult(result=normalize_result(raw), method=resolved)


# =============================================================================
# HAND-OFF RECORDS
# =============================================================================


def archive_title(raw_text: Optional[str]) -> str:
    """
    Short title for an archived note: its first line without markup.

    Longer than 50 characters is cut to 50 plus "..."; empty gives "Parsed Notes".
    """
    first_line = (raw_text or "").split("\n")[0]
    title = re.sub(r"[#*\-]", "", first_line).strip()
    if len(title) > ARCHIVE_TITLE_MAX:
        return title[:ARCHIVE_TITLE_MAX] + "..."
    return title or DEFAULT_ARCHIVE_TITLE


def build_archive_entry(raw_text: str, result: ParseResult) -> dict[str, Any]:
    """Record for the notes archive: source text, parsed form, title."""
    return {
        "raw_text": raw_text,
        "parsed_data": normalize_result(result).to_dict(),
        "title": archive_title(raw_text),
    }


def build_deferred_item(
    item_type: str,
    item: Any,
    index: int,
    result: ParseResult,
    raw_text: str,
    modifications: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """
    Record for the "ignore / defer for later" path.

    Args:
        item_type: Kind of item ("task", "project_update", ...)
        item: The extracted record (dataclass or dict)
        index: Position of the item in its result list
        result: Full result the item came from
        raw_text: Source notes
        modifications: Field edits made before deferring, merged over the item

    Returns:
        Plain dict ready for the storage collaborator
    """
    item_dict = item.to_dict() if hasattr(item, "to_dict") else dict(item)
    return {
        "type": item_type,
        "item": {**item_dict, **(modifications or {})},
        "index": index,
        "parsed_data": normalize_result(result).to_dict(),
        "raw_text": raw_text,
    }
