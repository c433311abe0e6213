"""
Extraction Context

Responsibilities:
- Defines the extracted record types (tasks, waiting-on entries, milestones, project updates)
- Classifies notes as structured or freeform
- Parses the structured grammar deterministically
- Extracts tasks from list-shaped notes without the generation service
- Guarantees the canonical six-list result shape

Owns: The structured notes grammar (parsing and rendering)
Never: Calls the generation service, resolves project references, or persists records
"""

from toditox.contexts.extraction.classifier import is_structured_format
from toditox.contexts.extraction.dates import normalize_date
from toditox.contexts.extraction.fallback_parser import parse_with_patterns
from toditox.contexts.extraction.records import (
    Milestone,
    ParseResult,
    ProjectUpdate,
    Task,
    WaitingOnEntry,
)
from toditox.contexts.extraction.renderer import render_structured, render_task
from toditox.contexts.extraction.result import empty_result, normalize_result
from toditox.contexts.extraction.structured_parser import (
    normalize_category,
    normalize_priority,
    parse_structured_notes,
)
from toditox.contexts.extraction.waiting_on import parse_waiting_on

__all__ = [
    # Records
    "Task",
    "WaitingOnEntry",
    "Milestone",
    "ProjectUpdate",
    "ParseResult",
    # Parsing
    "is_structured_format",
    "parse_structured_notes",
    "parse_with_patterns",
    "parse_waiting_on",
    "normalize_date",
    "normalize_category",
    "normalize_priority",
    # Result shape
    "normalize_result",
    "empty_result",
    # Rendering
    "render_structured",
    "render_task",
]
