"""
Extracted record data structures for the Extraction context.

Every record here is a transient artifact: built fresh by a parse call and
owned by the caller on return. to_dict() gives the plain shape the storage
collaborators consume.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

from toditox.contexts.extraction.defaults import DEFAULT_STATUS, get_default_assignee

RESULT_FIELDS = (
    "tasks",
    "projects",
    "project_updates",
    "opportunities",
    "contacts",
    "time_entries",
)


@dataclass
class WaitingOnEntry:
    """An external blocking dependency recorded against a task."""

    contact: str
    description: str = ""
    date_context: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Task:
    """
    A single extracted task.

    project_name is a name reference only; resolving it to a stored project
    is left to the caller.
    """

    title: str
    subtitle: Optional[str] = None
    project_name: Optional[str] = None
    status: str = DEFAULT_STATUS
    due_date: Optional[str] = None
    priority: str = ""
    is_mine: bool = True
    assignee: str = field(default_factory=get_default_assignee)
    energy: str = ""
    pomodoro_count: int = 0
    waiting_on: list[WaitingOnEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class Milestone:
    date: str
    title: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ProjectUpdate:
    """Scope and milestones gathered for one project header."""

    project_name: str
    scope: Optional[str] = None
    milestones: list[Milestone] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class ParseResult:
    """
    Canonical extraction output.

    All six fields are always lists. Only tasks and project_updates are filled
    by the parsers in this package; the other four exist so every pipeline
    hands storage the same shape.
    """

    tasks: list = field(default_factory=list)
    projects: list = field(default_factory=list)
    project_updates: list = field(default_factory=list)
    opportunities: list = field(default_factory=list)
    contacts: list = field(default_factory=list)
    time_entries: list = field(default_factory=list)

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in RESULT_FIELDS)

    def to_dict(self) -> dict[str, list]:
        """Plain six-array mapping; records are converted, dicts are copied."""
        return {name: [_item_to_dict(item) for item in getattr(self, name)] for name in RESULT_FIELDS}


def _item_to_dict(item: Any) -> Any:
    if hasattr(item, "to_dict"):
        return item.to_dict()
    if isinstance(item, dict):
        return dict(item)
    return item
