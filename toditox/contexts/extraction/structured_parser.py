"""
Deterministic parser for the structured notes grammar.

Single pass over the lines, driven by an explicit ParserState with three
modes: idle, inside a task block, inside a milestones list. The same parser
reads hand-written structured notes and text produced by the generation
service, so it is best-effort by contract: unrecognized lines are skipped
and nothing in here raises for malformed input.
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from toditox.contexts.extraction.dates import normalize_date
from toditox.contexts.extraction.defaults import (
    CATEGORY_IDS,
    PRIORITY_IDS,
    get_assignee_alias,
    get_default_assignee,
)
from toditox.contexts.extraction.grammar_patterns import (
    LegacyPatterns,
    StructurePatterns,
    extract_owner,
    match_task_field,
)
from toditox.contexts.extraction.logger import _log_debug
from toditox.contexts.extraction.records import Milestone, ParseResult, ProjectUpdate, Task
from toditox.contexts.extraction.waiting_on import parse_waiting_on

MODE_IDLE = "idle"
MODE_TASK = "task"
MODE_MILESTONES = "milestones"


def normalize_category(raw: Optional[str]) -> str:
    """
    Map a Category value to its energy id.

    Case, spaces, hyphens and underscores are ignored, so "On-site", "on site"
    and "ONSITE" all give "onsite". Unknown values give "" (never guessed).
    """
    if not raw:
        return ""
    key = re.sub(r"[\s_-]+", "", raw.strip().lower())
    return key if key in CATEGORY_IDS else ""


def normalize_priority(raw: Optional[str]) -> str:
    """Map a Priority value to high/medium/low, or "" if unrecognized."""
    if not raw:
        return ""
    value = raw.strip().lower()
    return value if value in PRIORITY_IDS else ""


@dataclass
class ParserState:
    """
    Accumulators for one parse call.

    Transitions are named methods; consume() routes a single line to them.
    """

    default_assignee: str
    assignee_alias: str

    current_project: Optional[str] = None
    current_task: Optional[Task] = None
    current_scope: Optional[str] = None
    milestones: list[Milestone] = field(default_factory=list)
    in_milestones: bool = False

    tasks: list[Task] = field(default_factory=list)
    project_updates: list[ProjectUpdate] = field(default_factory=list)

    @property
    def mode(self) -> str:
        if self.in_milestones:
            return MODE_MILESTONES
        if self.current_task is not None:
            return MODE_TASK
        return MODE_IDLE

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def flush_task(self) -> None:
        if self.current_task is not None:
            self.tasks.append(self.current_task)
            self.current_task = None

    def flush_project_update(self) -> None:
        """Emit scope/milestones for the current project, then reset them."""
        if self.current_project and (self.current_scope or self.milestones):
            self.project_updates.append(
                ProjectUpdate(
                    project_name=self.current_project,
                    scope=self.current_scope or None,
                    milestones=list(self.milestones),
                )
            )
        self.current_scope = None
        self.milestones = []

    def start_project(self, name: str) -> None:
        self.flush_task()
        self.flush_project_update()
        self.current_project = name
        self.in_milestones = False

    def set_scope(self, scope: str) -> None:
        self.flush_task()
        self.in_milestones = False
        self.current_scope = scope

    def enter_milestones(self) -> None:
        self.flush_task()
        self.in_milestones = True

    def add_milestone(self, date: str, title: str) -> None:
        self.milestones.append(Milestone(date=date, title=title, completed=False))

    def open_task(self, title: str) -> None:
        self.flush_task()
        self.current_task = Task(
            title=title,
            project_name=self.current_project,
            assignee=self.default_assignee,
        )

    def attach_legacy_waiting_on(self, contact: str, rest: str) -> None:
        """Attach an old-format waiting-on line to the most recently flushed task."""
        entry = parse_waiting_on(f"{contact} — {rest}")
        if entry is not None:
            self.tasks[-1].waiting_on.append(entry)

    def finish(self) -> ParseResult:
        self.flush_task()
        self.flush_project_update()
        return ParseResult(tasks=self.tasks, project_updates=self.project_updates)

    # =========================================================================
    # LINE ROUTING
    # =========================================================================

    def consume(self, line: str) -> None:
        """Apply one raw line to the state."""
        trimmed = line.strip()
        if not trimmed:
            return

        if self._consume_structure(trimmed):
            return

        if self.current_task is not None and self._consume_task_field(trimmed):
            return

        # Old format: bare "Waiting On:" section header
        if LegacyPatterns.WAITING_ON_HEADER.match(trimmed):
            return

        if self.current_task is None and self.tasks:
            legacy = LegacyPatterns.WAITING_ON_ENTRY.match(trimmed)
            if legacy:
                self.attach_legacy_waiting_on(legacy.group(1).strip(), legacy.group(2).strip())
                return

        _log_debug(f"Skipped line ({self.mode}): {trimmed[:80]}")

    def _consume_structure(self, trimmed: str) -> bool:
        match = StructurePatterns.PROJECT_HEADER.match(trimmed)
        if match:
            self.start_project(match.group(1).strip())
            return True

        match = StructurePatterns.SCOPE.match(trimmed)
        if match:
            self.set_scope(match.group(1).strip())
            return True

        if StructurePatterns.MILESTONES_HEADER.match(trimmed):
            self.enter_milestones()
            return True

        if self.in_milestones:
            match = StructurePatterns.MILESTONE_ENTRY.match(trimmed)
            if match:
                self.add_milestone(match.group(1), match.group(2).strip())
                return True
            # Leave milestone mode; the line still goes through the other matchers
            self.in_milestones = False

        match = StructurePatterns.TASK_BULLET.match(trimmed)
        if match:
            self.open_task(match.group(1).strip())
            return True

        return False

    def _consume_task_field(self, trimmed: str) -> bool:
        matched = match_task_field(trimmed)
        if matched is None:
            return False

        field_name, value = matched
        task = self.current_task

        if field_name == "category":
            task.energy = normalize_category(value)
        elif field_name == "priority":
            task.priority = normalize_priority(value)
        elif field_name == "due":
            task.due_date = normalize_date(value)
        elif field_name == "notes":
            task.subtitle = value
            self._apply_owner(task, value)
        elif field_name == "waiting_on":
            entry = parse_waiting_on(value)
            if entry is not None:
                task.waiting_on.append(entry)
        return True

    def _apply_owner(self, task: Task, notes: str) -> None:
        owner = extract_owner(notes)
        if owner is None:
            return
        if owner.lower() in (self.default_assignee.lower(), self.assignee_alias.lower()):
            return
        task.assignee = owner
        task.is_mine = False


def parse_structured_notes(
    text: Optional[str],
    default_assignee: Optional[str] = None,
    assignee_alias: Optional[str] = None,
) -> ParseResult:
    """
    Parse structured notes into a ParseResult.

    Args:
        text: Notes in the structured grammar (or generation-service output)
        default_assignee: Identity owning unassigned tasks (default: configured identity)
        assignee_alias: Another name for the default identity (default: configured alias)

    Returns:
        ParseResult with tasks and project_updates filled; canonical empty
        result for empty or whitespace-only input
    """
    if not isinstance(text, str) or not text.strip():
        return ParseResult()

    state = ParserState(
        default_assignee=default_assignee or get_default_assignee(),
        assignee_alias=assignee_alias or get_assignee_alias(),
    )
    for line in text.splitlines():
        state.consume(line)

    result = state.finish()
    _log_debug(
        f"Structured parse: {len(result.tasks)} tasks, "
        f"{len(result.project_updates)} project updates"
    )
    return result
