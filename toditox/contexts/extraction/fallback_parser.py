"""
Pattern-based fallback extraction.

No generation service involved: list items become tasks, with due dates,
priority markers and a simple "my / team action items" section context
picked up from the text around them. Category and effort are left empty
for manual triage, and only tasks are produced.
"""

import re
from dataclasses import dataclass
from typing import Optional

from toditox.contexts.extraction.dates import normalize_date
from toditox.contexts.extraction.defaults import TEAM_ASSIGNEE, get_default_assignee
from toditox.contexts.extraction.logger import _log_debug
from toditox.contexts.extraction.records import ParseResult, Task

# =============================================================================
# PATTERNS
# =============================================================================


@dataclass(frozen=True)
class FallbackPatterns:
    """
    Regex patterns for loosely formatted action-item lists.
    """

    # "- item", "* item", "• item", "+ item", "1. item", "2) item"
    LIST_ITEM: re.Pattern = re.compile(r"^\s*(?:[-*•+]|\d+[.)])\s+(.+)$")

    # "[ ] item" / "[x] item" checkbox after the list marker
    CHECKBOX: re.Pattern = re.compile(r"^\[[ xX]?\]\s*")

    # "# Heading", "**Heading**", "__Heading__", "Heading:"
    HEADING: re.Pattern = re.compile(
        r"^\s*(?:#{1,6}\s+.+|\*\*[^*]+\*\*:?|__[^_]+__:?|[A-Za-z][^:]{0,60}:)\s*$"
    )

    MY_ACTION_ITEMS: re.Pattern = re.compile(r"\bmy\s+action\s+items?\b", re.IGNORECASE)

    TEAM_ACTION_ITEMS: re.Pattern = re.compile(r"\bteam\s+action\s+items?\b", re.IGNORECASE)

    # "(due: Friday)" anywhere in the item, usually at the end
    DUE_SUFFIX: re.Pattern = re.compile(r"\s*\(\s*due:?\s*([^)]+?)\s*\)", re.IGNORECASE)

    # "... deadline: March 5"
    DEADLINE: re.Pattern = re.compile(r"[\s,;-]*\bdeadline:\s*(.+?)\s*$", re.IGNORECASE)

    # Paired emphasis: **x**, __x__, ~~x~~, `x`
    PAIRED_EMPHASIS: re.Pattern = re.compile(r"(\*\*|__|~~|`)(.+?)\1")

    # Single emphasis: *x*, _x_
    SINGLE_EMPHASIS: re.Pattern = re.compile(r"(?<!\w)([*_])(.+?)\1(?!\w)")

    PRIORITY_EMOJI: re.Pattern = re.compile("[\U0001f534\U0001f7e1\U0001f7e2]\ufe0f?")


# Checked in order; first hit wins
PRIORITY_MARKERS = (
    ("high", re.compile("\U0001f534|\\b(?:high|urgent|critical)\\b", re.IGNORECASE)),
    ("medium", re.compile("\U0001f7e1|\\bmedium\\b", re.IGNORECASE)),
    ("low", re.compile("\U0001f7e2|\\blow\\b", re.IGNORECASE)),
)


# =============================================================================
# HELPERS
# =============================================================================


def detect_priority(line: str) -> str:
    """Priority from emoji or keyword markers; "" when none is present."""
    for priority, pattern in PRIORITY_MARKERS:
        if pattern.search(line):
            return priority
    return ""


def strip_emphasis(text: str) -> str:
    """Remove markdown emphasis around (or inside) a captured title."""
    text = FallbackPatterns.PAIRED_EMPHASIS.sub(r"\2", text)
    text = FallbackPatterns.SINGLE_EMPHASIS.sub(r"\2", text)
    return text.strip(" *_~`")


def extract_due_date(title: str) -> tuple[str, Optional[str]]:
    """
    Pull a "(due: X)" suffix or "deadline: X" phrase out of a title.

    Returns:
        (title without the date phrase, normalized date or None)
    """
    match = FallbackPatterns.DUE_SUFFIX.search(title)
    if not match:
        match = FallbackPatterns.DEADLINE.search(title)
    if not match:
        return title, None

    remaining = (title[: match.start()] + title[match.end() :]).strip()
    return remaining, normalize_date(match.group(1))


# =============================================================================
# PARSER
# =============================================================================


def parse_with_patterns(text: Optional[str], default_assignee: Optional[str] = None) -> ParseResult:
    """
    Best-effort task extraction from list-shaped notes.

    Args:
        text: Raw notes
        default_assignee: Identity for "my" items (default: configured identity)

    Returns:
        ParseResult with tasks only
    """
    if not isinstance(text, str) or not text.strip():
        return ParseResult()

    me = default_assignee or get_default_assignee()
    is_mine, assignee = True, me
    tasks = []

    for line in text.splitlines():
        if not line.strip():
            continue

        item = FallbackPatterns.LIST_ITEM.match(line)

        if not item:
            if FallbackPatterns.TEAM_ACTION_ITEMS.search(line):
                is_mine, assignee = False, TEAM_ASSIGNEE
            elif FallbackPatterns.MY_ACTION_ITEMS.search(line):
                is_mine, assignee = True, me
            elif FallbackPatterns.HEADING.match(line):
                is_mine, assignee = True, me
            continue

        raw_title = FallbackPatterns.CHECKBOX.sub("", item.group(1).strip())
        priority = detect_priority(raw_title)
        title = FallbackPatterns.PRIORITY_EMOJI.sub("", raw_title)
        title, due_date = extract_due_date(title)
        title = strip_emphasis(title)
        if not title:
            continue

        tasks.append(
            Task(
                title=title,
                due_date=due_date,
                priority=priority,
                is_mine=is_mine,
                assignee=assignee,
                energy="",
                pomodoro_count=0,
            )
        )

    _log_debug(f"Pattern parse: {len(tasks)} tasks")
    return ParseResult(tasks=tasks)
