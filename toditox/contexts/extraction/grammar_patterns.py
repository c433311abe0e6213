"""
Regex patterns for the structured notes grammar.

    Project: <name>
    - Task: <title>
      Category: <Vendor|Design|Coordination|Procurement|On-site|Dev|Admin>
      Priority: <High|Medium|Low>
      Due: <YYYY-MM-DD|TBD>
      Notes: <free text, may include "Owner: X">
      Waiting on: <Contact> — <description>[, mentioned|requested <date context>]
    Scope: <free text>
    Milestones:
    - [YYYY-MM-DD] <text>

Pattern classes follow the repo convention:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Helper functions that use these patterns

Line patterns expect a stripped line.
"""

import re
from dataclasses import dataclass
from typing import Optional

# Em dash, en dash, or a double hyphen
DASH_DELIMITER = r"(?:[—–]|--)"


# =============================================================================
# STRUCTURE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class StructurePatterns:
    """
    Lines that move the parser between states (project, scope, milestones, task).
    """

    PROJECT_HEADER: re.Pattern = re.compile(r"^Project:\s*(.+)$", re.IGNORECASE)

    SCOPE: re.Pattern = re.compile(r"^Scope:\s*(.+)$", re.IGNORECASE)

    MILESTONES_HEADER: re.Pattern = re.compile(r"^Milestones:\s*$", re.IGNORECASE)

    # "- [2025-01-01] Kickoff" or "- 2025-01-01 Kickoff"
    MILESTONE_ENTRY: re.Pattern = re.compile(r"^-\s*\[?(\d{4}-\d{2}-\d{2})\]?\s+(.+)$")

    TASK_BULLET: re.Pattern = re.compile(r"^-\s*Task:\s*(.+)$", re.IGNORECASE)


# =============================================================================
# TASK FIELD PATTERNS
# =============================================================================


@dataclass(frozen=True)
class TaskFieldPatterns:
    """
    Labelled field lines inside an open task block. Labels are case-insensitive.
    """

    CATEGORY: re.Pattern = re.compile(r"^Category:\s*(.+)$", re.IGNORECASE)

    PRIORITY: re.Pattern = re.compile(r"^Priority:\s*(.+)$", re.IGNORECASE)

    DUE: re.Pattern = re.compile(r"^Due:\s*(.+)$", re.IGNORECASE)

    NOTES: re.Pattern = re.compile(r"^Notes:\s*(.+)$", re.IGNORECASE)

    WAITING_ON: re.Pattern = re.compile(r"^Waiting\s+on:\s*(.+)$", re.IGNORECASE)


# Field name -> pattern, checked in this order
FIELD_MATCHERS = {
    "category": TaskFieldPatterns.CATEGORY,
    "priority": TaskFieldPatterns.PRIORITY,
    "due": TaskFieldPatterns.DUE,
    "notes": TaskFieldPatterns.NOTES,
    "waiting_on": TaskFieldPatterns.WAITING_ON,
}


# =============================================================================
# LEGACY WAITING-ON PATTERNS
# =============================================================================


@dataclass(frozen=True)
class LegacyPatterns:
    """
    Older note format with a separate waiting-on section of dash lines.
    """

    # Bare "Waiting On:" section header with no value
    WAITING_ON_HEADER: re.Pattern = re.compile(r"^Waiting\s+On\s*:\s*$", re.IGNORECASE)

    # "- Contact — description"
    WAITING_ON_ENTRY: re.Pattern = re.compile(rf"^-\s*(.+?)\s*{DASH_DELIMITER}\s*(.+)$")


# =============================================================================
# WAITING-ON VALUE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class WaitingOnPatterns:
    """
    Sub-grammar of a waiting-on value: "Contact — description, mentioned by Friday".
    """

    CONTACT_SPLIT: re.Pattern = re.compile(rf"^(.+?)\s*{DASH_DELIMITER}\s*(.+)$")

    # Only a comma-introduced clause counts; the keyword alone stays in the description
    DATE_CONTEXT_CLAUSE: re.Pattern = re.compile(
        r",\s*(?:mentioned|requested)\s+(.+)$", re.IGNORECASE
    )


# =============================================================================
# OWNERSHIP PATTERNS
# =============================================================================


@dataclass(frozen=True)
class OwnershipPatterns:
    """
    Ownership markers embedded in a task's notes.
    """

    # "Owner: Sarah." / "Owner: Sarah, needs review"
    OWNER_LABEL: re.Pattern = re.compile(r"Owner:\s*(.+?)(?:\s*$|[,.])", re.IGNORECASE)

    # "Sarah is responsible for this" (owner limited to its own sentence)
    RESPONSIBLE_FOR: re.Pattern = re.compile(
        r"(?:^|[.;!?]\s+)([^.;!?]+?)\s+is\s+responsible\s+for\s+this", re.IGNORECASE
    )


# =============================================================================
# CLASSIFIER PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ClassifierPatterns:
    """
    Whole-text markers of the structured grammar (multiline search).
    """

    TASK_BULLET_LINE: re.Pattern = re.compile(r"^-\s*Task:\s*.+", re.MULTILINE)

    CATEGORY_LINE: re.Pattern = re.compile(r"^\s*Category:\s*.+", re.MULTILINE)


# =============================================================================
# HELPERS
# =============================================================================


def match_task_field(line: str) -> Optional[tuple[str, str]]:
    """
    Match a stripped line against the task field table.

    Args:
        line: Stripped line from inside a task block

    Returns:
        (field_name, raw_value) for the first matching field, or None
    """
    for field_name, pattern in FIELD_MATCHERS.items():
        match = pattern.match(line)
        if match:
            return field_name, match.group(1).strip()
    return None


def extract_owner(notes: str) -> Optional[str]:
    """Return the owner named in a notes string, or None."""
    for pattern in (OwnershipPatterns.OWNER_LABEL, OwnershipPatterns.RESPONSIBLE_FOR):
        match = pattern.search(notes)
        if match:
            owner = match.group(1).strip()
            if owner:
                return owner
    return None
