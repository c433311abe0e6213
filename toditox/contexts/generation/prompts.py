"""
Instruction contracts for the generation service.

Two fixed contracts:
- NORMALIZATION_PROMPT: free text in, structured notes grammar out
- PROJECT_CREATION_PROMPT: free text in, one JSON project draft out
"""

import re
from typing import Optional

from toditox.contexts.extraction.defaults import get_default_assignee

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

NO_TASKS_SENTINEL = "No tasks found."

_NORMALIZATION_PROMPT_TEMPLATE = """\
You are a task extraction assistant. You will receive raw notes from a meeting, voice memo, message, or other source. Your job is to extract actionable tasks and return them in this exact format:

Project: [project or client name, or Untagged if unclear]

- Task: [short action-oriented description, max 10 words, start with a verb]
  Category: [one of: Vendor, Design, Coordination, Procurement, On-site, Dev, Admin]
  Priority: [High if hard deadline or blocks other work, Medium if has a date or is important, Low otherwise]
  Due: [YYYY-MM-DD if a date is mentioned or can be inferred, otherwise TBD]
  Notes: [two to three sentences of context, sub-steps, and dependencies; add "Owner: Name" if someone other than {default_assignee} owns it]
  Waiting on: [only if blocked: Person/Company — description, mentioned date context]

After all tasks for a project, if you identified a clear project scope or key milestones, add:

Scope: [1-3 sentence summary of the project's goal and deliverables]

Milestones:
- [YYYY-MM-DD] [milestone description]
- [YYYY-MM-DD] [milestone description]

Only include Scope and Milestones if the notes contain enough information to summarize them. Skip if the notes are purely about tasks.

Rules:
- Consolidate related actions into a single task. If multiple steps serve the same goal, combine them. Use the notes field for sub-steps. Aim for 8-12 tasks per meeting, not 20+.
- Only extract real tasks, not discussion points, opinions, calendar reminders, or background context.
- Quick actions under 2 minutes (a chat message, a quick confirmation) should be folded into the notes of a related task, not their own task.
- Travel constraints or scheduling notes should not be tasks. Mention them in the notes of the relevant task.
- Default task owner is {default_assignee} unless someone else is clearly assigned.
- Do not use markdown formatting. Plain text only.
- If multiple projects are mentioned, group tasks under a separate Project: header for each project.
- If no actionable tasks exist in the input, return exactly: "{sentinel}\""""

PROJECT_CREATION_PROMPT = """\
You are a project setup assistant. You will receive raw notes about a new project: meeting notes, a brief, a message, or a brain dump. Extract all useful project details and return them as JSON.

Return ONLY valid JSON with this exact structure (no markdown, no explanation):
{
  "name": "Project name if mentioned, otherwise empty string",
  "client": "Client or company name if mentioned, otherwise empty string",
  "phase": "Current phase if mentioned (e.g., Pre-production, Design, Development), otherwise empty string",
  "deadline": "YYYY-MM-DD if a deadline is mentioned, otherwise empty string",
  "budget": null or number (e.g., 5000),
  "hours_estimate": null or number (e.g., 40),
  "scope": "1-3 sentence summary of the project goal and deliverables, or empty string",
  "notes": "Any remaining context, background info, or details that don't fit elsewhere",
  "milestones": [
    { "title": "Milestone description", "date": "YYYY-MM-DD or empty string", "completed": false }
  ],
  "tasks": [
    { "title": "Short action-oriented task (start with verb)", "priority": "high|medium|low", "due_date": "YYYY-MM-DD or null", "subtitle": "Brief context or notes" }
  ],
  "links": [
    { "title": "Link label", "url": "https://..." }
  ]
}

Rules:
- Extract as much as you can. Leave fields empty/null if not mentioned.
- Tasks should be actionable: start with a verb, max 10 words.
- Consolidate related actions into single tasks. Aim for quality over quantity.
- Budget and hours_estimate should be plain numbers (no currency symbols or units).
- Links: extract any URLs mentioned with a descriptive title.
- If no useful information can be extracted, return the JSON with all empty/null fields."""


def build_normalization_prompt(default_assignee: Optional[str] = None) -> str:
    """
    System prompt for the freeform-to-grammar contract.

    Args:
        default_assignee: Owner for tasks with no named owner (default: configured identity)
    """
    return _NORMALIZATION_PROMPT_TEMPLATE.format(
        default_assignee=default_assignee or get_default_assignee(),
        sentinel=NO_TASKS_SENTINEL,
    )


# =============================================================================
# NO-TASKS DETECTION
# =============================================================================

# Any line the structured parser would open a task on (indentation allowed)
_TASK_LINE = re.compile(r"^\s*-\s*Task:[ \t]*\S", re.MULTILINE)

# Phrasings the service uses instead of (or around) the sentinel
_NO_TASKS_PHRASES = re.compile(
    r"no tasks found|no actionable tasks|not enough information|nothing actionable",
    re.IGNORECASE,
)


def is_no_tasks_response(text: Optional[str]) -> bool:
    """
    True if a normalization response means "nothing to extract".

    Empty responses count. A response that contains at least one task line
    is never treated as empty, even if it also mentions the sentinel.
    """
    if not text or not text.strip():
        return True
    if _TASK_LINE.search(text):
        return False
    return bool(_NO_TASKS_PHRASES.search(text))
