"""
Render extracted records back into the structured notes grammar.

Used to show a parse result in the same format the parser reads, and to
check that parse(render(x)) keeps the task fields intact.
"""

from typing import Optional

from jinja2 import Environment, StrictUndefined, Template

from toditox.contexts.extraction.defaults import CATEGORY_LABELS
from toditox.contexts.extraction.records import ParseResult, ProjectUpdate, Task, WaitingOnEntry

_TASK_TEMPLATE = """\
- Task: {{ task.title }}
{% if task.energy %}
  Category: {{ category_label(task.energy) }}
{% endif %}
{% if task.priority %}
  Priority: {{ task.priority | capitalize }}
{% endif %}
  Due: {{ task.due_date or "TBD" }}
{% if task.subtitle %}
  Notes: {{ task.subtitle }}
{% endif %}
{% for entry in task.waiting_on %}
  Waiting on: {{ waiting_on_value(entry) }}
{% endfor %}
"""

_PROJECT_TEMPLATE = """\
Project: {{ project_name }}

{% for task in tasks %}
{{ render_task(task) }}
{% endfor %}
{% if update and update.scope %}
Scope: {{ update.scope }}

{% endif %}
{% if update and update.milestones %}
Milestones:
{% for milestone in update.milestones %}
- [{{ milestone.date }}] {{ milestone.title }}
{% endfor %}

{% endif %}
"""

_env = Environment(
    # Catches silent failures
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def category_label(energy: str) -> str:
    return CATEGORY_LABELS.get(energy, energy)


def waiting_on_value(entry: WaitingOnEntry) -> str:
    """Format a waiting-on entry as the text after the "Waiting on:" label."""
    if not entry.description and not entry.date_context:
        return entry.contact

    value = f"{entry.contact} — {entry.description}"
    if entry.date_context:
        value += f", mentioned {entry.date_context}"
    return value


def _template(source: str) -> Template:
    template = _env.from_string(source)
    template.globals.update(
        category_label=category_label,
        waiting_on_value=waiting_on_value,
        render_task=render_task,
    )
    return template


def render_task(task: Task) -> str:
    """Render one task block (no project header)."""
    return _template(_TASK_TEMPLATE).render(task=task).rstrip("\n")


def _render_project(
    project_name: str, tasks: list[Task], update: Optional[ProjectUpdate]
) -> str:
    return _template(_PROJECT_TEMPLATE).render(
        project_name=project_name, tasks=tasks, update=update
    )


def render_structured(result: ParseResult) -> str:
    """
    Render a ParseResult as structured notes.

    Tasks without a project come first (before any Project: header, so a
    re-parse keeps them unassigned). Projects follow in first-seen order,
    each with its tasks, then its scope and milestones.
    """
    unassigned = [task for task in result.tasks if not task.project_name]

    project_order: list[str] = []
    for task in result.tasks:
        if task.project_name and task.project_name not in project_order:
            project_order.append(task.project_name)
    for update in result.project_updates:
        if update.project_name not in project_order:
            project_order.append(update.project_name)

    updates = {update.project_name: update for update in result.project_updates}

    blocks = [render_task(task) for task in unassigned]
    for name in project_order:
        project_tasks = [task for task in result.tasks if task.project_name == name]
        blocks.append(_render_project(name, project_tasks, updates.get(name)).rstrip("\n"))

    return "\n\n".join(blocks) + "\n" if blocks else ""
