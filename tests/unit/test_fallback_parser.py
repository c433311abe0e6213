"""Unit tests for pattern-based fallback extraction."""

import pytest

from toditox.contexts.extraction.fallback_parser import (
    detect_priority,
    extract_due_date,
    parse_with_patterns,
    strip_emphasis,
)

MEETING_NOTES = """\
Weekly sync with the studio

## My Action Items
- **Send revised quote** to Acme (due: 2025-04-02)
1. 🔴 Book the venue deadline: 2025-04-10
* [ ] Review _draft_ contract

## Team Action Items
- 🟢 Update the shared calendar
2) Collect supplier invoices - urgent

## Open Questions
- Who approves the budget?
"""


@pytest.mark.unit
class TestParseWithPatterns:
    def test_tasks_only(self):
        result = parse_with_patterns(MEETING_NOTES)

        assert len(result.tasks) == 6
        assert result.projects == []
        assert result.project_updates == []
        assert result.opportunities == []
        assert result.contacts == []
        assert result.time_entries == []

    def test_titles_and_dates(self):
        tasks = parse_with_patterns(MEETING_NOTES).tasks

        assert [t.title for t in tasks[:3]] == [
            "Send revised quote to Acme",
            "Book the venue",
            "Review draft contract",
        ]
        assert tasks[0].due_date == "2025-04-02"
        assert tasks[1].due_date == "2025-04-10"
        assert tasks[2].due_date is None

    def test_section_context(self):
        tasks = parse_with_patterns(MEETING_NOTES).tasks

        assert [(t.is_mine, t.assignee) for t in tasks] == [
            (True, "Pablo"),
            (True, "Pablo"),
            (True, "Pablo"),
            (False, "Team"),
            (False, "Team"),
            # Any other heading resets to the default identity
            (True, "Pablo"),
        ]

    def test_priorities(self):
        tasks = parse_with_patterns(MEETING_NOTES).tasks

        assert [t.priority for t in tasks] == ["", "high", "", "low", "high", ""]
        assert tasks[3].title == "Update the shared calendar"

    def test_triage_fields_left_empty(self):
        for task in parse_with_patterns(MEETING_NOTES).tasks:
            assert task.energy == ""
            assert task.pomodoro_count == 0
            assert task.project_name is None

    def test_prose_without_list_items(self):
        result = parse_with_patterns("We talked about the roadmap for a while.")

        assert result.tasks == []

    @pytest.mark.parametrize("text", [None, "", "  \n "])
    def test_empty(self, text):
        assert parse_with_patterns(text).is_empty()

    def test_default_assignee_argument(self):
        tasks = parse_with_patterns("- Ship it", default_assignee="Dana").tasks

        assert tasks[0].assignee == "Dana"
        assert tasks[0].is_mine is True


@pytest.mark.unit
class TestHelpers:
    @pytest.mark.parametrize(
        "line,priority",
        [
            ("🔴 Fix the leak", "high"),
            ("Fix the leak (critical)", "high"),
            ("URGENT: call back", "high"),
            ("🟡 Tidy the docs", "medium"),
            ("medium effort cleanup", "medium"),
            ("🟢 Water plants", "low"),
            ("low priority filing", "low"),
            ("Highlight the summary", ""),
            ("Plain task", ""),
        ],
    )
    def test_detect_priority(self, line, priority):
        assert detect_priority(line) == priority

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("**Bold task**", "Bold task"),
            ("__Underlined__ task", "Underlined task"),
            ("*Italic* task", "Italic task"),
            ("~~Struck~~ `code` task", "Struck code task"),
            ("update_config file", "update_config file"),
        ],
    )
    def test_strip_emphasis(self, text, expected):
        assert strip_emphasis(text) == expected

    def test_due_suffix(self):
        assert extract_due_date("Send quote (due: 2025-04-02)") == ("Send quote", "2025-04-02")

    def test_deadline_phrase(self):
        assert extract_due_date("Book venue, deadline: March 5, 2025") == (
            "Book venue",
            "2025-03-05",
        )

    def test_unparseable_due_keeps_title_clean(self):
        assert extract_due_date("Send quote (due: soonish)") == ("Send quote", None)

    def test_no_date(self):
        assert extract_due_date("Send quote") == ("Send quote", None)
