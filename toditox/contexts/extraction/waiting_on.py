"""
Waiting-on value parsing.

A waiting-on value names who a task is blocked on, what is owed, and
optionally when it was promised:

    Bould Design — updated CAD files, mentioned by end of week
    -> contact="Bould Design", description="updated CAD files",
       date_context="by end of week"
"""

from typing import Optional

from toditox.contexts.extraction.grammar_patterns import WaitingOnPatterns
from toditox.contexts.extraction.records import WaitingOnEntry


def parse_waiting_on(raw: Optional[str]) -> Optional[WaitingOnEntry]:
    """
    Parse the text after a "Waiting on:" label.

    Splits on the first em dash, en dash or double hyphen. Without a
    delimiter the whole value is the contact. After the delimiter, a
    trailing ", mentioned <X>" / ", requested <X>" clause becomes the date
    context; everything else stays in the description.

    Args:
        raw: Value text (label already removed)

    Returns:
        WaitingOnEntry, or None for empty input
    """
    if not raw or not raw.strip():
        return None
    text = raw.strip()

    split = WaitingOnPatterns.CONTACT_SPLIT.match(text)
    if not split:
        return WaitingOnEntry(contact=text, description="", date_context=None)

    contact = split.group(1).strip()
    remainder = split.group(2).strip()

    clause = WaitingOnPatterns.DATE_CONTEXT_CLAUSE.search(remainder)
    if clause:
        return WaitingOnEntry(
            contact=contact,
            description=remainder[: clause.start()].strip(),
            date_context=clause.group(1).strip(),
        )

    return WaitingOnEntry(contact=contact, description=remainder, date_context=None)
