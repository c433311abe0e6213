"""Date normalization for extracted fields."""

import re
from datetime import datetime
from typing import Optional

from dateutil import parser as dateparser

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Values that mean "no date yet"
UNDATED_VALUES = {"", "tbd"}


def normalize_date(raw: Optional[str]) -> Optional[str]:
    """
    Canonicalize a date expression to YYYY-MM-DD.

    Strict ISO dates pass through untouched. Anything else goes through
    dateutil (missing parts filled from today); unparseable input gives None.

    Args:
        raw: Date text such as "2025-03-01", "March 5, 2025", "TBD"

    Returns:
        ISO date string, or None for TBD/empty/unparseable input

    Examples:
        normalize_date("TBD")            # None
        normalize_date("2025-03-01")     # "2025-03-01"
        normalize_date("Mar 5 2025")     # "2025-03-05"
        normalize_date("next-ish")       # None
    """
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if text.lower() in UNDATED_VALUES:
        return None

    if ISO_DATE.match(text):
        return text

    default = datetime.now().replace(hour=0, minute=0, second=0, microsecond=0)
    try:
        parsed = dateparser.parse(text, default=default)
    except (ValueError, OverflowError):
        return None

    return parsed.strftime("%Y-%m-%d")
