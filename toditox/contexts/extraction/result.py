"""
Result normalization.

Every pipeline output goes through normalize_result() before it reaches
storage, so callers can rely on six list fields no matter which path
produced the result.
"""

from collections.abc import Mapping
from typing import Any

from toditox.contexts.extraction.records import RESULT_FIELDS, ParseResult


def empty_result() -> ParseResult:
    """Canonical empty result (six empty lists)."""
    return ParseResult()


def normalize_result(candidate: Any) -> ParseResult:
    """
    Coerce any candidate result into the canonical ParseResult shape.

    Args:
        candidate: ParseResult, mapping, object with result attributes, or None

    Returns:
        New ParseResult; a missing or non-list field becomes [] and tuples become lists
    """
    if candidate is None:
        return empty_result()

    values = {}
    for name in RESULT_FIELDS:
        if isinstance(candidate, Mapping):
            value = candidate.get(name)
        else:
            value = getattr(candidate, name, None)

        if isinstance(value, (list, tuple)):
            values[name] = list(value)
        else:
            values[name] = []

    return ParseResult(**values)
