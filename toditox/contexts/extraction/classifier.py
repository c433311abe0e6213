"""Detection of notes already written in the structured grammar."""

from toditox.contexts.extraction.grammar_patterns import ClassifierPatterns


def is_structured_format(text) -> bool:
    """
    True if the text looks like the structured grammar.

    Heuristic: at least one "- Task:" line AND at least one "Category:" line,
    searched independently (they need not sit in the same block).
    """
    if not text or not isinstance(text, str):
        return False
    return bool(
        ClassifierPatterns.TASK_BULLET_LINE.search(text)
        and ClassifierPatterns.CATEGORY_LINE.search(text)
    )
