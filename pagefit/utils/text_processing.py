"""Text helpers shared by the CV parser and the metrics estimator."""

from typing import Any, List


def clean_text_list(value: Any) -> List[str]:
    """
    Keep only the string entries of a list-like value.

    Anything that is not a list or tuple (None, a mapping, a number) yields an
    empty list. Empty strings are dropped along with non-string entries.

    Args:
        value: Candidate list of strings

    Returns:
        List of non-empty strings, in original order

    Example:
        >>> clean_text_list(["Python", 3, None, "", "SQL"])
        ['Python', 'SQL']
    """
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, str) and item]


def split_comma_list(text: str) -> List[str]:
    """
    Split a comma-separated string into trimmed, non-empty items.

    Example:
        >>> split_comma_list("Python, SQL,, Docker ")
        ['Python', 'SQL', 'Docker']
    """
    return [part.strip() for part in text.split(",") if part.strip()]
