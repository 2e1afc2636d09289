"""
strip_patterns.py - Existing Pattern Removal

Removes date/counter fragments that an earlier template run added, so
applying the same template again does not stack them up.
"""

import re

# Date patterns, matched at the start or the end of the name
DATE_PATTERNS = [
    re.compile(r"^\d{4}[-_]\d{2}[-_]\d{2}[-_ ]?"),     # 2024-01-15_ / 2024_01_15-
    re.compile(r"^\d{8}[-_ ]?"),                        # 20240115_
    re.compile(r"^\d{2}[-_]\d{2}[-_]\d{4}[-_ ]?"),     # 15-01-2024_
    re.compile(r"[-_ ]\d{4}[-_]?\d{2}[-_]?\d{2}$"),    # _2024-01-15 / -20240115
]

# Counter patterns, matched at the end of the name
COUNTER_PATTERNS = [
    re.compile(r"[-_ ]\d{1,4}$"),                       # _001 / -02
    re.compile(r"\(\d{1,4}\)$"),                        # (3)
]

SEPARATORS = "-_ "


def _strip_once(name: str) -> str:
    """Apply every pattern once, in order, and trim leftover separators"""
    result = name
    for pattern in DATE_PATTERNS + COUNTER_PATTERNS:
        result = pattern.sub("", result, count=1)
    return result.strip(SEPARATORS)


def clean_filename(name: str) -> str:
    """
    Remove existing date and counter patterns from a name

    Passes are repeated until the name stops changing, so stacked dates
    from several earlier runs are removed as well. A pass that would leave
    nothing is discarded.

    Args:
        name: Name without extension

    Returns:
        Cleaned name (never empty for a non-empty input)
    """
    if not name:
        return name

    result = name
    while True:
        stripped = _strip_once(result)
        if not stripped or stripped == result:
            return result
        result = stripped
