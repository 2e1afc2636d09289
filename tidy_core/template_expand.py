"""
template_expand.py - Filename Template Expansion

Placeholders:
    {name} / {original}   file stem (optionally cleaned of earlier patterns)
    {ext}                 extension without dot
    {date}                modification date in the preview date format
    {date:FORMAT}         modification date in a per-occurrence format
    {year} {month} {day}  modification date parts

Unknown placeholders are left as they are.
"""

from datetime import datetime
from typing import List, Tuple
import re

from .errors import PreviewFailed
from .models_fs import FileDescriptor
from .sanitize_name import sanitize_filename
from .strip_patterns import clean_filename

DEFAULT_DATE_FORMAT = "YYYY-MM-DD"

# Metadata source tags
SOURCE_FILENAME = "filename"
SOURCE_FILE_DATE = "file-date"

CUSTOM_DATE_RE = re.compile(r"\{date:([^}]+)\}")

# Token -> strftime directive, applied in this order
DATE_TOKENS = (
    ("YYYY", "%Y"),
    ("MM", "%m"),
    ("DD", "%d"),
    ("HH", "%H"),
    ("mm", "%M"),
    ("ss", "%S"),
)


def format_date(dt: datetime, fmt: str) -> str:
    """
    Format a date with YYYY/MM/DD/HH/mm/ss tokens

    Args:
        dt: Date to format
        fmt: Token format (e.g., YYYY-MM-DD)

    Returns:
        Formatted date
    """
    # Literal percent signs must not reach strftime as directives
    directive = fmt.replace("%", "%%")
    for token, code in DATE_TOKENS:
        directive = directive.replace(token, code)
    return dt.strftime(directive)


def validate_template(pattern: str) -> None:
    """
    Reject patterns that cannot expand to anything

    Stray braces and unknown placeholders are kept as literal text.

    Raises:
        PreviewFailed: pattern is empty
    """
    if not pattern or not pattern.strip():
        raise PreviewFailed("Template pattern cannot be empty")


def _add_source(sources: List[str], source: str) -> None:
    if source not in sources:
        sources.append(source)


def _fix_extension(result: str, extension: str) -> str:
    """Append the source extension, or force it when the result has another one"""
    if not extension:
        return result
    if "." not in result:
        return f"{result}.{extension}"
    if not result.endswith(f".{extension}"):
        pos = result.rfind(".")
        return f"{result[:pos]}.{extension}"
    return result


def apply_template(
    file: FileDescriptor,
    pattern: str,
    date_format: str = DEFAULT_DATE_FORMAT,
    strip_existing_patterns: bool = False,
) -> Tuple[str, List[str]]:
    """
    Apply a template pattern to generate a new filename

    Args:
        file: File descriptor
        pattern: Template pattern
        date_format: Format used by {date}
        strip_existing_patterns: Clean the stem before substituting {name}

    Returns:
        (sanitized filename, metadata sources)
    """
    result = pattern
    sources: List[str] = []
    modified = file.modified_at

    name = clean_filename(file.name) if strip_existing_patterns else file.name

    if "{name}" in result or "{original}" in result:
        result = result.replace("{name}", name).replace("{original}", name)
        _add_source(sources, SOURCE_FILENAME)

    if "{ext}" in result:
        result = result.replace("{ext}", file.extension)

    if "{date}" in result:
        result = result.replace("{date}", format_date(modified, date_format))
        _add_source(sources, SOURCE_FILE_DATE)

    if CUSTOM_DATE_RE.search(result):
        result = CUSTOM_DATE_RE.sub(lambda m: format_date(modified, m.group(1)), result)
        _add_source(sources, SOURCE_FILE_DATE)

    if "{year}" in result:
        result = result.replace("{year}", modified.strftime("%Y"))
        _add_source(sources, SOURCE_FILE_DATE)
    if "{month}" in result:
        result = result.replace("{month}", modified.strftime("%m"))
    if "{day}" in result:
        result = result.replace("{day}", modified.strftime("%d"))

    result = _fix_extension(result, file.extension)

    return sanitize_filename(result).sanitized, sources
