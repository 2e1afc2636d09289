"""
case_style.py - Filename Case Normalization

Splits a name into words (separators and camelCase boundaries) and
rejoins them in one of the supported case styles.
"""

from typing import List

from .models_rename import CaseStyle

# Word separators
WORD_SEPARATORS = (" ", "_", "-", ".")


def split_into_words(text: str) -> List[str]:
    """
    Split a string into words

    Separators end the current word; an uppercase character right after a
    lowercase one starts a new word without consuming anything.

    Args:
        text: Input text

    Returns:
        Word list (never contains empty strings)
    """
    words: List[str] = []
    current = ""
    prev_was_lower = False

    for c in text:
        if c in WORD_SEPARATORS:
            if current:
                words.append(current)
                current = ""
            prev_was_lower = False
            continue

        # camelCase / PascalCase boundary
        if c.isupper() and prev_was_lower and current:
            words.append(current)
            current = ""

        current += c
        prev_was_lower = c.islower()

    if current:
        words.append(current)

    return words


def capitalize_word(word: str) -> str:
    """Uppercase the first character, lowercase the rest"""
    if not word:
        return ""
    return word[0].upper() + word[1:].lower()


def normalize_case(name: str, style: CaseStyle) -> str:
    """
    Apply a case style to a name (no extension handling)

    Args:
        name: Name to normalize
        style: Target case style

    Returns:
        Normalized name
    """
    if style == CaseStyle.NONE or not name:
        return name

    words = split_into_words(name)

    if style == CaseStyle.LOWERCASE:
        return " ".join(w.lower() for w in words)
    if style == CaseStyle.UPPERCASE:
        return " ".join(w.upper() for w in words)
    if style == CaseStyle.CAPITALIZE:
        if not words:
            return ""
        return " ".join([capitalize_word(words[0])] + [w.lower() for w in words[1:]])
    if style == CaseStyle.TITLE_CASE:
        return " ".join(capitalize_word(w) for w in words)
    if style == CaseStyle.KEBAB_CASE:
        return "-".join(w.lower() for w in words)
    if style == CaseStyle.SNAKE_CASE:
        return "_".join(w.lower() for w in words)
    if style == CaseStyle.CAMEL_CASE:
        return "".join(w.lower() if i == 0 else capitalize_word(w) for i, w in enumerate(words))
    if style == CaseStyle.PASCAL_CASE:
        return "".join(capitalize_word(w) for w in words)

    return name


def normalize_filename(filename: str, style: CaseStyle) -> str:
    """
    Normalize a full filename

    The style applies to the name part only; the extension is always
    lowercased and a hidden file keeps its leading dot.

    Args:
        filename: Filename with extension
        style: Target case style

    Returns:
        Normalized filename
    """
    if style == CaseStyle.NONE or not filename:
        return filename

    is_hidden = filename.startswith(".")
    working = filename[1:] if is_hidden else filename

    pos = working.rfind(".")
    if pos <= 0:
        name, extension = working, ""
    else:
        name, extension = working[:pos], working[pos:]

    prefix = "." if is_hidden else ""
    # A name made only of separators keeps its original form
    normalized = normalize_case(name, style) or name
    return f"{prefix}{normalized}{extension.lower()}"
