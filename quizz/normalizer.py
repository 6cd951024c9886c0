"""
Accent, case and whitespace insensitive string comparison.
"""
import unicodedata

_ACCENTED = 'ÀÁÂÃÄÅàáâãäåÒÓÔÕÖØòóôõöøÈÉÊËèéêëðÇçÐÌÍÎÏìíîïÙÚÛÜùúûüÑñŠšŸÿýŽž'
_BASE = 'AAAAAAaaaaaaOOOOOOooooooEEEEeeeeeCcDIIIIiiiiUUUUuuuuNnSsYyyZz'

_ACCENT_TABLE = str.maketrans(_ACCENTED, _BASE)


def fold_char(char: str) -> str:
    """Strip the accent from a single character and lower-case it."""
    return char.translate(_ACCENT_TABLE).lower()


def is_revealable(char: str) -> bool:
    """True if the character is part of the reveal alphabet (letters and digits)."""
    return char.isalnum() or fold_char(char).isalnum()


def normalize(text: str) -> str:
    """
    Normalize a string for answer comparison.

    Accented Latin characters from a fixed table are replaced by their base
    letter, then the result is lower-cased and trimmed.

    Args:
        text: Raw string, may be None

    Returns:
        Normalized string
    """
    if not text:
        return ""
    composed = unicodedata.normalize('NFC', text)
    return composed.translate(_ACCENT_TABLE).lower().strip()


def answers_match(submitted: str, answer: str) -> bool:
    submitted_norm = normalize(submitted)
    return bool(submitted_norm) and submitted_norm == normalize(answer)
