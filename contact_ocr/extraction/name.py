"""Personal name extraction from normalized OCR lines.

A line qualifies as a name when it has two to four tokens and either every
token is title case or one of the tokens is an honorific. The first
qualifying line wins; there is no ranking between qualifying lines.
"""

import re

from contact_ocr.utils.logger import get_logger

from .phone import contains_phone

logger = get_logger(__name__)

HONORIFICS = frozenset({"mr", "mrs", "ms", "dr", "prof"})

_DIGIT = re.compile(r"\d")


def _is_title_token(token: str) -> bool:
    return len(token) > 1 and token[0].isupper() and token[1:] == token[1:].lower()


def _is_honorific(token: str) -> bool:
    return token.rstrip(".,").lower() in HONORIFICS


def is_name_candidate(line: str) -> bool:
    """Check that a line carries no email address or phone number."""
    return "@" not in line and not contains_phone(line)


def looks_like_name(line: str) -> bool:
    """Apply the token count, title case and honorific rules to a line."""
    tokens = line.split()
    if not 2 <= len(tokens) <= 4:
        return False
    if all(_is_title_token(token) for token in tokens):
        return True
    return any(_is_honorific(token) for token in tokens)


def extract_name(lines: list[str]) -> str:
    """Find the most likely personal name line.

    Args:
        lines: Normalized OCR lines in document order.

    Returns:
        The first line that looks like a name. Falls back to the first
        line with no digits and more than three characters, or an empty
        string.
    """
    for line in lines:
        if is_name_candidate(line) and looks_like_name(line):
            return line

    for line in lines:
        if not _DIGIT.search(line) and len(line) > 3:
            logger.debug("No name-shaped line, falling back to %r", line)
            return line
    return ""
