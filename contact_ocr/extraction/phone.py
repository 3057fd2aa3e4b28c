"""Phone number extraction using an ordered chain of strategies.

Each strategy takes the raw text and its normalized lines and returns a
phone number or ``None``. Strategies run in order and the first hit wins;
later strategies are more permissive than earlier ones.
"""

import re
from collections.abc import Callable

from contact_ocr.utils.logger import get_logger

from .lines import normalize_lines

logger = get_logger(__name__)

PhoneStrategy = Callable[[str, list[str]], str | None]

_EXACT_TEN_DIGITS = re.compile(r"(?<!\d)\d{10}(?!\d)")
_TEN_DIGIT_RUN = re.compile(r"\d{10}")
_NON_DIGIT = re.compile(r"\D")

# Separators are restricted to "-", "." and space so a match never spans
# a line break.
FORMATTED_PHONE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"(\+?1?[-. ]?)?\(?(\d{3})\)?[-. ]?(\d{3})[-. ]?(\d{4})"),
    re.compile(r"\b\d{3}[-. ]?\d{3}[-. ]?\d{4}\b"),
    re.compile(r"\b\d{10}\b"),
    re.compile(r"(\+?\d{1,3}[-. ]?)?\(?\d{3}\)?[-. ]?\d{3}[-. ]?\d{4}"),
]


def exact_boundary(text: str, lines: list[str]) -> str | None:
    """Return a standalone run of exactly ten digits from the raw text."""
    match = _EXACT_TEN_DIGITS.search(text)
    return match.group(0) if match else None


def per_line_digits(text: str, lines: list[str]) -> str | None:
    """Return the digits of the first line holding exactly ten of them."""
    for line in lines:
        digits = _NON_DIGIT.sub("", line)
        if len(digits) == 10:
            return digits
    return None


def formatted_pattern(text: str, lines: list[str]) -> str | None:
    """Return the first match of the formatted phone patterns, in order."""
    for pattern in FORMATTED_PHONE_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0).strip()
    return None


def digit_window(text: str, lines: list[str]) -> str | None:
    """Return the first ten digits of the document, ignoring everything else.

    Recovers numbers that OCR split across lines or interleaved with noise.
    """
    digits = _NON_DIGIT.sub("", text)
    if len(digits) < 10:
        return None
    return digits[:10]


PHONE_STRATEGIES: list[PhoneStrategy] = [
    exact_boundary,
    per_line_digits,
    formatted_pattern,
    digit_window,
]


def contains_phone(line: str) -> bool:
    """Check whether a line holds a ten-digit run or a formatted phone number."""
    if _TEN_DIGIT_RUN.search(line):
        return True
    return any(pattern.search(line) for pattern in FORMATTED_PHONE_PATTERNS)


def extract_phone(text: str, lines: list[str] | None = None) -> str:
    """Find the most likely phone number in OCR text.

    Args:
        text: Raw OCR text.
        lines: Normalized lines of ``text``. Computed when omitted.

    Returns:
        The phone number, or an empty string if no strategy matched.
    """
    if lines is None:
        lines = normalize_lines(text)

    for strategy in PHONE_STRATEGIES:
        value = strategy(text, lines)
        if value:
            logger.debug("Phone found by %s: %s", strategy.__name__, value)
            return value
    return ""
