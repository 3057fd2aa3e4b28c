"""Postal address extraction from normalized OCR lines.

Picks the first line that looks like part of an address and joins the line
right after it when that line carries a city/state/ZIP or a ZIP code.
"""

import re

from contact_ocr.utils.logger import get_logger

from .phone import contains_phone

logger = get_logger(__name__)

STREET_TYPES: list[str] = [
    "street",
    "st",
    "avenue",
    "ave",
    "road",
    "rd",
    "lane",
    "ln",
    "drive",
    "dr",
    "boulevard",
    "blvd",
    "court",
    "ct",
    "plaza",
    "place",
    "pl",
    "way",
    "highway",
    "hwy",
    "circle",
    "cir",
]

_STREET_TYPE = re.compile(r"\b(?:" + "|".join(STREET_TYPES) + r")\b", re.IGNORECASE)
_HOUSE_NUMBER = re.compile(r"\d+\s+[A-Za-z]")
_CITY_STATE_ZIP = re.compile(r"[A-Za-z]+,\s*[A-Z]{2}\s*\d{5}")
_ZIP_CODE = re.compile(r"\b\d{5}\b")
_DIGIT = re.compile(r"\d")

_MIN_CANDIDATE_LENGTH = 5
_MIN_FALLBACK_LENGTH = 10


def is_address_candidate(line: str) -> bool:
    """Check whether a line looks like a street, house number or city line."""
    if "@" in line or len(line) <= _MIN_CANDIDATE_LENGTH:
        return False
    return bool(
        _STREET_TYPE.search(line)
        or _HOUSE_NUMBER.search(line)
        or _CITY_STATE_ZIP.search(line)
    )


def is_continuation(line: str) -> bool:
    """Check whether a line completes an address with a city/state/ZIP."""
    return bool(_CITY_STATE_ZIP.search(line) or _ZIP_CODE.search(line))


def extract_address(lines: list[str]) -> str:
    """Find the most likely postal address.

    Args:
        lines: Normalized OCR lines in document order.

    Returns:
        The first address line, joined with the following line when that
        one completes it. Falls back to the first long line with digits that
        is not a phone number, or an empty string.
    """
    for index, line in enumerate(lines):
        if not is_address_candidate(line):
            continue
        if index + 1 < len(lines) and is_continuation(lines[index + 1]):
            return f"{line}, {lines[index + 1]}"
        return line

    for line in lines:
        if (
            _DIGIT.search(line)
            and not contains_phone(line)
            and len(line) > _MIN_FALLBACK_LENGTH
        ):
            logger.debug("No address-shaped line, falling back to %r", line)
            return line
    return ""
