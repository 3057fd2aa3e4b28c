"""Contact field extraction engine.

Runs the name, address and phone extractors over one OCR text and merges
their output into a single record. Everything here is pure: no I/O and no
state kept between calls, so the functions are safe to call concurrently.
"""

from dataclasses import dataclass

from contact_ocr.utils.logger import get_logger

from .address import extract_address
from .lines import normalize_lines
from .name import extract_name
from .phone import extract_phone

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExtractedFields:
    """Contact fields found in a document; empty strings mean not found."""

    name: str = ""
    address: str = ""
    phone_number: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.name or self.address or self.phone_number)


@dataclass(frozen=True)
class ExtractionResult:
    """Extracted fields together with the OCR text they came from."""

    fields: ExtractedFields
    raw_text: str
    confidence: float | None = None

    @property
    def no_data_found(self) -> bool:
        """Whether extraction succeeded but found none of the fields."""
        return self.fields.is_empty


def extract(text: str) -> ExtractedFields:
    """Extract name, address and phone number from raw OCR text.

    Args:
        text: Raw OCR text. Any string is accepted, including an empty one.

    Returns:
        The extracted fields.
    """
    lines = normalize_lines(text)
    fields = ExtractedFields(
        name=extract_name(lines),
        address=extract_address(lines),
        phone_number=extract_phone(text, lines),
    )
    logger.info(
        "Extracted contact fields from %d lines (name=%s, address=%s, phone=%s)",
        len(lines),
        bool(fields.name),
        bool(fields.address),
        bool(fields.phone_number),
    )
    return fields


def build_result(text: str, confidence: float | None = None) -> ExtractionResult:
    """Extract fields and wrap them with the source text and OCR confidence.

    Args:
        text: Raw OCR text.
        confidence: Recognition confidence reported by the OCR engine.

    Returns:
        Immutable extraction result.
    """
    return ExtractionResult(fields=extract(text), raw_text=text, confidence=confidence)
