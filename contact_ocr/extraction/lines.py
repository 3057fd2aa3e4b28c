"""Line normalization for raw OCR text."""


def normalize_lines(text: str) -> list[str]:
    """Split OCR text into stripped, non-empty lines.

    Args:
        text: Raw OCR text, possibly empty.

    Returns:
        Lines in document order with surrounding whitespace removed.
    """
    return [line.strip() for line in text.splitlines() if line.strip()]
