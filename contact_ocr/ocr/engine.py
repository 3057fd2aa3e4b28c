"""Common interface for OCR engines.

Engines turn image bytes into text and a confidence score. Any failure to
recognize (engine crash, network error, timeout, unreadable image) is raised
as :class:`OCRError`; an image without text is a normal, empty result.
"""

from dataclasses import dataclass
from typing import Protocol

from contact_ocr.utils.config import OCRConfig


class OCRError(Exception):
    """Raised when an OCR engine fails to recognize a document."""


@dataclass(frozen=True)
class OCRResult:
    """Recognized text and the engine's confidence in it (0.0 to 1.0)."""

    text: str
    confidence: float


class OCREngine(Protocol):
    """Anything that can recognize text in an image."""

    name: str

    def recognize(self, image_bytes: bytes) -> OCRResult: ...


def create_engine(config: OCRConfig) -> OCREngine:
    """Build the OCR engine selected in the configuration.

    Args:
        config: OCR configuration.

    Returns:
        Tesseract or Google Cloud Vision engine.
    """
    if config.engine == "vision":
        from .vision_engine import VisionEngine

        return VisionEngine(
            api_key=config.vision_api_key,
            endpoint=config.vision_endpoint,
            language_hints=config.language_hints,
            timeout=config.timeout_s,
        )

    from .tesseract_engine import TesseractEngine

    return TesseractEngine(
        tesseract_cmd=config.tesseract_cmd,
        default_lang=config.default_lang,
        psm=config.psm,
    )
