"""Tesseract OCR engine for scanned contact documents."""

import io

import pytesseract
from PIL import Image, UnidentifiedImageError

from contact_ocr.utils.logger import get_logger

from .engine import OCRError, OCRResult

logger = get_logger(__name__)


class TesseractEngine:
    """Local OCR using the Tesseract binary through pytesseract.

    Args:
        tesseract_cmd: Path to the Tesseract executable.
            If ``None``, uses the system default.
        default_lang: Tesseract language code.
        psm: Tesseract page segmentation mode.
    """

    name = "tesseract"

    def __init__(
        self,
        tesseract_cmd: str | None = None,
        default_lang: str = "eng",
        psm: int = 3,
    ) -> None:
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.default_lang = default_lang
        self.psm = psm

    def recognize(self, image_bytes: bytes) -> OCRResult:
        """Recognize text in an encoded image.

        Args:
            image_bytes: Image file content (PNG, JPEG, TIFF, ...).

        Returns:
            Recognized text and mean word confidence.

        Raises:
            OCRError: If the image cannot be decoded or Tesseract fails.
        """
        try:
            image = Image.open(io.BytesIO(image_bytes))
            image.load()
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
        ) as exc:
            raise OCRError(f"Cannot read image: {exc}") from exc

        config = f"--psm {self.psm}"
        try:
            text = pytesseract.image_to_string(
                image, lang=self.default_lang, config=config
            )
            data = pytesseract.image_to_data(
                image,
                lang=self.default_lang,
                config=config,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            raise OCRError(f"Tesseract failed: {exc}") from exc

        confidence = self._mean_confidence(data)
        logger.info(
            "Tesseract recognized %d characters with confidence %.2f",
            len(text),
            confidence,
        )
        return OCRResult(text=text, confidence=confidence)

    @staticmethod
    def _mean_confidence(data: dict) -> float:
        """Average the confidence of recognized words, scaled to 0-1."""
        scores = [
            float(conf)
            for conf, word in zip(data["conf"], data["text"])
            if float(conf) > 0 and str(word).strip()
        ]
        if not scores:
            return 0.0
        return sum(scores) / len(scores) / 100.0
