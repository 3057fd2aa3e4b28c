"""Document processing pipeline from image to contact fields.

Runs OCR on each document and hands the recognized text to the extraction
engine. Batches are processed one document at a time and a failing document
is recorded without stopping the rest.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from contact_ocr.extraction.engine import ExtractionResult, build_result
from contact_ocr.utils.config import AppConfig
from contact_ocr.utils.logger import get_logger

from .engine import OCREngine, OCRError, create_engine

logger = get_logger(__name__)


@dataclass
class DocumentResult:
    """Extraction result for a single document."""

    source_file: str
    result: ExtractionResult


@dataclass
class BatchItem:
    """Outcome of one document in a batch: a result or an error message."""

    filename: str
    result: ExtractionResult | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class DocumentProcessor:
    """End-to-end pipeline: load image, recognize text, extract fields.

    Args:
        config: Application configuration object.
        engine: OCR engine to use. Built from ``config.ocr`` when omitted.
    """

    def __init__(self, config: AppConfig, engine: OCREngine | None = None) -> None:
        self.config = config
        self.ocr_engine = engine or create_engine(config.ocr)

    def process(
        self, source: Path | bytes, filename: str = "document"
    ) -> DocumentResult:
        """Process one document from a file path or raw bytes.

        Args:
            source: Path to an image file, or the image bytes.
            filename: Display name for the source document.

        Returns:
            Extraction result for the document.

        Raises:
            OCRError: If the file cannot be read or recognition fails.
        """
        logger.info("Processing document: %s", filename)
        image_bytes = self._load_bytes(source)
        ocr_result = self.ocr_engine.recognize(image_bytes)
        result = build_result(ocr_result.text, ocr_result.confidence)

        if result.no_data_found and self.config.extraction.warn_on_empty:
            logger.warning("No contact fields found in %s", filename)
        return DocumentResult(source_file=filename, result=result)

    def process_batch(
        self, sources: Iterable[tuple[str, Path | bytes]]
    ) -> list[BatchItem]:
        """Process several documents, isolating per-document OCR failures.

        Args:
            sources: ``(filename, path_or_bytes)`` pairs.

        Returns:
            One item per source, in input order.
        """
        items: list[BatchItem] = []
        for filename, source in sources:
            try:
                doc = self.process(source, filename)
            except OCRError as exc:
                logger.error("Failed to process %s: %s", filename, exc)
                items.append(BatchItem(filename=filename, error=str(exc)))
                continue
            items.append(BatchItem(filename=filename, result=doc.result))

        failed = sum(1 for item in items if not item.succeeded)
        logger.info("Processed %d documents (%d failed)", len(items), failed)
        return items

    @staticmethod
    def _load_bytes(source: Path | bytes) -> bytes:
        if isinstance(source, bytes):
            return source
        try:
            return Path(source).read_bytes()
        except OSError as exc:
            raise OCRError(f"Cannot read {source}: {exc}") from exc
