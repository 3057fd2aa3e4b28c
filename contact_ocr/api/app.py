"""FastAPI application for the contact OCR API.

Provides REST endpoints for extracting contact fields from uploaded images,
from already recognized text, from batches of images, and a health check.
"""

import shutil
import time
import uuid
from typing import Annotated

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from contact_ocr.extraction.engine import ExtractionResult, build_result
from contact_ocr.ocr.document_processor import DocumentProcessor
from contact_ocr.ocr.engine import OCRError
from contact_ocr.utils.config import AppConfig, load_config
from contact_ocr.utils.logger import get_logger

from .schemas import (
    BatchExtractionResponse,
    BatchItemResponse,
    ContactFieldsResponse,
    ExtractionResponse,
    HealthResponse,
    TextExtractionRequest,
    TextExtractionResponse,
)

logger = get_logger(__name__)

VERSION = "1.0.0"
NO_DATA_WARNING = "No name, address or phone number found in the document"

app = FastAPI(
    title="Contact OCR API",
    description=(
        "Extract names, postal addresses and phone numbers from scanned documents"
    ),
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ALLOWED_CONTENT_TYPES = {
    "image/png",
    "image/jpeg",
    "image/tiff",
    "image/bmp",
    "image/gif",
    "image/webp",
    "application/octet-stream",
}


def _get_config() -> AppConfig:
    return load_config()


def _get_processor() -> DocumentProcessor:
    """Build the document processor from the current configuration."""
    return DocumentProcessor(_get_config())


def _warning_for(result: ExtractionResult, config: AppConfig) -> str | None:
    if result.no_data_found and config.extraction.warn_on_empty:
        return NO_DATA_WARNING
    return None


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return system health status."""
    return HealthResponse(
        status="healthy",
        version=VERSION,
        ocr_engine=_get_config().ocr.engine,
        tesseract_available=shutil.which("tesseract") is not None,
    )


@app.post("/extract", response_model=ExtractionResponse)
async def extract_document(
    file: Annotated[UploadFile, File(...)],
) -> ExtractionResponse:
    """Extract contact fields from an uploaded image.

    Args:
        file: Uploaded image file.

    Returns:
        Extracted fields with the recognized text and OCR confidence.
    """
    start_time = time.time()

    if file.content_type and file.content_type not in _ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {file.content_type}",
        )

    filename = file.filename or "document"
    try:
        processor = _get_processor()
        content = await file.read()
        doc_result = processor.process(content, filename)
    except OCRError as exc:
        logger.error("OCR failed for %s: %s", filename, exc)
        raise HTTPException(status_code=502, detail=f"OCR failed: {exc}") from exc
    except Exception as exc:
        logger.error("Extraction failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    result = doc_result.result
    return ExtractionResponse(
        success=True,
        document_id=str(uuid.uuid4()),
        filename=filename,
        fields=ContactFieldsResponse.from_fields(result.fields),
        raw_text=result.raw_text,
        confidence=result.confidence,
        no_data_found=result.no_data_found,
        warning=_warning_for(result, processor.config),
        processing_time_ms=(time.time() - start_time) * 1000,
    )


@app.post("/extract/text", response_model=TextExtractionResponse)
async def extract_text(request: TextExtractionRequest) -> TextExtractionResponse:
    """Extract contact fields from raw OCR text without running OCR."""
    result = build_result(request.text)
    return TextExtractionResponse(
        fields=ContactFieldsResponse.from_fields(result.fields),
        no_data_found=result.no_data_found,
        warning=_warning_for(result, _get_config()),
    )


@app.post("/extract/batch", response_model=BatchExtractionResponse)
async def extract_batch(
    files: Annotated[list[UploadFile], File(...)],
) -> BatchExtractionResponse:
    """Extract contact fields from several uploaded images.

    A failure on one file is reported on that file and does not stop the
    others.

    Args:
        files: List of uploaded image files.

    Returns:
        Batch extraction results with per-file outcomes.
    """
    results: list[BatchItemResponse] = []
    successful = 0

    for file in files:
        filename = file.filename or "unknown"
        try:
            result = await extract_document(file)
            results.append(BatchItemResponse(filename=filename, result=result))
            successful += 1
        except HTTPException as exc:
            results.append(BatchItemResponse(filename=filename, error=exc.detail))

    return BatchExtractionResponse(
        success=successful > 0,
        total_documents=len(files),
        successful=successful,
        failed=len(files) - successful,
        results=results,
    )
