"""Pydantic request/response schemas for the FastAPI endpoints."""

from pydantic import BaseModel, Field

from contact_ocr.extraction.engine import ExtractedFields


class ContactFieldsResponse(BaseModel):
    """Extracted contact fields; empty strings mean not found."""

    name: str = ""
    address: str = ""
    phone_number: str = ""

    @classmethod
    def from_fields(cls, fields: ExtractedFields) -> "ContactFieldsResponse":
        return cls(
            name=fields.name,
            address=fields.address,
            phone_number=fields.phone_number,
        )


class TextExtractionRequest(BaseModel):
    """Request schema for extracting fields from already recognized text."""

    text: str = Field(default="", description="Raw OCR text")


class TextExtractionResponse(BaseModel):
    """Response schema for a text-only extraction."""

    fields: ContactFieldsResponse
    no_data_found: bool
    warning: str | None = None


class ExtractionResponse(BaseModel):
    """Response schema for a document extraction request."""

    success: bool
    document_id: str
    filename: str
    fields: ContactFieldsResponse
    raw_text: str
    confidence: float | None = None
    no_data_found: bool
    warning: str | None = None
    processing_time_ms: float


class BatchItemResponse(BaseModel):
    """Response schema for a single item in a batch extraction."""

    filename: str
    result: ExtractionResponse | None = None
    error: str | None = None


class BatchExtractionResponse(BaseModel):
    """Response schema for batch extraction of multiple documents."""

    success: bool
    total_documents: int
    successful: int
    failed: int
    results: list[BatchItemResponse]


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    ocr_engine: str
    tesseract_available: bool
