"""Tests for the FastAPI REST endpoints."""

import uuid
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from contact_ocr.api.app import NO_DATA_WARNING, app
from contact_ocr.ocr.document_processor import DocumentProcessor
from contact_ocr.ocr.engine import OCRError, OCRResult
from contact_ocr.utils.config import AppConfig


@pytest.fixture
def client() -> TestClient:
    """Create a FastAPI test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def test_health_returns_ok(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["ocr_engine"] in ("tesseract", "vision")
        assert isinstance(data["tesseract_available"], bool)


class TestExtractEndpoint:
    """Tests for the /extract endpoint."""

    @patch("contact_ocr.api.app._get_processor")
    def test_extract_success(
        self,
        mock_processor: MagicMock,
        client: TestClient,
        make_engine,
        business_card_text: str,
        png_bytes: bytes,
    ) -> None:
        engine = make_engine([OCRResult(business_card_text, 0.92)])
        mock_processor.return_value = DocumentProcessor(AppConfig(), engine=engine)

        response = client.post(
            "/extract",
            files={"file": ("card.png", png_bytes, "image/png")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["filename"] == "card.png"
        assert data["fields"] == {
            "name": "Jane Smith",
            "address": "123 Main Street, Springfield, IL 62704",
            "phone_number": "5551234567",
        }
        assert data["raw_text"] == business_card_text
        assert data["confidence"] == pytest.approx(0.92)
        assert data["no_data_found"] is False
        assert data["warning"] is None
        assert data["processing_time_ms"] >= 0
        uuid.UUID(data["document_id"])

    @patch("contact_ocr.api.app._get_processor")
    def test_extract_no_data_found(
        self,
        mock_processor: MagicMock,
        client: TestClient,
        make_engine,
        png_bytes: bytes,
    ) -> None:
        engine = make_engine([OCRResult("", 0.0)])
        mock_processor.return_value = DocumentProcessor(AppConfig(), engine=engine)

        response = client.post(
            "/extract",
            files={"file": ("blank.png", png_bytes, "image/png")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["no_data_found"] is True
        assert data["warning"] == NO_DATA_WARNING
        assert data["fields"] == {"name": "", "address": "", "phone_number": ""}

    @patch("contact_ocr.api.app._get_processor")
    def test_extract_ocr_failure(
        self,
        mock_processor: MagicMock,
        client: TestClient,
        make_engine,
        png_bytes: bytes,
    ) -> None:
        engine = make_engine([OCRError("Vision API error 403: API key not valid")])
        mock_processor.return_value = DocumentProcessor(AppConfig(), engine=engine)

        response = client.post(
            "/extract",
            files={"file": ("card.png", png_bytes, "image/png")},
        )

        assert response.status_code == 502
        assert "OCR failed" in response.json()["detail"]

    @patch("contact_ocr.api.app._get_processor")
    def test_extract_unexpected_error(
        self, mock_processor: MagicMock, client: TestClient, png_bytes: bytes
    ) -> None:
        mock_processor.side_effect = RuntimeError("boom")

        response = client.post(
            "/extract",
            files={"file": ("card.png", png_bytes, "image/png")},
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "boom"

    def test_extract_unsupported_type(self, client: TestClient) -> None:
        response = client.post(
            "/extract",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400
        assert "Unsupported file type" in response.json()["detail"]


class TestExtractTextEndpoint:
    """Tests for the /extract/text endpoint."""

    def test_extract_text(self, client: TestClient, business_card_text: str) -> None:
        response = client.post("/extract/text", json={"text": business_card_text})
        assert response.status_code == 200
        data = response.json()
        assert data["fields"]["name"] == "Jane Smith"
        assert data["fields"]["phone_number"] == "5551234567"
        assert data["no_data_found"] is False
        assert data["warning"] is None

    def test_extract_empty_text(self, client: TestClient) -> None:
        response = client.post("/extract/text", json={"text": ""})
        assert response.status_code == 200
        data = response.json()
        assert data["no_data_found"] is True
        assert data["warning"] == NO_DATA_WARNING

    def test_text_defaults_to_empty(self, client: TestClient) -> None:
        response = client.post("/extract/text", json={})
        assert response.status_code == 200
        assert response.json()["no_data_found"] is True


class TestBatchEndpoint:
    """Tests for the /extract/batch endpoint."""

    @patch("contact_ocr.api.app._get_processor")
    def test_batch_isolates_failures(
        self,
        mock_processor: MagicMock,
        client: TestClient,
        make_engine,
        business_card_text: str,
        png_bytes: bytes,
    ) -> None:
        engine = make_engine(
            [OCRResult(business_card_text, 0.9), OCRError("request timed out")]
        )
        mock_processor.return_value = DocumentProcessor(AppConfig(), engine=engine)

        response = client.post(
            "/extract/batch",
            files=[
                ("files", ("a.png", png_bytes, "image/png")),
                ("files", ("b.png", png_bytes, "image/png")),
            ],
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["total_documents"] == 2
        assert data["successful"] == 1
        assert data["failed"] == 1
        assert data["results"][0]["filename"] == "a.png"
        assert data["results"][0]["result"]["fields"]["name"] == "Jane Smith"
        assert data["results"][1]["result"] is None
        assert "request timed out" in data["results"][1]["error"]

    def test_batch_unsupported_type(self, client: TestClient) -> None:
        response = client.post(
            "/extract/batch",
            files=[("files", ("notes.txt", b"hello", "text/plain"))],
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["failed"] == 1
        assert "Unsupported file type" in data["results"][0]["error"]
