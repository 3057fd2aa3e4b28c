"""Shared test fixtures for the contact OCR test suite."""

import io
from pathlib import Path

import pytest
from PIL import Image

from contact_ocr.ocr.engine import OCRResult

BUSINESS_CARD_TEXT = (
    "Jane Smith\n"
    "Acme Corporation\n"
    "123 Main Street\n"
    "Springfield, IL 62704\n"
    "(555) 123-4567\n"
    "jane@acme.com\n"
)


class FakeEngine:
    """OCR engine returning queued results or raising queued errors."""

    name = "fake"

    def __init__(self, outcomes: list[OCRResult | Exception]) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[bytes] = []

    def recognize(self, image_bytes: bytes) -> OCRResult:
        self.calls.append(image_bytes)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def business_card_text() -> str:
    """OCR text of a typical business card."""
    return BUSINESS_CARD_TEXT


@pytest.fixture
def png_bytes() -> bytes:
    """Create a minimal white PNG image as bytes."""
    img = Image.new("RGB", (200, 100), color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the configs directory path."""
    return project_root / "configs"


@pytest.fixture
def make_engine() -> type[FakeEngine]:
    """Return the fake OCR engine class for building engines in tests."""
    return FakeEngine
