"""Configuration management for the contact OCR system.

Loads and validates YAML configuration with sensible defaults for the OCR
engines and the extraction policy.
"""

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class OCRConfig(BaseModel):
    """Configuration for the OCR engines."""

    engine: Literal["tesseract", "vision"] = "tesseract"
    tesseract_cmd: str | None = None
    default_lang: str = "eng"
    psm: int = 3
    vision_api_key: str | None = None
    vision_endpoint: str = "https://vision.googleapis.com/v1/images:annotate"
    language_hints: list[str] = Field(default_factory=lambda: ["en"])
    timeout_s: float = 30.0


class ExtractionConfig(BaseModel):
    """Caller policy for extraction results."""

    warn_on_empty: bool = True


class ServerConfig(BaseModel):
    """Bind address for the API server."""

    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel):
    """Top-level application configuration."""

    ocr: OCRConfig = Field(default_factory=OCRConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: str = "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
