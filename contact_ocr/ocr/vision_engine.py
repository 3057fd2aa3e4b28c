"""Google Cloud Vision OCR engine.

Sends the image to the ``images:annotate`` REST endpoint with
``TEXT_DETECTION`` and reads the full text annotation back.
"""

import base64
import os

import httpx

from contact_ocr.utils.logger import get_logger

from .engine import OCRError, OCRResult

logger = get_logger(__name__)

VISION_ENDPOINT = "https://vision.googleapis.com/v1/images:annotate"
API_KEY_ENV = "GOOGLE_VISION_API_KEY"


class VisionEngine:
    """Cloud OCR through the Google Cloud Vision API.

    Args:
        api_key: Vision API key. Read from ``GOOGLE_VISION_API_KEY`` if omitted.
        endpoint: ``images:annotate`` URL.
        language_hints: Language hints passed to the API.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, used by tests.
    """

    name = "vision"

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str = VISION_ENDPOINT,
        language_hints: list[str] | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or os.environ.get(API_KEY_ENV)
        self.endpoint = endpoint
        self.language_hints = language_hints if language_hints is not None else ["en"]
        self.timeout = timeout
        self._transport = transport

    def _build_request(self, image_bytes: bytes) -> dict:
        return {
            "requests": [
                {
                    "image": {"content": base64.b64encode(image_bytes).decode("ascii")},
                    "features": [{"type": "TEXT_DETECTION", "maxResults": 1}],
                    "imageContext": {"languageHints": self.language_hints},
                }
            ]
        }

    def recognize(self, image_bytes: bytes) -> OCRResult:
        """Recognize text in an encoded image with Cloud Vision.

        Args:
            image_bytes: Image file content.

        Returns:
            Full text annotation and mean page confidence.

        Raises:
            OCRError: On a missing API key, transport error, timeout,
                HTTP error status or an error reported in the response.
        """
        if not self.api_key:
            raise OCRError(f"No Vision API key configured (set {API_KEY_ENV})")

        try:
            with httpx.Client(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = client.post(
                    self.endpoint,
                    params={"key": self.api_key},
                    json=self._build_request(image_bytes),
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise OCRError(
                f"Vision API error {exc.response.status_code}: "
                f"{_error_message(exc.response)}"
            ) from exc
        except httpx.TimeoutException as exc:
            raise OCRError(f"Vision API request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise OCRError(f"Vision API request failed: {exc}") from exc
        except ValueError as exc:
            raise OCRError("Vision API returned invalid JSON") from exc

        try:
            text, confidence = _parse_annotation(data)
        except (AttributeError, KeyError, TypeError, IndexError, ValueError) as exc:
            raise OCRError("Vision API returned an unexpected response") from exc

        logger.info(
            "Vision recognized %d characters with confidence %.2f",
            len(text),
            confidence,
        )
        return OCRResult(text=text, confidence=confidence)


def _parse_annotation(data: dict) -> tuple[str, float]:
    """Read text and mean page confidence from an ``images:annotate`` body.

    Raises:
        OCRError: If the first response carries an ``error`` object.
    """
    responses = data.get("responses") or [{}]
    first = responses[0]
    if "error" in first:
        error = first["error"]
        message = error.get("message") if isinstance(error, dict) else error
        raise OCRError(f"Vision API error: {message or 'unknown error'}")

    annotation = first.get("fullTextAnnotation") or {}
    text = annotation.get("text") or ""
    if not isinstance(text, str):
        raise TypeError(f"text is {type(text).__name__}, not str")
    pages = [
        float(p["confidence"])
        for p in annotation.get("pages") or []
        if "confidence" in p
    ]
    confidence = sum(pages) / len(pages) if pages else 0.0
    return text, confidence


def _error_message(response: httpx.Response) -> str:
    """Pull ``error.message`` out of an API error body, else the raw text."""
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.text or "Google Vision API error"
