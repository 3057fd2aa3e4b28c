"""Entry point for the contact OCR API server."""

import uvicorn

from contact_ocr.api.app import app
from contact_ocr.utils.config import load_config
from contact_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    """Serve the API on the host and port from ``configs/config.yaml``."""
    config = load_config()
    setup_logging(config.log_level)
    logger.info(
        "Starting contact OCR API on %s:%d (OCR engine: %s)",
        config.server.host,
        config.server.port,
        config.ocr.engine,
    )
    uvicorn.run(app, host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
