import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_config

# Load environment variables from .env file
load_dotenv()

# Initialize logger
logger = logging.getLogger(__name__)

__all__ = ["create_app"]


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application.

    The application hosts configuration and logging for the receipt
    services; OCR services read their settings from ``current_app.config``.

    Args:
        config_name: Environment name ("development", "testing", "production").
                    Falls back to the FLASK_ENV environment variable.
    Returns:
        Flask: The configured Flask application instance.
    """
    config = get_config(config_name)

    app = Flask(__name__)
    app.config.from_object(config)

    _configure_logging(app)
    _validate_ocr_settings(app)

    return app


def _configure_logging(app: Flask) -> None:
    """Configure application logging."""
    level_name = app.config.get("LOG_LEVEL")
    if level_name:
        log_level = logging.getLevelName(str(level_name).upper())
        if not isinstance(log_level, int):
            raise ValueError(f"Invalid LOG_LEVEL: {level_name}")
    else:
        log_level = logging.DEBUG if app.debug else logging.INFO

    logger.setLevel(log_level)
    app.logger.setLevel(log_level)

    logger.debug("Application configuration:")
    logger.debug(f"- ENVIRONMENT: {app.config.get('ENVIRONMENT', 'Not set')}")
    logger.debug(f"- DEBUG: {app.debug}")
    logger.debug(f"- OCR_ENABLED: {app.config.get('OCR_ENABLED')}")
    logger.debug(f"- OCR_LANGUAGE: {app.config.get('OCR_LANGUAGE')}")


def _validate_ocr_settings(app: Flask) -> None:
    """Reject OCR settings the services cannot work with."""
    max_width = app.config.get("OCR_MAX_IMAGE_WIDTH")
    if not isinstance(max_width, int) or max_width <= 0:
        raise ValueError(f"OCR_MAX_IMAGE_WIDTH must be a positive integer, got {max_width!r}")

    if not app.config.get("OCR_LANGUAGE"):
        raise ValueError("OCR_LANGUAGE must not be empty")
