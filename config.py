"""Application configuration.

This module provides environment-specific configuration settings for the application.
"""

import os
from typing import Optional


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Config:
    """Base configuration with settings common to all environments."""

    # Flask settings
    DEBUG: bool = _env_flag("DEBUG", "false")
    TESTING: bool = False

    # Application settings
    APP_NAME: str = os.getenv("APP_NAME", "receipt-tracker")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "dev")

    # OCR settings
    OCR_ENABLED: bool = _env_flag("OCR_ENABLED", "true")
    TESSERACT_CMD: Optional[str] = os.getenv("TESSERACT_CMD")
    OCR_LANGUAGE: str = os.getenv("OCR_LANGUAGE", "eng")
    # PSM 3 = fully automatic page segmentation over the whole document
    OCR_TESSERACT_CONFIG: str = os.getenv("OCR_TESSERACT_CONFIG", "--oem 3 --psm 3")
    OCR_MAX_IMAGE_WIDTH: int = int(os.getenv("OCR_MAX_IMAGE_WIDTH", "2000"))

    # Logging
    LOG_LEVEL: Optional[str] = os.getenv("LOG_LEVEL")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG: bool = True


class UnitTestConfig(Config):  # noqa: D101
    """Testing configuration."""

    TESTING: bool = True
    DEBUG: bool = True
    OCR_ENABLED: bool = True
    TESSERACT_CMD: Optional[str] = None


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG: bool = False
    TESTING: bool = False


def get_config(env: Optional[str] = None) -> Config:
    """Get the appropriate configuration based on environment.

    Args:
        env: Environment name; defaults to the FLASK_ENV environment variable
    """
    env = (env or os.getenv("FLASK_ENV", "development")).lower()

    configs = {
        "development": DevelopmentConfig,
        "testing": UnitTestConfig,
        "production": ProductionConfig,
    }

    config_class = configs.get(env, DevelopmentConfig)
    return config_class()
