"""Pytest configuration and fixtures for the test suite."""

import os
from pathlib import Path
import sys
from typing import Any, Callable, Generator
from unittest.mock import patch

import pytest
from flask import Flask
from PIL import Image

# Add the project root to the Python path first to avoid import issues
project_root = str(Path(__file__).parent.parent)
sys.path.insert(0, project_root)

# Set test environment variables
os.environ.update(
    {
        "FLASK_ENV": "testing",
        "FLASK_APP": "app",
        "TESTING": "True",
    }
)

from app import create_app  # noqa: E402


@pytest.fixture(scope="function")
def app() -> Generator[Flask, None, None]:
    """Create and configure a new app instance for testing."""
    app = create_app("testing")
    app.config.update(TESTING=True, OCR_ENABLED=True, TESSERACT_CMD=None)

    # Push application context
    ctx = app.app_context()
    ctx.push()

    yield app

    # Pop the application context
    ctx.pop()


def build_tesseract_data(text: str, confidence: float = 90) -> dict[str, list[Any]]:
    """Build an ``image_to_data(..., output_type=Output.DICT)`` payload for ``text``.

    Each input line becomes one Tesseract line of word boxes, preceded by
    the page-level box Tesseract always reports with confidence -1.
    """
    data: dict[str, list[Any]] = {
        key: [] for key in ("level", "page_num", "block_num", "par_num", "line_num", "word_num", "conf", "text")
    }

    def add(level: int, line_num: int, word_num: int, conf: float, word: str) -> None:
        for key, value in (
            ("level", level),
            ("page_num", 1),
            ("block_num", 1 if line_num else 0),
            ("par_num", 1 if line_num else 0),
            ("line_num", line_num),
            ("word_num", word_num),
            ("conf", conf),
            ("text", word),
        ):
            data[key].append(value)

    add(1, 0, 0, -1, "")
    for line_num, line in enumerate(text.splitlines(), start=1):
        for word_num, word in enumerate(line.split(), start=1):
            add(5, line_num, word_num, confidence, word)
    return data


@pytest.fixture
def tesseract_data() -> Callable[..., dict[str, list[Any]]]:
    """Return the builder for fake Tesseract word-box payloads."""
    return build_tesseract_data


@pytest.fixture
def tesseract() -> Generator[dict, None, None]:
    """Patch pytesseract so no Tesseract binary is needed.

    Yields a dict of the mocks keyed by function name; tests set
    ``return_value`` / ``side_effect`` on them as needed.
    """
    with (
        patch("app.services.ocr_service.pytesseract.get_tesseract_version", return_value="5.3.0") as version,
        patch(
            "app.services.ocr_service.pytesseract.image_to_data", return_value=build_tesseract_data("")
        ) as to_data,
    ):
        yield {
            "get_tesseract_version": version,
            "image_to_data": to_data,
        }


@pytest.fixture
def receipt_image(tmp_path: Path) -> Path:
    """Write a small RGB PNG receipt image to a temporary directory."""
    path = tmp_path / "receipt.png"
    image = Image.new("RGB", (400, 600), color=(240, 235, 220))
    for x in range(50, 350):
        image.putpixel((x, 100), (20, 20, 20))
    image.save(path)
    return path
