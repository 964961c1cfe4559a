"""OCR service for extracting data from receipt images using Tesseract OCR (FREE, open-source)."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
import os
from pathlib import Path
from typing import Any

from flask import current_app
from PIL import Image
import pytesseract

from .exceptions import OCRProcessingError
from .image_preprocessor import DEFAULT_MAX_WIDTH, preprocessed_image
from .receipt_parser import LineItem, ParsedReceiptFields, ReceiptParser

TESSERACT_INSTALL_HINT = (
    "Please install Tesseract OCR:\n"
    "  Linux: sudo apt-get install tesseract-ocr\n"
    "  macOS: brew install tesseract\n"
    "  Windows: Download from https://github.com/UB-Mannheim/tesseract/wiki"
)


@dataclass(frozen=True)
class OCRText:
    """Raw engine output for one recognition run."""

    text: str
    confidence: float


@dataclass
class OCRResult:
    """Structured receipt fields together with the raw OCR output."""

    raw_text: str
    confidence: float
    merchant_name: str | None = None
    total_amount: Decimal | None = None
    date: datetime | None = None
    items: list[LineItem] = field(default_factory=list)

    @classmethod
    def from_parsed(cls, ocr_text: OCRText, fields: ParsedReceiptFields) -> "OCRResult":
        return cls(
            raw_text=ocr_text.text,
            confidence=ocr_text.confidence,
            merchant_name=fields.merchant_name,
            total_amount=fields.total_amount,
            date=fields.date,
            items=list(fields.items),
        )


def _mean_confidence(data: dict[str, list[Any]]) -> float:
    """Average Tesseract word confidences (0-100) and rescale to [0, 1].

    Tesseract reports -1 for non-word boxes (blocks, paragraphs, lines);
    those are ignored.
    """
    scores: list[float] = []
    for conf in data.get("conf", []):
        try:
            value = float(conf)
        except (TypeError, ValueError):
            continue
        if value >= 0:
            scores.append(value)

    if not scores:
        return 0.0
    return min(1.0, max(0.0, sum(scores) / len(scores) / 100))


def _text_from_data(data: dict[str, list[Any]]) -> str:
    """Rebuild the transcription from Tesseract word boxes.

    Words are grouped by (block, paragraph, line) in reading order; each
    group becomes one line of text.
    """
    lines: dict[tuple[int, int, int], list[str]] = {}
    for i, word in enumerate(data.get("text", [])):
        word = str(word or "").strip()
        if not word:
            continue
        key = (int(data["block_num"][i]), int(data["par_num"][i]), int(data["line_num"][i]))
        lines.setdefault(key, []).append(word)

    return "\n".join(" ".join(words) for words in lines.values())


class OCRService:
    """Service for extracting text and data from receipt images using Tesseract OCR."""

    def __init__(self) -> None:
        """Initialize OCR service with configuration."""
        self.enabled = current_app.config.get("OCR_ENABLED", True)
        self.language = current_app.config.get("OCR_LANGUAGE", "eng")
        self.tesseract_config = current_app.config.get("OCR_TESSERACT_CONFIG", "--oem 3 --psm 3")
        self.max_image_width = int(current_app.config.get("OCR_MAX_IMAGE_WIDTH", DEFAULT_MAX_WIDTH))
        self.tesseract_cmd = current_app.config.get("TESSERACT_CMD")
        self.parser = ReceiptParser()

        # Set Tesseract command path if provided
        if self.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd

        # Verify Tesseract is available
        if self.enabled:
            try:
                pytesseract.get_tesseract_version()
                current_app.logger.info("Tesseract OCR initialized successfully")
            except pytesseract.TesseractNotFoundError:
                current_app.logger.error(f"Tesseract OCR binary not found. {TESSERACT_INSTALL_HINT}")
                self.enabled = False
            except Exception as e:
                current_app.logger.warning(f"Tesseract OCR not available: {e}")
                self.enabled = False

    def recognize(self, image_path: str | os.PathLike[str]) -> OCRText:
        """Run Tesseract over a whole image.

        Args:
            image_path: Path to the (preprocessed) receipt image

        Returns:
            OCRText with the raw transcription and a confidence in [0, 1]

        Raises:
            OCRProcessingError: If OCR is disabled or the engine fails
        """
        if not self.enabled:
            raise OCRProcessingError(
                f"OCR is disabled. Tesseract OCR binary is not installed. {TESSERACT_INSTALL_HINT}",
                image_path=str(image_path),
            )

        try:
            with Image.open(image_path) as image:
                data = pytesseract.image_to_data(
                    image,
                    lang=self.language,
                    config=self.tesseract_config,
                    output_type=pytesseract.Output.DICT,
                )
            text = _text_from_data(data)
        except Exception as e:
            current_app.logger.error(f"OCR text extraction failed for {image_path}: {e}")
            raise OCRProcessingError("Failed to process receipt with OCR", image_path=str(image_path)) from e

        confidence = _mean_confidence(data)
        current_app.logger.debug(f"Extracted {len(text)} characters using OCR (confidence {confidence:.2f})")
        return OCRText(text=text, confidence=confidence)

    def process_receipt(self, image_path: str | os.PathLike[str]) -> OCRResult:
        """Extract structured data from a receipt image.

        The image is preprocessed into a temporary copy which is removed
        once recognition finishes, whether it succeeded or not.

        Args:
            image_path: Path to the uploaded receipt image

        Returns:
            OCRResult with the parsed fields, raw text and confidence

        Raises:
            OCRProcessingError: If text recognition fails
        """
        source = Path(image_path)
        with preprocessed_image(source, max_width=self.max_image_width) as ocr_input:
            ocr_text = self.recognize(ocr_input)

        current_app.logger.debug("=" * 60)
        current_app.logger.debug("RAW OCR TEXT:")
        current_app.logger.debug(ocr_text.text or "No text extracted from OCR")
        current_app.logger.debug("=" * 60)

        fields = self.parser.parse(ocr_text.text)
        return OCRResult.from_parsed(ocr_text, fields)


def process_receipt_ocr(image_path: str | os.PathLike[str]) -> OCRResult:
    """Run the full OCR pipeline on a receipt image inside an app context."""
    return OCRService().process_receipt(image_path)
