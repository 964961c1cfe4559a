"""Receipt processing services: preprocessing, OCR, parsing and categorization."""

from __future__ import annotations

from .categorization_service import (
    CategorizationInput,
    CategorizationItem,
    categorize_receipt,
    score_categories,
)
from .exceptions import OCRProcessingError, PreprocessingError, ReceiptProcessingError
from .image_preprocessor import preprocess_image, preprocessed_image
from .ocr_service import OCRResult, OCRService, OCRText, process_receipt_ocr
from .receipt_parser import LineItem, ParsedReceiptFields, ReceiptParser, parse_receipt_text
from .receipt_pipeline import enrich_receipt

__all__ = [
    "CategorizationInput",
    "CategorizationItem",
    "LineItem",
    "OCRProcessingError",
    "OCRResult",
    "OCRService",
    "OCRText",
    "ParsedReceiptFields",
    "PreprocessingError",
    "ReceiptParser",
    "ReceiptProcessingError",
    "categorize_receipt",
    "enrich_receipt",
    "parse_receipt_text",
    "preprocess_image",
    "preprocessed_image",
    "process_receipt_ocr",
    "score_categories",
]
