"""Receipt enrichment: merge OCR output with manual input and categorize.

This is the flow a receipt goes through before it is handed to storage.
Fields typed in by the user always take precedence over OCR guesses, an OCR
failure never blocks the submission, and every receipt leaves with a
category.
"""

from dataclasses import asdict
import logging
import os
from typing import Any

from app.constants.categories import FALLBACK_CATEGORY

from .categorization_service import CategorizationInput, categorize_receipt
from .exceptions import OCRProcessingError
from .ocr_service import OCRResult, OCRService

logger = logging.getLogger(__name__)


def _ocr_fields(result: OCRResult) -> dict[str, Any]:
    """Convert an OCR result into storage-ready defaults, skipping missing fields."""
    fields: dict[str, Any] = {
        "merchant_name": result.merchant_name,
        "total_amount": result.total_amount,
        "date": result.date,
    }
    if result.items:
        fields["items"] = [asdict(item) for item in result.items]

    defaults = {key: value for key, value in fields.items() if value is not None}
    defaults["ocr_text"] = result.raw_text
    defaults["ocr_confidence"] = result.confidence
    return defaults


def enrich_receipt(
    manual_fields: dict[str, Any],
    image_path: str | os.PathLike[str] | None = None,
    ocr_service: OCRService | None = None,
) -> dict[str, Any]:
    """Build the receipt record handed to the storage layer.

    Args:
        manual_fields: Fields supplied by the user (``None`` values are ignored)
        image_path: Optional path to an uploaded receipt image
        ocr_service: OCR service to use; one is created from the current app
            config when omitted (requires an application context)

    Returns:
        Dictionary of receipt fields, always including ``category``
    """
    receipt: dict[str, Any] = {}

    if image_path is not None:
        try:
            service = ocr_service or OCRService()
            receipt.update(_ocr_fields(service.process_receipt(image_path)))
        except OCRProcessingError as e:
            # Continue without OCR data
            logger.error(f"OCR processing failed for {image_path}: {e.message}")

    receipt.update({key: value for key, value in manual_fields.items() if value is not None})

    if not receipt.get("category") and receipt.get("merchant_name"):
        receipt["category"] = categorize_receipt(
            CategorizationInput(
                merchant_name=receipt["merchant_name"],
                items=receipt.get("items") or [],
                description=receipt.get("description"),
            )
        )

    if not receipt.get("category"):
        receipt["category"] = FALLBACK_CATEGORY

    return receipt
