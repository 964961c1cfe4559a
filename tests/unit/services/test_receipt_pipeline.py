"""Tests for receipt enrichment (OCR merge + auto-categorization)."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from unittest.mock import Mock

import pytest

from app.services.exceptions import OCRProcessingError
from app.services.image_preprocessor import processed_path_for
from app.services.ocr_service import OCRResult
from app.services.receipt_parser import LineItem
from app.services.receipt_pipeline import enrich_receipt


def _ocr_service(result: OCRResult | None = None, error: Exception | None = None) -> Mock:
    service = Mock()
    if error is not None:
        service.process_receipt.side_effect = error
    else:
        service.process_receipt.return_value = result
    return service


OCR_RESULT = OCRResult(
    raw_text="Shell\nFuel $40.00\nTotal $40.00",
    confidence=0.87,
    merchant_name="Shell",
    total_amount=Decimal("40.00"),
    date=datetime(2024, 5, 1),
    items=[LineItem(name="Fuel", price=Decimal("40.00"))],
)


class TestEnrichReceipt:
    """Merging OCR output with manual input."""

    def test_manual_only(self) -> None:
        """Test that manual input alone is categorized."""
        receipt = enrich_receipt({"merchant_name": "Starbucks Coffee", "total_amount": Decimal("5.10")})
        assert receipt == {
            "merchant_name": "Starbucks Coffee",
            "total_amount": Decimal("5.10"),
            "category": "Food & Dining",
        }

    def test_ocr_fields_fill_gaps(self, tmp_path: Path) -> None:
        """Test that OCR fields fill in what the user left out."""
        receipt = enrich_receipt({}, image_path=tmp_path / "r.png", ocr_service=_ocr_service(OCR_RESULT))

        assert receipt["merchant_name"] == "Shell"
        assert receipt["total_amount"] == Decimal("40.00")
        assert receipt["date"] == datetime(2024, 5, 1)
        assert receipt["items"] == [{"name": "Fuel", "price": Decimal("40.00"), "quantity": Decimal("1")}]
        assert receipt["ocr_text"] == OCR_RESULT.raw_text
        assert receipt["ocr_confidence"] == 0.87
        assert receipt["category"] == "Transportation"

    def test_manual_input_takes_precedence(self, tmp_path: Path) -> None:
        """Test that user-entered values win over OCR values."""
        receipt = enrich_receipt(
            {"merchant_name": "Shell Gas #12", "total_amount": Decimal("38.50"), "date": None},
            image_path=tmp_path / "r.png",
            ocr_service=_ocr_service(OCR_RESULT),
        )
        assert receipt["merchant_name"] == "Shell Gas #12"
        assert receipt["total_amount"] == Decimal("38.50")
        # None values in manual input do not erase OCR data
        assert receipt["date"] == datetime(2024, 5, 1)

    def test_explicit_category_is_kept(self) -> None:
        """Test that a category chosen by the user is not overwritten."""
        receipt = enrich_receipt({"merchant_name": "Starbucks", "category": "Business"})
        assert receipt["category"] == "Business"

    def test_missing_ocr_fields_are_not_stored(self, tmp_path: Path) -> None:
        """Test that fields OCR could not read are left out."""
        result = OCRResult(raw_text="???", confidence=0.1)
        receipt = enrich_receipt({}, image_path=tmp_path / "r.png", ocr_service=_ocr_service(result))

        assert "merchant_name" not in receipt
        assert "total_amount" not in receipt
        assert "items" not in receipt
        assert receipt["category"] == "Other"

    def test_ocr_failure_does_not_block_submission(self, tmp_path: Path) -> None:
        """Test that an OCR failure still returns the manual record."""
        service = _ocr_service(error=OCRProcessingError("Failed to process receipt with OCR"))

        receipt = enrich_receipt({"description": "lunch"}, image_path=tmp_path / "r.png", ocr_service=service)

        assert receipt == {"description": "lunch", "category": "Other"}

    def test_items_and_description_feed_categorization(self) -> None:
        """Test that items and description are used for categorization."""
        receipt = enrich_receipt(
            {
                "merchant_name": "Acme Corp",
                "description": "team offsite",
                "items": [{"name": "Concert tickets", "price": 80}],
            }
        )
        assert receipt["category"] == "Entertainment"

    def test_uses_app_ocr_service_by_default(self, app, tesseract, tesseract_data, receipt_image: Path) -> None:
        """Test that the app's OCR service runs when none is passed in."""
        tesseract["image_to_data"].return_value = tesseract_data("Walgreens\nTotal: $12.34", confidence=88)

        receipt = enrich_receipt({}, image_path=receipt_image)

        assert receipt["merchant_name"] == "Walgreens"
        assert receipt["total_amount"] == Decimal("12.34")
        assert receipt["category"] == "Healthcare"
        assert receipt["ocr_confidence"] == pytest.approx(0.88)

    def test_leftover_output_path_does_not_block_ocr(self, app, tesseract, tesseract_data, receipt_image: Path) -> None:
        """Test that a directory at the processed path still lets OCR run on the upload."""
        processed_path_for(receipt_image).mkdir()
        tesseract["image_to_data"].return_value = tesseract_data("Walgreens\nTotal: $12.34")

        receipt = enrich_receipt({}, image_path=receipt_image)

        assert receipt["merchant_name"] == "Walgreens"
        assert processed_path_for(receipt_image).is_dir()
