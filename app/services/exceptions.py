"""Custom exceptions for receipt processing."""


class ReceiptProcessingError(Exception):
    """Base exception for receipt processing errors."""

    kind = "ReceiptProcessingFailed"

    def __init__(self, message: str, image_path: str | None = None):
        self.message = message
        self.image_path = image_path
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for API responses."""
        return {
            "code": self.kind,
            "message": self.message,
        }


class PreprocessingError(ReceiptProcessingError):
    """Raised when an image cannot be conditioned for OCR.

    Recoverable: callers fall back to the unmodified source image.
    """

    kind = "PreprocessingFailed"


class OCRProcessingError(ReceiptProcessingError):
    """Raised when the OCR engine cannot recognize a receipt image."""

    kind = "OcrProcessingFailed"
