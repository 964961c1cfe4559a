"""Receipt parser for extracting structured fields from OCR text.

The parser scans raw Tesseract output with a fixed sequence of independent
extractions (merchant, total, date, line items). Each extraction either
returns a value or ``None``; a miss in one never affects the others. It has
no dependencies on Flask, so it can be used outside an application context.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
import logging
import re

logger = logging.getLogger(__name__)

# Merchant name candidates are only looked for near the top of the receipt
MERCHANT_SCAN_LINES = 3
MERCHANT_MIN_LENGTH = 4
MERCHANT_EXCLUDED_WORDS = ("receipt", "tax")

TOTAL_PATTERN = re.compile(r"(?:total|amount|sum)[:\s]*\$?(\d+\.?\d*)", re.IGNORECASE)
DOLLAR_AMOUNT_PATTERN = re.compile(r"\$(\d+\.?\d*)")
DATE_PATTERN = re.compile(r"(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{2,4})")
LINE_ITEM_PATTERN = re.compile(r"^(.+?)\s+(\d*\.?\d*)\s*\$?(\d+\.?\d*)$")
DIGIT_PATTERN = re.compile(r"\d")

# Two-digit years below this value are read as 20xx, the rest as 19xx
TWO_DIGIT_YEAR_PIVOT = 50


@dataclass(kw_only=True)
class LineItem:
    """A single purchased item read from a receipt line."""

    name: str
    quantity: Decimal = Decimal("1")
    price: Decimal


@dataclass
class ParsedReceiptFields:
    """Structured fields extracted from receipt text.

    ``None`` means the field was not found, as opposed to an extracted
    empty value.
    """

    merchant_name: str | None = None
    total_amount: Decimal | None = None
    date: datetime | None = None
    items: list[LineItem] = field(default_factory=list)


def _to_decimal(value: str) -> Decimal | None:
    """Parse a numeric token, returning None when it is not a finite number."""
    try:
        number = Decimal(value)
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


class ReceiptParser:
    """Heuristic parser for noisy receipt text."""

    def parse(self, raw_text: str) -> ParsedReceiptFields:
        """Parse receipt fields from OCR text.

        Args:
            raw_text: Raw text extracted by the OCR engine, line breaks preserved

        Returns:
            ParsedReceiptFields with every field that could be found
        """
        lines = self._normalize_lines(raw_text)
        logger.debug(f"Parsing receipt text: {len(lines)} non-empty lines")

        fields = ParsedReceiptFields(
            merchant_name=self._extract_merchant_name(lines),
            total_amount=self._extract_total(raw_text),
            date=self._extract_date(raw_text),
            items=self._extract_items(lines),
        )

        logger.debug(
            f"Parsed receipt: merchant={fields.merchant_name!r} total={fields.total_amount} "
            f"date={fields.date} items={len(fields.items)}"
        )
        return fields

    def _normalize_lines(self, raw_text: str) -> list[str]:
        return [line.strip() for line in raw_text.splitlines() if line.strip()]

    def _extract_merchant_name(self, lines: list[str]) -> str | None:
        """Pick the first plausible store name from the top of the receipt.

        A candidate has no digits, does not mention one of the excluded
        words and is longer than three characters.
        """
        for line in lines[:MERCHANT_SCAN_LINES]:
            lowered = line.lower()
            if DIGIT_PATTERN.search(line):
                continue
            if any(word in lowered for word in MERCHANT_EXCLUDED_WORDS):
                continue
            if len(line) < MERCHANT_MIN_LENGTH:
                continue
            return line
        return None

    def _extract_total(self, text: str) -> Decimal | None:
        """Extract the receipt total.

        A labelled amount (total/amount/sum) wins; otherwise the largest
        dollar figure on the receipt is assumed to be the grand total.
        """
        match = TOTAL_PATTERN.search(text)
        if match:
            total = _to_decimal(match.group(1))
            if total is not None:
                return total

        amounts = [
            amount
            for amount in (_to_decimal(m.group(1)) for m in DOLLAR_AMOUNT_PATTERN.finditer(text))
            if amount is not None
        ]
        if amounts:
            return max(amounts)
        return None

    def _extract_date(self, text: str) -> datetime | None:
        """Extract the first month/day/year date in the text.

        Only the first match is considered. An impossible calendar date such
        as 02/30/2023 yields None rather than a corrected date.
        """
        match = DATE_PATTERN.search(text)
        if not match:
            return None

        month_str, day_str, year_str = match.groups()
        year = int(year_str)
        if len(year_str) == 2:
            year += 2000 if year < TWO_DIGIT_YEAR_PIVOT else 1900

        try:
            return datetime(year, int(month_str), int(day_str))
        except ValueError:
            logger.debug(f"Ignoring invalid date '{match.group(0)}'")
            return None

    def _extract_items(self, lines: list[str]) -> list[LineItem]:
        """Extract line items of the form ``<name> [quantity] [$]<price>``.

        Lines that do not fit the pattern, or whose price is not strictly
        positive, are skipped.
        """
        items: list[LineItem] = []

        for line in lines:
            match = LINE_ITEM_PATTERN.match(line)
            if not match:
                continue

            name = match.group(1).strip()
            quantity_str = match.group(2)
            price = _to_decimal(match.group(3))
            if not name or price is None or price <= 0:
                continue

            quantity = _to_decimal(quantity_str) if quantity_str else None
            items.append(LineItem(name=name, price=price, quantity=quantity if quantity is not None else Decimal("1")))

        return items


def parse_receipt_text(raw_text: str) -> ParsedReceiptFields:
    """Parse receipt fields from OCR text with a default parser."""
    return ReceiptParser().parse(raw_text)
