"""Keyword-based spending categorization for receipts.

Each category in ``CATEGORY_KEYWORDS`` is scored by counting keyword hits
in the merchant name, description and item names. A hit inside the merchant
name counts 3 points instead of 1, since the merchant is the strongest
signal on a receipt. The highest score wins, earlier categories win ties,
and a receipt with no hits at all falls back to "Other".
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
import logging
from typing import Any

from app.constants.categories import CATEGORY_KEYWORDS, FALLBACK_CATEGORY

logger = logging.getLogger(__name__)

MERCHANT_MATCH_SCORE = 3
KEYWORD_MATCH_SCORE = 1


@dataclass
class CategorizationItem:
    """Item name and price as supplied by the client or the OCR parser."""

    name: str
    price: Decimal | float | None = None


@dataclass
class CategorizationInput:
    """Inputs for one categorization call."""

    merchant_name: str
    items: Sequence[Any] | None = None
    description: str | None = None


def _item_name(item: Any) -> str:
    # Accept dataclasses (CategorizationItem, LineItem) and plain request dicts
    if isinstance(item, Mapping):
        return str(item["name"])
    return str(item.name)


def _build_haystack(data: CategorizationInput) -> str:
    parts = [data.merchant_name, data.description or ""]
    parts.extend(_item_name(item) for item in data.items or [])
    return " ".join(parts).lower()


def score_categories(data: CategorizationInput) -> dict[str, int]:
    """Score every category against the receipt text.

    Args:
        data: Merchant name plus optional items and description

    Returns:
        Mapping of category name to score, in table order

    Raises:
        AttributeError, KeyError, TypeError: If the input is malformed
    """
    haystack = _build_haystack(data)
    merchant = data.merchant_name.lower()

    scores: dict[str, int] = {}
    for category, keywords in CATEGORY_KEYWORDS.items():
        score = 0
        for keyword in keywords:
            keyword = keyword.lower()
            if keyword in haystack:
                score += MERCHANT_MATCH_SCORE if keyword in merchant else KEYWORD_MATCH_SCORE
        scores[category] = score
    return scores


def categorize_receipt(data: CategorizationInput) -> str:
    """Pick the best matching category for a receipt.

    Never raises: malformed input is logged and mapped to the fallback
    category.

    Args:
        data: Merchant name plus optional items and description

    Returns:
        Category name, or "Other" when nothing matches
    """
    try:
        scores = score_categories(data)
    except Exception as e:
        logger.error(f"Categorization error: {e}", exc_info=True)
        return FALLBACK_CATEGORY

    best_category = FALLBACK_CATEGORY
    best_score = 0
    for category, score in scores.items():
        # Strictly greater keeps the first-declared category on ties
        if score > best_score:
            best_category, best_score = category, score

    logger.debug(f"Categorized '{data.merchant_name}' as {best_category} (score {best_score})")
    return best_category
