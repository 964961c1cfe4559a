"""Constants package for the receipt tracker."""

from .categories import (
    CATEGORY_KEYWORDS,
    FALLBACK_CATEGORY,
    get_all_categories,
    get_category_keywords,
    is_known_category,
)

__all__ = [
    "CATEGORY_KEYWORDS",
    "FALLBACK_CATEGORY",
    "get_all_categories",
    "get_category_keywords",
    "is_known_category",
]
