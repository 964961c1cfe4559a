"""Spending category constants for receipt categorization.

This module holds the keyword table the categorization service scores
receipts against, plus lookup helpers used by API layers.

The table is built once at import time and exposed read-only. Category
order is significant: when two categories score the same, the one declared
first wins.
"""

from types import MappingProxyType
from typing import List, Mapping, Tuple

# Returned when no keyword matches; intentionally not a key of CATEGORY_KEYWORDS
FALLBACK_CATEGORY = "Other"

_CATEGORY_KEYWORDS: dict[str, Tuple[str, ...]] = {
    "Food & Dining": (
        "restaurant",
        "cafe",
        "coffee",
        "pizza",
        "burger",
        "sushi",
        "food",
        "deli",
        "bakery",
        "bar",
        "pub",
        "grill",
        "bistro",
        "kitchen",
        "dining",
        "eatery",
        "takeout",
        "delivery",
        "mcdonalds",
        "starbucks",
        "subway",
        "kfc",
        "dominos",
        "pizza hut",
        "taco bell",
        "grocery",
        "supermarket",
        "walmart",
        "target",
        "kroger",
        "safeway",
        "whole foods",
    ),
    "Transportation": (
        "gas",
        "fuel",
        "petrol",
        "shell",
        "bp",
        "exxon",
        "chevron",
        "uber",
        "lyft",
        "taxi",
        "bus",
        "train",
        "subway",
        "metro",
        "parking",
        "toll",
        "airline",
        "flight",
        "airport",
    ),
    "Shopping": (
        "amazon",
        "ebay",
        "store",
        "shop",
        "retail",
        "mall",
        "department",
        "clothing",
        "fashion",
        "shoes",
        "electronics",
        "best buy",
        "apple store",
        "nike",
        "adidas",
    ),
    "Entertainment": (
        "movie",
        "cinema",
        "theater",
        "concert",
        "tickets",
        "game",
        "sports",
        "netflix",
        "spotify",
        "music",
        "entertainment",
        "amusement",
        "park",
        "zoo",
        "museum",
    ),
    "Healthcare": (
        "hospital",
        "clinic",
        "doctor",
        "medical",
        "pharmacy",
        "cvs",
        "walgreens",
        "prescription",
        "dental",
        "vision",
        "health",
        "medicine",
        "drug",
        "therapy",
        "treatment",
    ),
    "Travel": (
        "hotel",
        "motel",
        "resort",
        "booking",
        "expedia",
        "airbnb",
        "rental car",
        "hertz",
        "avis",
        "enterprise",
        "travel",
        "vacation",
        "trip",
        "tourism",
    ),
    "Utilities": (
        "electric",
        "electricity",
        "gas",
        "water",
        "internet",
        "phone",
        "cable",
        "utilities",
        "bill",
        "service",
        "att",
        "verizon",
        "comcast",
        "power",
        "energy",
    ),
    "Education": (
        "school",
        "university",
        "college",
        "tuition",
        "books",
        "education",
        "learning",
        "course",
        "class",
        "training",
        "certification",
        "academic",
    ),
    "Business": (
        "office",
        "supplies",
        "business",
        "professional",
        "consulting",
        "services",
        "meeting",
        "conference",
        "equipment",
        "software",
        "subscription",
    ),
    "Personal Care": (
        "salon",
        "spa",
        "beauty",
        "barber",
        "hair",
        "nails",
        "cosmetics",
        "skincare",
        "personal care",
        "hygiene",
        "grooming",
        "wellness",
    ),
    "Home & Garden": (
        "home depot",
        "lowes",
        "furniture",
        "garden",
        "hardware",
        "tools",
        "home improvement",
        "decoration",
        "appliances",
        "ikea",
        "bed bath beyond",
    ),
    "Insurance": (
        "insurance",
        "policy",
        "premium",
        "coverage",
        "claim",
        "deductible",
        "allstate",
        "state farm",
        "geico",
        "progressive",
    ),
    "Investments": (
        "investment",
        "stock",
        "bond",
        "mutual fund",
        "retirement",
        "401k",
        "ira",
        "brokerage",
        "trading",
        "dividend",
    ),
    "Gifts & Donations": (
        "gift",
        "donation",
        "charity",
        "nonprofit",
        "giving",
        "present",
        "contribution",
        "fundraiser",
        "support",
    ),
}

# Read-only view; keyword sequences are tuples so nothing in the table can be mutated
CATEGORY_KEYWORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType(_CATEGORY_KEYWORDS)


def get_all_categories() -> List[str]:
    """Get the names of all scored categories in declaration order.

    Returns:
        List of category names (the fallback category is not included)
    """
    return list(CATEGORY_KEYWORDS)


def get_category_keywords(category: str) -> List[str]:
    """Get the keywords for a category.

    Args:
        category: Exact category name, e.g. "Food & Dining"

    Returns:
        List of keywords, or an empty list if the category is unknown
    """
    return list(CATEGORY_KEYWORDS.get(category, ()))


def is_known_category(name: str) -> bool:
    """Check whether a name is a scored category or the fallback category."""
    return name == FALLBACK_CATEGORY or name in CATEGORY_KEYWORDS
