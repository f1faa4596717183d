"""Category resolver - raw category strings to display names and colors"""

import re
from dataclasses import dataclass
from typing import Dict, Tuple

OTHER_CATEGORY = "Other"
NEUTRAL_COLOR = "#9ca3af"

# Fallback palette for categories missing from the table below
FALLBACK_PALETTE: Tuple[str, ...] = (
    "#10b981",
    "#3b82f6",
    "#f59e0b",
    "#ec4899",
    "#8b5cf6",
    "#06b6d4",
    "#f97316",
    "#14b8a6",
    "#6366f1",
    "#84cc16",
)


@dataclass(frozen=True)
class ResolvedCategory:
    display_name: str
    color: str


# Keyed by normalized form (upper snake case)
CATEGORY_TABLE: Dict[str, ResolvedCategory] = {
    "GROCERIES": ResolvedCategory("Groceries", "#4dcbac"),
    "SHOPPING": ResolvedCategory("Shopping", "#ce7eb3"),
    "COFFEE": ResolvedCategory("Coffee", "#d18c47"),
    "TRANSPORT": ResolvedCategory("Transport", "#40b5bf"),
    "DINING": ResolvedCategory("Dining", "#d17461"),
    "GAS": ResolvedCategory("Gas", "#5ea6c9"),
    "HEALTH": ResolvedCategory("Health", "#40bfb5"),
    "TECH": ResolvedCategory("Tech", "#9779d2"),
    "ENTERTAINMENT": ResolvedCategory("Entertainment", "#d27997"),
    "UTILITIES": ResolvedCategory("Utilities", "#53b3c6"),
    # Plaid personal finance primary categories
    "FOOD_AND_DRINK": ResolvedCategory("Dining", "#d17461"),
    "GENERAL_MERCHANDISE": ResolvedCategory("Shopping", "#ce7eb3"),
    "TRANSPORTATION": ResolvedCategory("Transport", "#40b5bf"),
    "RENT_AND_UTILITIES": ResolvedCategory("Utilities", "#53b3c6"),
    "MEDICAL": ResolvedCategory("Health", "#40bfb5"),
    "TRAVEL": ResolvedCategory("Travel", "#3b82f6"),
    "PERSONAL_CARE": ResolvedCategory("Personal Care", "#ec4899"),
    "GENERAL_SERVICES": ResolvedCategory("Services", "#6366f1"),
    "HOME_IMPROVEMENT": ResolvedCategory("Home", "#f59e0b"),
    "LOAN_PAYMENTS": ResolvedCategory("Loan Payments", "#8b5cf6"),
    "BANK_FEES": ResolvedCategory("Fees", "#ef4444"),
    "TRANSFER_IN": ResolvedCategory("Transfers", "#6b7280"),
    "TRANSFER_OUT": ResolvedCategory("Transfers", "#6b7280"),
    "INCOME": ResolvedCategory("Income", "#10b981"),
    "OTHER": ResolvedCategory(OTHER_CATEGORY, NEUTRAL_COLOR),
}

_SEPARATORS = re.compile(r"[_\s]+")


def _words(raw: str) -> list[str]:
    return [w for w in _SEPARATORS.split(raw.strip()) if w]


def normalize_key(raw: str | None) -> str:
    """'food and drink', 'Food_And_Drink' and 'FOOD_AND_DRINK' share one key"""
    if not raw:
        return ""
    return "_".join(w.upper() for w in _words(raw))


def stable_hash(value: str) -> int:
    """31-multiplier string hash truncated to 32 bits; stable across processes"""
    h = 0
    for ch in value:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    return h


def color_for(key: str) -> str:
    return FALLBACK_PALETTE[stable_hash(key) % len(FALLBACK_PALETTE)]


def title_case(raw: str) -> str:
    return " ".join(w.capitalize() for w in _words(raw))


def resolve(raw_category: str | None) -> ResolvedCategory:
    """
    Map a raw category to its display name and color.

    Known categories come from CATEGORY_TABLE. Unknown ones are title-cased
    and colored from FALLBACK_PALETTE by a stable hash of the normalized key,
    so the same category gets the same color everywhere. Empty input resolves
    to "Other" with a neutral color.
    """
    key = normalize_key(raw_category)
    if not key:
        return ResolvedCategory(OTHER_CATEGORY, NEUTRAL_COLOR)

    known = CATEGORY_TABLE.get(key)
    if known is not None:
        return known

    return ResolvedCategory(title_case(raw_category), color_for(key))
