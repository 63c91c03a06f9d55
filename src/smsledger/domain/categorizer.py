"""Merchant keyword categorization."""

from typing import Iterable, Sequence

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_CATEGORY = "Other"

# Ordered (keyword, category) pairs; the first keyword found in the
# uppercased merchant text wins. Bank names sit after the utilities and
# before the restaurants, so "BML" only tags bank fees when no earlier
# keyword matched.
MERCHANT_CATEGORIES: list[tuple[str, str]] = [
    # Groceries
    ("FOODCO", "Groceries"),
    ("AGORA", "Groceries"),
    # Fuel
    ("STO", "Fuel"),
    ("SHELL", "Fuel"),
    # Telecommunications
    ("DHIRAAGU", "Telecommunications"),
    ("OOREDOO", "Telecommunications"),
    # Housing & Utilities
    ("STELCO", "Housing & Utilities"),
    ("MWSC", "Housing & Utilities"),
    ("FENAKA", "Housing & Utilities"),
    # Bank Fees
    ("STATE BANK", "Bank Fees"),
    ("BML", "Bank Fees"),
    ("MIB", "Bank Fees"),
    # Food & Dining
    ("SALSA", "Food & Dining"),
    ("SEAGULL", "Food & Dining"),
    ("THAI WOK", "Food & Dining"),
    ("PIZZA", "Food & Dining"),
    ("CAFE", "Food & Dining"),
    ("RESTAURANT", "Food & Dining"),
    ("HOTEL", "Food & Dining"),
    # Healthcare
    ("PHARMACY", "Healthcare"),
    ("HOSPITAL", "Healthcare"),
    ("CLINIC", "Healthcare"),
    ("ADK", "Healthcare"),
    ("IGMH", "Healthcare"),
    # Entertainment
    ("CINEMA", "Entertainment"),
    ("MOVIE", "Entertainment"),
    ("GYM", "Entertainment"),
    # Shopping
    ("MAJEEDEE", "Shopping"),
    ("CHAANDANEE", "Shopping"),
    # Income and transfers
    ("SALARY", "Income/Salary"),
    ("TRANSFER", "Transfer"),
]


class Categorizer:
    """First-match keyword lookup over an ordered table."""

    def __init__(
        self,
        rules: Iterable[tuple[str, str]] = MERCHANT_CATEGORIES,
        default: str = DEFAULT_CATEGORY,
    ):
        """Initialize categorizer.

        Args:
            rules: Ordered (keyword, category) pairs
            default: Category returned when nothing matches
        """
        self._rules: tuple[tuple[str, str], ...] = tuple(
            (keyword.upper(), category) for keyword, category in rules
        )
        self.default = default

    @property
    def rules(self) -> Sequence[tuple[str, str]]:
        return self._rules

    def categorize(self, merchant: str | None) -> str:
        """Return the category for a merchant name.

        Args:
            merchant: Merchant text as extracted from the message

        Returns:
            Category of the first matching keyword, or the default
        """
        if not merchant:
            return self.default

        merchant_upper = merchant.strip().upper()
        for keyword, category in self._rules:
            if keyword in merchant_upper:
                logger.debug("merchant_categorized", merchant=merchant_upper, keyword=keyword, category=category)
                return category
        return self.default


_default_categorizer = Categorizer()


def categorize(merchant: str | None) -> str:
    """Categorize with the built-in keyword table."""
    return _default_categorizer.categorize(merchant)
