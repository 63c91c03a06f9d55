"""Bank notification formats.

Each bank is a ``BankProfile``: an identifier regex, an ordered tuple of
template variants and an ordered tuple of date patterns. A variant is chosen
by its marker phrase (first match wins) and fixes the transaction direction,
so two templates with similar wording can still map to opposite types.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Optional, Pattern, Iterable

from smsledger.domain.entities import TransactionType

AMOUNT = r"(\d[\d,]*(?:\.\d+)?)"


def _rx(pattern: str) -> Pattern:
    return re.compile(pattern, re.IGNORECASE)


@dataclass(frozen=True)
class FieldPatterns:
    """Per-field extraction regexes; group 1 holds the value."""

    amount: Pattern
    merchant: Optional[Pattern] = None
    account: Optional[Pattern] = None
    account_long: Optional[Pattern] = None
    reference: Optional[Pattern] = None
    approval: Optional[Pattern] = None
    balance: Optional[Pattern] = None


@dataclass(frozen=True)
class DatePattern:
    """Date regex with a date group and an optional time group."""

    regex: Pattern
    date_format: str
    time_format: Optional[str] = None


@dataclass(frozen=True)
class TemplateVariant:
    """One message shape emitted by a bank."""

    name: str
    marker: Pattern
    type: TransactionType
    fields: FieldPatterns
    is_transfer: bool = False
    merchant_label: Optional[str] = None

    def matches(self, text: str) -> bool:
        return self.marker.search(text) is not None


@dataclass(frozen=True)
class BankProfile:
    """Identification rule, template variants and date styles for one bank."""

    name: str
    identifier: Pattern
    variants: tuple[TemplateVariant, ...] = field(default_factory=tuple)
    date_patterns: tuple[DatePattern, ...] = field(default_factory=tuple)

    def matches(self, text: str) -> bool:
        return self.identifier.search(text) is not None

    def select_variant(self, text: str) -> Optional[TemplateVariant]:
        """Return the first variant whose marker phrase occurs in ``text``."""
        for variant in self.variants:
            if variant.matches(text):
                return variant
        return None

    def find_date(self, text: str) -> Optional[tuple[DatePattern, str, Optional[str]]]:
        """Return the first matching date pattern with its date and time tokens."""
        for pattern in self.date_patterns:
            match = pattern.regex.search(text)
            if match:
                time_token = match.group(2) if match.re.groups >= 2 else None
                return pattern, match.group(1), time_token
        return None


class BankFormatRegistry:
    """Ordered collection of bank profiles."""

    def __init__(self, profiles: Iterable[BankProfile] = ()):
        """Initialize registry.

        Args:
            profiles: Profiles in the order they should be tried
        """
        self._profiles: list[BankProfile] = list(profiles)

    @property
    def profiles(self) -> tuple[BankProfile, ...]:
        return tuple(self._profiles)

    def register(self, profile: BankProfile) -> None:
        """Append a profile; it is tried after every existing one.

        Raises:
            ValueError: If a profile with the same name is registered
        """
        if any(p.name == profile.name for p in self._profiles):
            raise ValueError(f"Bank profile '{profile.name}' already registered")
        self._profiles.append(profile)

    def identify(self, text: str) -> Optional[BankProfile]:
        """Return the first profile whose identifier matches ``text``."""
        for profile in self._profiles:
            if profile.matches(text):
                return profile
        return None

    def resolve(
        self, text: str
    ) -> tuple[Optional[BankProfile], Optional[TemplateVariant]]:
        """Identify the bank and select its template variant."""
        profile = self.identify(text)
        if profile is None:
            return None, None
        return profile, profile.select_variant(text)


# BML

_BML_PURCHASE_FIELDS = FieldPatterns(
    amount=_rx(rf"for\s+MVR\s*{AMOUNT}"),
    merchant=_rx(r"\bat\s+([A-Z0-9][A-Z0-9\s&'.,\-/]*?)\s+was\s+processed"),
    account=_rx(r"from\s+(\d{4,5})\b"),
    reference=_rx(r"Reference\s+No:?\s*(\d+)"),
    approval=_rx(r"Approval\s+Code:?\s*(\d+)"),
    balance=_rx(rf"Balance:\s*MVR\s*{AMOUNT}"),
)

_BML_LEGACY_FIELDS = replace(
    _BML_PURCHASE_FIELDS,
    amount=_rx(rf"debited\s+MVR\s*{AMOUNT}"),
    merchant=_rx(r"\bat\s+(.+?)\s+on\s+\d"),
    account=_rx(r"ending\s+(\d{4,5})\b"),
)

BML = BankProfile(
    name="BML",
    identifier=_rx(r"Transaction from|\bBML\b"),
    variants=(
        TemplateVariant(
            name="purchase",
            marker=_rx(r"Transaction from"),
            type=TransactionType.DEBIT,
            fields=_BML_PURCHASE_FIELDS,
        ),
        TemplateVariant(
            name="legacy_debit",
            marker=_rx(r"\bdebited\b"),
            type=TransactionType.DEBIT,
            fields=_BML_LEGACY_FIELDS,
        ),
        TemplateVariant(
            name="legacy_credit",
            marker=_rx(r"\bcredited\b"),
            type=TransactionType.CREDIT,
            fields=replace(
                _BML_LEGACY_FIELDS, amount=_rx(rf"credited\s+MVR\s*{AMOUNT}")
            ),
        ),
    ),
    date_patterns=(
        DatePattern(
            _rx(r"on\s+(\d{2}/\d{2}/\d{4})(?:\s+(?:at\s+)?(\d{2}:\d{2}:\d{2}))?"),
            "%d/%m/%Y",
            "%H:%M:%S",
        ),
        DatePattern(
            _rx(r"on\s+(\d{2}/\d{2}/\d{2})\b(?:\s+at\s+(\d{2}:\d{2}:\d{2}))?"),
            "%d/%m/%y",
            "%H:%M:%S",
        ),
        DatePattern(_rx(r"on\s+(\d{2}-[A-Z]{3}-\d{2})\b"), "%d-%b-%y"),
    ),
)


# MIB

_MIB_CARD_FIELDS = FieldPatterns(
    amount=_rx(rf"for\s+(?:MVR\s*)?{AMOUNT}"),
    merchant=_rx(
        r"\bat\s+([A-Z0-9][A-Z0-9\s&'.,\-/]*?)\s+on\s+\d{2}\.\d{2}\.\d{2}"
    ),
    account=_rx(r"from\s+\*+(\d{4,5})\b"),
    account_long=_rx(r"account\s+(\d+\*+\d+)"),
    reference=_rx(r"Ref\.?\s*no\.?\s*(\d[\d-]*\d)"),
    approval=_rx(r"Approval\s+Code:?\s*(\d+)"),
    balance=_rx(rf"(?:Avl\s+Bal|Balance):\s*MVR\s*{AMOUNT}"),
)

_MIB_TRANSFER_FIELDS = replace(_MIB_CARD_FIELDS, merchant=None)

_MIB_LEGACY_FIELDS = replace(
    _MIB_CARD_FIELDS,
    amount=_rx(rf"Debit\s+of\s+MVR\s*{AMOUNT}"),
    merchant=_rx(r"\bat\s+(.+?)\s+on\s+\d"),
    account=_rx(r"A/C\s+\*+(\d{4,5})\b"),
)

MIB = BankProfile(
    name="MIB",
    identifier=_rx(
        r"\bMIB\b|POS PURCHASE|E-COMMERCE TRX|Favara Transfer|Fund Transfer"
    ),
    variants=(
        TemplateVariant(
            name="pos_purchase",
            marker=_rx(r"POS PURCHASE"),
            type=TransactionType.DEBIT,
            fields=_MIB_CARD_FIELDS,
        ),
        TemplateVariant(
            name="ecommerce",
            marker=_rx(r"E-COMMERCE TRX"),
            type=TransactionType.DEBIT,
            fields=_MIB_CARD_FIELDS,
        ),
        # Outgoing: money leaves the user's account
        TemplateVariant(
            name="favara_transfer",
            marker=_rx(r"Favara Transfer"),
            type=TransactionType.DEBIT,
            fields=_MIB_TRANSFER_FIELDS,
            is_transfer=True,
            merchant_label="Money Transfer",
        ),
        # Incoming, despite the same "from your account" wording
        TemplateVariant(
            name="fund_transfer",
            marker=_rx(r"Fund Transfer"),
            type=TransactionType.CREDIT,
            fields=_MIB_TRANSFER_FIELDS,
            is_transfer=True,
            merchant_label="Fund Transfer",
        ),
        TemplateVariant(
            name="legacy_debit",
            marker=_rx(r"\bDebit\s+of\b"),
            type=TransactionType.DEBIT,
            fields=_MIB_LEGACY_FIELDS,
        ),
        TemplateVariant(
            name="legacy_credit",
            marker=_rx(r"\bCredit\s+of\b"),
            type=TransactionType.CREDIT,
            fields=replace(
                _MIB_LEGACY_FIELDS, amount=_rx(rf"Credit\s+of\s+MVR\s*{AMOUNT}")
            ),
        ),
    ),
    date_patterns=(
        DatePattern(
            _rx(r"on\s+(\d{2}/\d{2}/\d{4})(?:\s+(\d{2}:\d{2}:\d{2}))?"),
            "%d/%m/%Y",
            "%H:%M:%S",
        ),
        DatePattern(
            _rx(r"on\s+(\d{2}\.\d{2}\.\d{2})\b(?:\s+(\d{2}:\d{2}))?"),
            "%d.%m.%y",
            "%H:%M",
        ),
        DatePattern(_rx(r"on\s+(\d{2}/\d{2}/\d{2})\b"), "%d/%m/%y"),
    ),
)


def default_registry() -> BankFormatRegistry:
    """Return a fresh registry with BML tried before MIB."""
    return BankFormatRegistry([BML, MIB])


DEFAULT_REGISTRY = default_registry()
