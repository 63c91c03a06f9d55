"""Bank SMS transaction parser."""

import re
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Pattern

import structlog

from smsledger.config import Settings
from smsledger.domain import errors
from smsledger.domain.bank_formats import (
    DEFAULT_REGISTRY,
    BankFormatRegistry,
    BankProfile,
    TemplateVariant,
)
from smsledger.domain.categorizer import Categorizer
from smsledger.domain.entities import ParsedTransaction
from smsledger.utils.amount_parser import parse_amount
from smsledger.utils.date_parser import parse_message_datetime

logger = structlog.get_logger(__name__)

# Trailing ", MV" style country/region code after the merchant name
_REGION_SUFFIX = re.compile(r",\s*[A-Z]{2}\s*$")
_TRAILING_DIGITS = re.compile(r"(\d+)\s*$")


class TransactionParser:
    """Turns one bank notification into a ParsedTransaction."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        registry: Optional[BankFormatRegistry] = None,
        categorizer: Optional[Categorizer] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize parser.

        Args:
            settings: Currency, timezone and category labels
            registry: Bank profiles to try (defaults to BML and MIB)
            categorizer: Merchant categorizer
            clock: Returns "now"; used when a message carries no date
        """
        self.settings = settings or Settings()
        self.registry = registry or DEFAULT_REGISTRY
        self.categorizer = categorizer or Categorizer(
            default=self.settings.default_category
        )
        self._zone = self.settings.tzinfo
        self._clock = clock or (lambda: datetime.now(self._zone))

    def parse(self, text: str) -> ParsedTransaction:
        """Parse a bank SMS.

        Args:
            text: Raw notification text

        Returns:
            ParsedTransaction

        Raises:
            InvalidInputError: If text is empty or not a string
            UnrecognizedBankFormat: If no bank profile matches
            AmountExtractionFailure: If no amount can be extracted
        """
        if not isinstance(text, str) or not text.strip():
            raise errors.InvalidInputError(errors.invalid_sms_text())

        bank, variant = self.registry.resolve(text)
        if bank is None:
            raise errors.UnrecognizedBankFormat(errors.unrecognized_bank())
        if variant is None:
            raise errors.AmountExtractionFailure(errors.amount_not_found(bank.name, None))

        logger.debug("sms_identified", bank=bank.name, variant=variant.name)

        amount = self._extract_amount(text, bank, variant)
        merchant = self._extract_merchant(text, variant)
        date, time_token = self._extract_date(text, bank)
        fragment, raw_account = self._extract_account(text, variant)
        reference = _search(variant.fields.reference, text)
        approval = _search(variant.fields.approval, text)
        balance = self._extract_balance(text, variant)

        if variant.is_transfer:
            category = self.settings.transfer_category
        else:
            category = self.categorizer.categorize(merchant)

        description = f"Transaction at {merchant or 'Unknown'}"
        if reference:
            description += f" (Ref: {reference})"

        return ParsedTransaction(
            date=date,
            type=variant.type,
            amount=amount,
            currency=self.settings.base_currency,
            category=category,
            merchant=merchant,
            bank_name=bank.name,
            account_number_fragment=fragment,
            account_number_raw=raw_account,
            reference_number=reference,
            approval_code=approval,
            balance=balance,
            description=description,
            raw_source_text=text,
            time=time_token,
            variant=variant.name,
        )

    def looks_like_bank_sms(self, text: str) -> bool:
        """Cheap check used before parsing clipboard text.

        True when a bank and template are recognized and the template's
        amount pattern matches.
        """
        if not isinstance(text, str) or not text.strip():
            return False
        _, variant = self.registry.resolve(text)
        return variant is not None and variant.fields.amount.search(text) is not None

    def _extract_amount(
        self, text: str, bank: BankProfile, variant: TemplateVariant
    ) -> Decimal:
        raw_amount = _search(variant.fields.amount, text)
        if raw_amount is None:
            raise errors.AmountExtractionFailure(
                errors.amount_not_found(bank.name, variant.name)
            )
        try:
            amount = parse_amount(raw_amount)
        except ValueError as e:
            raise errors.AmountExtractionFailure(str(e)) from e
        if amount <= 0:
            raise errors.AmountExtractionFailure(
                errors.amount_not_found(bank.name, variant.name)
            )
        return amount

    def _extract_merchant(self, text: str, variant: TemplateVariant) -> str:
        if variant.merchant_label is not None:
            return variant.merchant_label
        merchant = _search(variant.fields.merchant, text) or ""
        merchant = " ".join(merchant.split())
        return _REGION_SUFFIX.sub("", merchant).strip()

    def _extract_date(
        self, text: str, bank: BankProfile
    ) -> tuple[datetime, Optional[str]]:
        found = bank.find_date(text)
        if found is None:
            logger.warning("sms_date_missing", bank=bank.name, fallback="now")
            return self._clock(), None

        pattern, date_token, time_token = found
        try:
            parsed = parse_message_datetime(
                date_token, pattern.date_format, time_token, pattern.time_format, self._zone
            )
        except ValueError:
            logger.warning(
                "sms_date_invalid", bank=bank.name, date=date_token, time=time_token, fallback="now"
            )
            return self._clock(), time_token
        return parsed, time_token

    def _extract_account(
        self, text: str, variant: TemplateVariant
    ) -> tuple[Optional[str], Optional[str]]:
        fragment = _search(variant.fields.account, text)
        if fragment is not None:
            return fragment, fragment

        raw = _search(variant.fields.account_long, text)
        if raw is None:
            return None, None
        trailing = _TRAILING_DIGITS.search(raw)
        return (trailing.group(1) if trailing else raw), raw

    def _extract_balance(self, text: str, variant: TemplateVariant) -> Optional[Decimal]:
        raw_balance = _search(variant.fields.balance, text)
        if raw_balance is None:
            return None
        try:
            return parse_amount(raw_balance)
        except ValueError:
            return None


def _search(pattern: Optional[Pattern], text: str) -> Optional[str]:
    if pattern is None:
        return None
    match = pattern.search(text)
    return match.group(1).strip() if match else None


_default_parser: Optional[TransactionParser] = None


def parse_sms(text: str) -> ParsedTransaction:
    """Parse with default settings. See TransactionParser.parse."""
    global _default_parser
    if _default_parser is None:
        _default_parser = TransactionParser()
    return _default_parser.parse(text)


def looks_like_bank_sms(text: str) -> bool:
    """Check with default settings. See TransactionParser.looks_like_bank_sms."""
    global _default_parser
    if _default_parser is None:
        _default_parser = TransactionParser()
    return _default_parser.looks_like_bank_sms(text)
