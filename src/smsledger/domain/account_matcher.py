"""Resolve a parsed transaction to one of the caller's accounts."""

from typing import Optional, Sequence

import structlog

from smsledger.domain.entities import Account, ParsedTransaction

logger = structlog.get_logger(__name__)


def match_account(
    parsed: ParsedTransaction, accounts: Optional[Sequence[Account]]
) -> Optional[int]:
    """Pick the account a parsed transaction belongs to.

    Resolution order:
    1. Account number equal to, or ending with, the parsed fragment
    2. Bank name contained in the parsed bank name or vice versa
       (case-insensitive)
    3. The primary account, else the first account

    Args:
        parsed: Parsed transaction
        accounts: Known accounts, in the caller's order

    Returns:
        Account ID, or None only when no accounts are given
    """
    if not accounts:
        return None

    fragment = parsed.account_number_fragment
    if fragment:
        for account in accounts:
            number = account.account_number_full or ""
            if number == fragment or number.endswith(fragment):
                return account.id

    bank = (parsed.bank_name or "").strip().lower()
    if bank:
        for account in accounts:
            account_bank = (account.bank_name or "").strip().lower()
            if account_bank and (bank in account_bank or account_bank in bank):
                return account.id

    fallback = next((account for account in accounts if account.is_primary), accounts[0])
    logger.info(
        "account_match_fallback",
        bank=parsed.bank_name,
        fragment=fragment,
        account_id=fallback.id,
    )
    return fallback.id
