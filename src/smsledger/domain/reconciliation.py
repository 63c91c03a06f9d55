"""Reconciliation of a computed balance against the bank-reported one."""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

import structlog

from smsledger.config import Settings
from smsledger.domain.entities import (
    Account,
    ReconciliationResult,
    Transaction,
    TransactionType,
)
from smsledger.utils.amount_parser import to_money

logger = structlog.get_logger(__name__)

TOLERANCE = Decimal("0.01")
ADJUSTMENT_MERCHANT = "Reconciliation"
ADJUSTMENT_DESCRIPTION = "Balance reconciliation adjustment"


def _as_decimal(value) -> Optional[Decimal]:
    # Unrounded, so sub-cent differences stay below the tolerance
    if value is None:
        return Decimal("0")
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return None
    return number if number.is_finite() else None


def reconcile(calculated_balance, actual_balance) -> ReconciliationResult:
    """Compare the ledger balance with the balance the bank reports.

    Never raises: a value that is not a finite number gives a
    zero-difference result that needs no adjustment. The difference is
    taken on the exact inputs; only the reported amounts are rounded to
    cents.

    Args:
        calculated_balance: Balance derived from the transaction set
        actual_balance: Balance reported by the bank

    Returns:
        ReconciliationResult with difference = actual - calculated
    """
    calculated = _as_decimal(calculated_balance)
    actual = _as_decimal(actual_balance)
    if calculated is None or actual is None:
        zero = Decimal("0.00")
        return ReconciliationResult(
            difference=zero,
            needs_adjustment=False,
            adjustment_type=TransactionType.DEBIT,
            adjustment_amount=zero,
        )

    difference = actual - calculated
    return ReconciliationResult(
        difference=to_money(difference),
        needs_adjustment=abs(difference) >= TOLERANCE,
        adjustment_type=TransactionType.CREDIT if difference > 0 else TransactionType.DEBIT,
        adjustment_amount=to_money(abs(difference)),
    )


def build_adjustment(
    result: ReconciliationResult,
    account: Account,
    when: datetime,
    transaction_id: int,
    settings: Optional[Settings] = None,
) -> Optional[Transaction]:
    """Build the transaction that brings the ledger in line with the bank.

    Args:
        result: Output of reconcile()
        account: Account being reconciled
        when: Timestamp of the adjustment
        transaction_id: ID assigned by the caller's store
        settings: Supplies the base currency and the adjustment category

    Returns:
        Adjustment transaction, or None when no adjustment is needed
    """
    if not result.needs_adjustment:
        return None

    settings = settings or Settings()
    logger.info(
        "reconciliation_adjustment",
        account_id=account.id,
        type=result.adjustment_type.value,
        amount=str(result.adjustment_amount),
    )
    return Transaction(
        id=transaction_id,
        account_id=account.id,
        date=when,
        type=result.adjustment_type,
        amount=result.adjustment_amount,
        currency=settings.base_currency,
        category=settings.adjustment_category,
        merchant=ADJUSTMENT_MERCHANT,
        description=ADJUSTMENT_DESCRIPTION,
        bank_name=account.bank_name,
        account_number_fragment=account.account_number_full,
        is_reconciliation_adjustment=True,
    )
