"""Domain model entities for smsledger.

These are pure data classes representing ledger concepts. They carry no
storage concerns: persistence is the caller's job, and balances are always
derived from a starting balance plus the transaction set.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction; amounts themselves are always positive."""

    DEBIT = "debit"
    CREDIT = "credit"


@dataclass(frozen=True)
class Account:
    """Bank account known to the caller."""

    id: int
    bank_name: str
    account_number_full: Optional[str] = None
    nickname: Optional[str] = None
    starting_balance: Decimal = Decimal("0.00")
    is_primary: bool = False


@dataclass(frozen=True)
class ParsedTransaction:
    """Transaction extracted from a bank notification, not yet committed."""

    date: datetime
    type: TransactionType
    amount: Decimal
    currency: str
    category: str
    merchant: str
    bank_name: str
    account_number_fragment: Optional[str]
    account_number_raw: Optional[str]
    reference_number: Optional[str]
    approval_code: Optional[str]
    balance: Optional[Decimal]
    description: str
    raw_source_text: str
    time: Optional[str] = None
    variant: Optional[str] = None

    def to_transaction(
        self, transaction_id: int, account_id: int
    ) -> "Transaction":
        """Promote the parsed record into a committed transaction.

        Args:
            transaction_id: ID assigned by the caller's store
            account_id: Account the transaction belongs to

        Returns:
            Transaction entity
        """
        return Transaction(
            id=transaction_id,
            account_id=account_id,
            date=self.date,
            type=self.type,
            amount=self.amount,
            currency=self.currency,
            category=self.category,
            merchant=self.merchant,
            description=self.description,
            bank_name=self.bank_name,
            account_number_fragment=self.account_number_fragment,
            reference_number=self.reference_number,
            approval_code=self.approval_code,
            balance=self.balance,
            raw_source_text=self.raw_source_text,
        )


@dataclass(frozen=True)
class Transaction:
    """Committed transaction entity."""

    id: int
    account_id: int
    date: datetime | date
    type: TransactionType
    amount: Decimal
    currency: str = "MVR"
    category: str = "Other"
    merchant: str = ""
    description: Optional[str] = None
    bank_name: Optional[str] = None
    account_number_fragment: Optional[str] = None
    reference_number: Optional[str] = None
    approval_code: Optional[str] = None
    balance: Optional[Decimal] = None
    raw_source_text: Optional[str] = None
    is_reconciliation_adjustment: bool = False


@dataclass(frozen=True)
class BalanceSnapshot:
    """Balance immediately before and after one transaction."""

    transaction: Transaction | ParsedTransaction
    balance_before: Decimal
    balance_after: Decimal


@dataclass(frozen=True)
class ReconciliationResult:
    """Comparison of a computed balance against the bank-reported one."""

    difference: Decimal
    needs_adjustment: bool
    adjustment_type: TransactionType
    adjustment_amount: Decimal


@dataclass(frozen=True)
class BalancePoint:
    """End-of-day balance used for history charts."""

    date: date
    balance: Decimal
    change: Decimal


@dataclass(frozen=True)
class BalanceStats:
    """Summary statistics over a balance history."""

    average: Decimal
    minimum: Decimal
    maximum: Decimal
    trend: Decimal


@dataclass(frozen=True)
class BatchItem:
    """Outcome of parsing one candidate message from a batch."""

    index: int
    raw: str
    ok: bool
    parsed: Optional[ParsedTransaction] = None
    error: Optional[str] = None
    account_id: Optional[int] = None


@dataclass(frozen=True)
class BatchResult:
    """Outcome of parsing a whole clipboard block."""

    items: tuple[BatchItem, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> int:
        return sum(1 for item in self.items if item.ok)

    @property
    def failed(self) -> int:
        return sum(1 for item in self.items if not item.ok)

    @property
    def parsed_transactions(self) -> list[ParsedTransaction]:
        return [item.parsed for item in self.items if item.ok and item.parsed is not None]
