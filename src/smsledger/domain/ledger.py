"""Ledger balance computations.

Balances are never stored: every function here rebuilds them from a
starting balance and the full transaction set, so edits or deletes of old
transactions cannot leave a stale figure behind.
"""

from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Union

from smsledger.domain.entities import (
    Account,
    BalancePoint,
    BalanceSnapshot,
    BalanceStats,
    ParsedTransaction,
    Transaction,
    TransactionType,
)
from smsledger.utils.amount_parser import to_money

LedgerEntry = Union[Transaction, ParsedTransaction]
Number = Union[Decimal, int, float, str, None]


def signed_amount(transaction: LedgerEntry) -> Decimal:
    """Return +amount for credits and -amount for debits."""
    amount = to_money(transaction.amount)
    if transaction.type == TransactionType.CREDIT:
        return amount
    if transaction.type == TransactionType.DEBIT:
        return -amount
    return Decimal("0.00")


def _sort_key(value: date | datetime) -> datetime:
    # Date-only entries sort as midnight; aware datetimes compare in UTC
    if not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def chronological(transactions: Iterable[LedgerEntry]) -> list[LedgerEntry]:
    """Sort oldest first; transactions at the same instant keep input order."""
    return sorted(transactions, key=lambda t: _sort_key(t.date))


def running_balances(
    transactions: Optional[Sequence[LedgerEntry]], starting_balance: Number
) -> list[BalanceSnapshot]:
    """Compute the balance before and after every transaction.

    Args:
        transactions: Transactions of one account, in any order
        starting_balance: Opening balance of the account

    Returns:
        Snapshots newest first; the first snapshot's balance_after is the
        total balance
    """
    if not transactions:
        return []

    balance = to_money(starting_balance)
    snapshots = []
    for transaction in chronological(transactions):
        before = balance
        balance = before + signed_amount(transaction)
        snapshots.append(
            BalanceSnapshot(transaction=transaction, balance_before=before, balance_after=balance)
        )
    return list(reversed(snapshots))


def total_balance(
    starting_balance: Number, transactions: Optional[Iterable[LedgerEntry]]
) -> Decimal:
    """Return starting balance plus credits minus debits."""
    credits = Decimal("0.00")
    debits = Decimal("0.00")
    for transaction in transactions or ():
        if transaction.type == TransactionType.CREDIT:
            credits += to_money(transaction.amount)
        elif transaction.type == TransactionType.DEBIT:
            debits += to_money(transaction.amount)
    return to_money(starting_balance) + credits - debits


def account_balance(
    account: Optional[Account], transactions: Iterable[Transaction]
) -> Decimal:
    """Return the current balance of one account.

    Only transactions whose account_id is the account's id count.
    """
    if account is None:
        return Decimal("0.00")
    own = [t for t in transactions if t.account_id == account.id]
    return total_balance(account.starting_balance, own)


def group_by_account(
    transactions: Iterable[LedgerEntry],
) -> dict[Optional[int], list[LedgerEntry]]:
    """Group transactions by account id, preserving order within a group.

    Parsed transactions that were never assigned an account are keyed None.
    """
    groups: dict[Optional[int], list[LedgerEntry]] = defaultdict(list)
    for transaction in transactions:
        groups[getattr(transaction, "account_id", None)].append(transaction)
    return dict(groups)


def balance_history(
    starting_balance: Number,
    transactions: Sequence[LedgerEntry],
    days: int = 30,
    today: Optional[date] = None,
) -> list[BalancePoint]:
    """End-of-day balances for the last ``days`` days, oldest first.

    Args:
        starting_balance: Opening balance
        transactions: Transactions of one account
        days: Number of days to report, ending today
        today: Last day of the window (defaults to the current date)

    Returns:
        One BalancePoint per day with the change from the previous day
    """
    today = today or date.today()
    ordered = chronological(transactions)
    opening = to_money(starting_balance)

    history = []
    previous = opening
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        end_of_day = datetime.combine(day, time.max)
        upto = [t for t in ordered if _local_date_key(t.date) <= end_of_day]
        balance = total_balance(opening, upto)
        history.append(BalancePoint(date=day, balance=balance, change=balance - previous))
        previous = balance
    return history


def _local_date_key(value: date | datetime) -> datetime:
    # Compare on the wall-clock time the transaction was recorded in
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    return datetime.combine(value, time.min)


def balance_stats(history: Sequence[BalancePoint]) -> BalanceStats:
    """Average, minimum, maximum and trend (percent, first to last)."""
    zero = Decimal("0.00")
    if not history:
        return BalanceStats(average=zero, minimum=zero, maximum=zero, trend=zero)

    balances = [point.balance for point in history]
    average = to_money(sum(balances, zero) / len(balances))
    first, last = balances[0], balances[-1]
    trend = to_money((last - first) / first * 100) if first != 0 else zero
    return BalanceStats(
        average=average, minimum=min(balances), maximum=max(balances), trend=trend
    )
