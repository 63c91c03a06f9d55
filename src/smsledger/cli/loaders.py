"""CSV loaders for accounts and transactions given on the command line."""

import csv
from decimal import Decimal
from pathlib import Path
from datetime import tzinfo
from typing import Optional

from smsledger.domain.entities import Account, Transaction, TransactionType
from smsledger.domain.errors import NotFoundError, ValidationError, account_not_found
from smsledger.utils.amount_parser import parse_amount
from smsledger.utils.date_parser import parse_datetime

ACCOUNT_COLUMNS = {"id", "bank_name"}
TRANSACTION_COLUMNS = {"id", "account_id", "date", "type", "amount"}
_TRUE = {"1", "true", "yes", "y"}


def _read_rows(csv_path: Path, required: set[str]) -> list[tuple[int, dict]]:
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ValidationError("CSV file has no columns")
        missing = required - {name.strip() for name in reader.fieldnames}
        if missing:
            raise ValidationError(
                f"CSV file missing required columns: {', '.join(sorted(missing))}"
            )
        # Row 1 is the header
        return [
            (row_num, {key.strip(): (value or "").strip() for key, value in row.items() if key})
            for row_num, row in enumerate(reader, start=2)
        ]


def load_accounts(csv_file_path: str) -> list[Account]:
    """Load accounts from a CSV file.

    Columns: id, bank_name, and optionally account_number, nickname,
    starting_balance, is_primary.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If a column or value is invalid
    """
    accounts = []
    for row_num, row in _read_rows(Path(csv_file_path), ACCOUNT_COLUMNS):
        try:
            accounts.append(
                Account(
                    id=int(row["id"]),
                    bank_name=row["bank_name"],
                    account_number_full=row.get("account_number") or None,
                    nickname=row.get("nickname") or None,
                    starting_balance=parse_amount(row.get("starting_balance") or "0"),
                    is_primary=row.get("is_primary", "").lower() in _TRUE,
                )
            )
        except ValueError as e:
            raise ValidationError(f"Row {row_num}: {e}") from e
    return accounts


def load_transactions(
    csv_file_path: str, zone: Optional[tzinfo] = None
) -> list[Transaction]:
    """Load committed transactions from a CSV file.

    Columns: id, account_id, date, type (debit/credit), amount, and
    optionally category, merchant, description, reference_number.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If a column or value is invalid
    """
    transactions = []
    for row_num, row in _read_rows(Path(csv_file_path), TRANSACTION_COLUMNS):
        try:
            amount = parse_amount(row["amount"])
            if amount <= Decimal("0"):
                raise ValueError(f"amount must be positive, got {amount}")
            transactions.append(
                Transaction(
                    id=int(row["id"]),
                    account_id=int(row["account_id"]),
                    date=parse_datetime(row["date"], zone),
                    type=TransactionType(row["type"].lower()),
                    amount=amount,
                    category=row.get("category") or "Other",
                    merchant=row.get("merchant") or "",
                    description=row.get("description") or None,
                    reference_number=row.get("reference_number") or None,
                )
            )
        except ValueError as e:
            raise ValidationError(f"Row {row_num}: {e}") from e
    return transactions


def find_account(accounts: list[Account], account_id: int) -> Account:
    """Return the account with the given ID.

    Raises:
        NotFoundError: If no account has that ID
    """
    for account in accounts:
        if account.id == account_id:
            return account
    raise NotFoundError(account_not_found(account_id))
