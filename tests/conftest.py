"""Shared pytest fixtures for smsledger tests."""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest
from dateutil import tz

from smsledger.config import Settings
from smsledger.domain.batch import BatchImportService
from smsledger.domain.entities import Account, Transaction, TransactionType
from smsledger.domain.sms_parser import TransactionParser


SAMPLE_SMS = {
    "bml_purchase": (
        "Transaction from 1621 on 31/12/25 at 10:18:03 for MVR265.00 at MARRYBROWN MALDIVES "
        "was processed. Reference No:123116608083, Approval Code:986780."
    ),
    "bml_legacy_debit": (
        "BML: Your account ending 1234 has been debited MVR 250.00 at FOODCO on 02-Jan-26. "
        "Balance: MVR 5,750.00"
    ),
    "bml_legacy_credit": (
        "BML: Your account ending 1234 has been credited MVR 10,000.00 on 01-Jan-26. "
        "Balance: MVR 15,750.00"
    ),
    "mib_pos": (
        "Your POS PURCHASE from ***7894 for 38.08 MVR at CHEFBITE, MV on 29.10.25 16:55 "
        "was processed successfully. Approval Code: 541461"
    ),
    "mib_ecommerce": (
        "Your E-COMMERCE TRX from ***7894 for 513.00 MVR at DHIVEHI RAAJJEYGE GULH, MV on "
        "29.10.25 20:02 was processed successfully. Approval Code: 164784"
    ),
    "mib_favara": (
        "Favara Transfer from your account 99010***72100 for MVR 8000.00 was processed on "
        "02/01/2026 12:32:38. Ref. no. 734074219-767178523"
    ),
    "mib_fund": (
        "Fund Transfer from your account 99010***72100 for MVR 110.00 was processed on "
        "01/01/2026 11:34:47. Ref. no. 122836305-67052491"
    ),
    "mib_legacy_debit": (
        "MIB Alert: Debit of MVR 150.50 from A/C ***5678 at STO MALE on 02/01/26. "
        "Avl Bal: MVR 8,500.00"
    ),
    "mib_legacy_credit": (
        "MIB Alert: Credit of MVR 5,000.00 to A/C ***5678 on 02/01/26. Avl Bal: MVR 13,500.00"
    ),
}

MALDIVES = tz.gettz("Indian/Maldives")
FIXED_NOW = datetime(2026, 10, 18, 9, 30, tzinfo=MALDIVES)


@pytest.fixture
def sample_sms():
    """Return one real-world message per supported template."""
    return dict(SAMPLE_SMS)


@pytest.fixture
def settings():
    """Default settings (MVR, Indian/Maldives)."""
    return Settings()


@pytest.fixture
def fixed_now():
    """The instant returned by the parser's clock."""
    return FIXED_NOW


@pytest.fixture
def parser(settings):
    """Parser with a fixed clock so date fallbacks are predictable."""
    return TransactionParser(settings, clock=lambda: FIXED_NOW)


@pytest.fixture
def batch_service(parser):
    """Batch import service using the fixed-clock parser."""
    return BatchImportService(parser)


@pytest.fixture
def sample_accounts():
    """Accounts at both banks; the last one is primary."""
    return [
        Account(
            id=1,
            bank_name="BML",
            account_number_full="7730000011621",
            nickname="BML Current",
            starting_balance=Decimal("5000.00"),
        ),
        Account(
            id=2,
            bank_name="MIB",
            account_number_full="9901000072100",
            nickname="MIB Savings",
            starting_balance=Decimal("12000.00"),
        ),
        Account(
            id=3,
            bank_name="MIB",
            account_number_full="90101400037894",
            nickname="MIB Card",
            is_primary=True,
        ),
    ]


@pytest.fixture
def make_transaction():
    """Factory for committed transactions with sensible defaults."""

    def _make(
        id: int,
        type: str,
        amount: str,
        on: date | datetime,
        account_id: int = 1,
    ) -> Transaction:
        return Transaction(
            id=id,
            account_id=account_id,
            date=on,
            type=TransactionType(type),
            amount=Decimal(amount),
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner.

    The CLI binds the root log handler to the runner's stderr, which is
    closed after each invoke, so the handlers are dropped afterwards.
    """
    from click.testing import CliRunner

    yield CliRunner()
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)
