"""Tests for the reconciliation calculator."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from smsledger.config import Settings
from smsledger.domain.entities import Account, TransactionType
from smsledger.domain.ledger import total_balance
from smsledger.domain.reconciliation import build_adjustment, reconcile


def test_equal_balances_need_no_adjustment():
    result = reconcile(Decimal("4000.00"), Decimal("4000.00"))

    assert result.needs_adjustment is False
    assert result.difference == Decimal("0.00")
    assert result.adjustment_amount == Decimal("0.00")


def test_one_cent_over_is_credit():
    result = reconcile(Decimal("4000.00"), Decimal("4000.01"))

    assert result.needs_adjustment is True
    assert result.adjustment_type == TransactionType.CREDIT
    assert result.adjustment_amount == Decimal("0.01")
    assert result.difference == Decimal("0.01")


def test_shortfall_is_debit():
    result = reconcile(4000, "3875.50")

    assert result.needs_adjustment is True
    assert result.adjustment_type == TransactionType.DEBIT
    assert result.adjustment_amount == Decimal("124.50")
    assert result.difference == Decimal("-124.50")


def test_float_inputs_are_exact():
    result = reconcile(100.1, 100.3)

    assert result.difference == Decimal("0.20")


@pytest.mark.parametrize("actual", [float("nan"), float("inf"), "not a number", Decimal("NaN")])
def test_non_finite_input_is_a_no_op(actual):
    result = reconcile(Decimal("4000.00"), actual)

    assert result.needs_adjustment is False
    assert result.difference == Decimal("0.00")
    assert result.adjustment_amount == Decimal("0.00")


def test_build_adjustment(make_transaction):
    account = Account(id=1, bank_name="BML", account_number_full="7730000011621", starting_balance=Decimal("5000"))
    transactions = [
        make_transaction(1, "credit", "1000", date(2026, 1, 1)),
        make_transaction(2, "debit", "300", date(2026, 1, 2)),
    ]
    calculated = total_balance(account.starting_balance, transactions)
    actual = Decimal("5712.50")

    result = reconcile(calculated, actual)
    adjustment = build_adjustment(result, account, datetime(2026, 1, 3, 9, 0), transaction_id=3)

    assert adjustment.is_reconciliation_adjustment is True
    assert adjustment.type == TransactionType.CREDIT
    assert adjustment.amount == Decimal("12.50")
    assert adjustment.account_id == 1
    assert adjustment.category == "Balance Adjustment"
    assert adjustment.merchant == "Reconciliation"
    assert total_balance(account.starting_balance, transactions + [adjustment]) == actual


def test_build_adjustment_not_needed():
    account = Account(id=1, bank_name="BML")
    result = reconcile(100, 100)

    assert build_adjustment(result, account, datetime(2026, 1, 1), transaction_id=1) is None


def test_sub_cent_difference_stays_within_tolerance():
    result = reconcile(Decimal("4000.00"), Decimal("4000.005"))

    assert result.needs_adjustment is False


def test_sub_cent_inputs_are_not_rounded_before_comparing():
    below = reconcile(Decimal("100.004"), Decimal("100.013"))
    at = reconcile(Decimal("100.004"), Decimal("100.014"))

    assert below.needs_adjustment is False
    assert at.needs_adjustment is True
    assert at.adjustment_type == TransactionType.CREDIT
    assert at.adjustment_amount == Decimal("0.01")


def test_build_adjustment_uses_settings():
    account = Account(id=2, bank_name="MIB", account_number_full="9901000072100")
    settings = Settings(base_currency="USD", adjustment_category="Correction")
    result = reconcile(100, 90)

    adjustment = build_adjustment(result, account, datetime(2026, 1, 3), transaction_id=7, settings=settings)

    assert adjustment.category == "Correction"
    assert adjustment.currency == "USD"
    assert adjustment.type == TransactionType.DEBIT
    assert adjustment.amount == Decimal("10.00")
