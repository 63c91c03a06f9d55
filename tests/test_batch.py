"""Tests for batch splitting and batch import."""

from decimal import Decimal

from smsledger.domain.batch import split_messages
from smsledger.domain.entities import TransactionType


def test_split_on_blank_lines(sample_sms):
    """N blank-line separated messages give exactly N chunks."""
    messages = [sample_sms["bml_purchase"], sample_sms["mib_pos"], sample_sms["mib_fund"]]
    text = "\n\n".join(messages)

    assert split_messages(text) == messages


def test_split_on_blank_lines_with_whitespace_and_crlf(sample_sms):
    text = sample_sms["bml_purchase"] + "\r\n  \r\n" + sample_sms["mib_pos"]

    assert split_messages(text) == [sample_sms["bml_purchase"], sample_sms["mib_pos"]]


def test_split_on_dash_rules(sample_sms):
    text = sample_sms["mib_favara"] + "\n-----\n" + sample_sms["mib_fund"]

    assert split_messages(text) == [sample_sms["mib_favara"], sample_sms["mib_fund"]]


def test_split_by_message_openers(sample_sms):
    """Without separators, known opening phrases start new messages."""
    text = "\n".join(
        [sample_sms["bml_legacy_debit"], sample_sms["mib_pos"], sample_sms["mib_legacy_debit"]]
    )

    assert split_messages(text) == [
        sample_sms["bml_legacy_debit"],
        sample_sms["mib_pos"],
        sample_sms["mib_legacy_debit"],
    ]


def test_split_joins_wrapped_lines():
    """Continuation lines are joined onto the message they belong to."""
    text = (
        "Your POS PURCHASE from ***7894 for 38.08 MVR at CHEFBITE, MV\n"
        "on 29.10.25 16:55 was processed successfully.\n"
        "Favara Transfer from your account 99010***72100 for MVR 8000.00\n"
        "was processed on 02/01/2026 12:32:38."
    )

    assert split_messages(text) == [
        "Your POS PURCHASE from ***7894 for 38.08 MVR at CHEFBITE, MV on 29.10.25 16:55 was processed successfully.",
        "Favara Transfer from your account 99010***72100 for MVR 8000.00 was processed on 02/01/2026 12:32:38.",
    ]


def test_split_never_fails():
    assert split_messages("") == []
    assert split_messages(None) == []
    assert split_messages("   \n  ") == []
    assert split_messages("just some text") == ["just some text"]


def test_parse_batch_counts(batch_service, sample_sms):
    """Failures are reported per message without losing their text."""
    garbage = "Your OTP is 123456"
    text = "\n\n".join(
        [sample_sms["bml_purchase"], garbage, sample_sms["mib_fund"], "BML: statement ready"]
    )

    result = batch_service.parse_batch(text)

    assert len(result.items) == 4
    assert result.ok == 2
    assert result.failed == 2
    failed = [item for item in result.items if not item.ok]
    assert [item.raw for item in failed] == [garbage, "BML: statement ready"]
    assert "Unable to detect bank" in failed[0].error
    assert all(item.parsed is None for item in failed)


def test_parse_batch_keeps_order(batch_service, sample_sms):
    text = "\n\n".join([sample_sms["mib_fund"], sample_sms["mib_favara"]])

    result = batch_service.parse_batch(text)

    assert [item.index for item in result.items] == [0, 1]
    assert [t.type for t in result.parsed_transactions] == [
        TransactionType.CREDIT,
        TransactionType.DEBIT,
    ]
    assert [t.amount for t in result.parsed_transactions] == [
        Decimal("110.00"),
        Decimal("8000.00"),
    ]


def test_parse_batch_matches_accounts(batch_service, sample_sms, sample_accounts):
    text = "\n\n".join([sample_sms["bml_purchase"], sample_sms["mib_pos"], "nonsense"])

    result = batch_service.parse_batch(text, accounts=sample_accounts)

    assert [item.account_id for item in result.items] == [1, 3, None]


def test_parse_batch_empty(batch_service):
    result = batch_service.parse_batch("")

    assert result.items == ()
    assert result.ok == 0
    assert result.failed == 0
