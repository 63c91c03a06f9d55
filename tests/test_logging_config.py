"""Tests for logging setup."""

import logging

import pytest
import structlog

from smsledger.domain.batch import BatchImportService
from smsledger.domain.sms_parser import parse_sms
from smsledger.logging_config import configure_logging


@pytest.fixture
def reset_root_logger():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)


def test_library_use_writes_nothing_to_stdout(capsys, sample_sms, sample_accounts):
    parse_sms(sample_sms["bml_purchase"])
    BatchImportService().parse_batch(sample_sms["mib_pos"], accounts=sample_accounts)

    assert capsys.readouterr().out == ""


def test_configure_logging_writes_to_stderr(capsys, reset_root_logger):
    configure_logging("INFO")

    structlog.get_logger("smsledger.test").info("ledger_checked", balance="5700.00")

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "ledger_checked" in captured.err
    assert "balance=5700.00" in captured.err


def test_configure_logging_json(capsys, reset_root_logger):
    configure_logging("INFO", json_output=True)

    structlog.get_logger("smsledger.test").info("ledger_checked")

    assert '"event": "ledger_checked"' in capsys.readouterr().err
