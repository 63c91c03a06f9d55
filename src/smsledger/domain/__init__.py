"""Domain layer for smsledger.

Services live in their own modules (sms_parser, batch, account_matcher,
ledger, reconciliation) and are imported from there; this package only
re-exports the entities and errors they share.
"""

from smsledger.domain.entities import (
    Account,
    BalanceSnapshot,
    BatchItem,
    BatchResult,
    ParsedTransaction,
    ReconciliationResult,
    Transaction,
    TransactionType,
)
from smsledger.domain.errors import (
    AmountExtractionFailure,
    DomainError,
    InvalidInputError,
    UnrecognizedBankFormat,
)

__all__ = [
    "Account",
    "BalanceSnapshot",
    "BatchItem",
    "BatchResult",
    "ParsedTransaction",
    "ReconciliationResult",
    "Transaction",
    "TransactionType",
    "AmountExtractionFailure",
    "DomainError",
    "InvalidInputError",
    "UnrecognizedBankFormat",
]
