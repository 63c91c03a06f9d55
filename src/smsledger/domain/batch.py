"""Batch import of several pasted bank messages."""

import re
from typing import Optional, Sequence

import structlog

from smsledger.domain.account_matcher import match_account
from smsledger.domain.entities import Account, BatchItem, BatchResult
from smsledger.domain.errors import DomainError
from smsledger.domain.sms_parser import TransactionParser

logger = structlog.get_logger(__name__)

# Blank lines or a line made of three or more dashes
_SEPARATOR = re.compile(r"\r?\n\s*\r?\n|\r?\n\s*-{3,}\s*\r?\n")

# Lines that open a new message when the paste has no separators
MESSAGE_OPENERS = re.compile(
    r"^(?:BML:|MIB\b|Your POS PURCHASE|Your E-COMMERCE TRX|Favara Transfer"
    r"|Fund Transfer|Transaction from)",
    re.IGNORECASE,
)


def split_messages(text: str | None) -> list[str]:
    """Split a clipboard block into candidate messages.

    Blank lines and dash rules separate messages. When that yields at most
    one chunk, lines are grouped instead, starting a new chunk at every line
    that opens a known template; grouped lines are joined with a space.

    Args:
        text: Pasted text, possibly holding several messages

    Returns:
        Candidate message strings in input order
    """
    text = (text or "").strip()
    if not text:
        return []

    parts = [part.strip() for part in _SEPARATOR.split(text)]
    parts = [part for part in parts if part]
    if len(parts) > 1:
        return parts

    lines = [line.strip() for line in text.splitlines()]
    chunks: list[list[str]] = []
    current: list[str] = []
    for line in lines:
        if not line:
            continue
        if MESSAGE_OPENERS.match(line) and current:
            chunks.append(current)
            current = [line]
        else:
            current.append(line)
    if current:
        chunks.append(current)
    return [" ".join(chunk) for chunk in chunks]


class BatchImportService:
    """Service for parsing pasted blocks of bank messages."""

    def __init__(self, parser: Optional[TransactionParser] = None):
        """Initialize batch import service.

        Args:
            parser: Parser applied to each candidate message
        """
        self.parser = parser or TransactionParser()

    def parse_batch(
        self, text: str | None, accounts: Optional[Sequence[Account]] = None
    ) -> BatchResult:
        """Parse every message in a pasted block.

        Failures are recorded per message and never abort the batch.

        Args:
            text: Pasted text
            accounts: Optional known accounts to match each parsed message to

        Returns:
            BatchResult with one item per candidate message
        """
        items = []
        for index, raw in enumerate(split_messages(text)):
            try:
                parsed = self.parser.parse(raw)
            except DomainError as e:
                items.append(BatchItem(index=index, raw=raw, ok=False, error=str(e) or "Parse failed"))
                continue

            account_id = match_account(parsed, accounts) if accounts is not None else None
            items.append(BatchItem(index=index, raw=raw, ok=True, parsed=parsed, account_id=account_id))

        result = BatchResult(items=tuple(items))
        logger.info("batch_parsed", messages=len(items), ok=result.ok, failed=result.failed)
        return result
