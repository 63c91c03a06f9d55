"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidInputError(ValidationError):
    """Message text is missing, empty or not a string."""


class UnrecognizedBankFormat(DomainError):
    """No registered bank profile matched the message text."""


class AmountExtractionFailure(DomainError):
    """A bank profile matched but no transaction amount could be extracted."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConfigurationError(DomainError):
    """Settings could not be loaded or are invalid."""


def invalid_sms_text() -> str:
    """Return message for empty or non-string input."""
    return "Invalid SMS text"


def unrecognized_bank() -> str:
    """Return message when no bank profile matches."""
    return "Unable to detect bank. Please ensure the SMS is from BML or MIB."


def amount_not_found(bank_name: str, variant_name: str | None) -> str:
    """Return message when a matched profile yields no amount."""
    if variant_name is None:
        return f"Unable to extract transaction amount from {bank_name} message"
    return (
        f"Unable to extract transaction amount from {bank_name} "
        f"'{variant_name}' message"
    )


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def unknown_timezone(name: str) -> str:
    """Return message for an unknown timezone name."""
    return f"Unknown timezone '{name}'"
