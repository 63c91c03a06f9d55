"""Settings for the parser and ledger."""

import os
from dataclasses import dataclass, replace
from datetime import tzinfo

from dateutil import tz

from smsledger.domain.errors import ConfigurationError, unknown_timezone

DEFAULT_CURRENCY = "MVR"
DEFAULT_TIMEZONE = "Indian/Maldives"


@dataclass(frozen=True)
class Settings:
    """Ledger-wide settings.

    Attributes:
        base_currency: Currency stamped on every parsed transaction
        timezone: IANA zone that message dates are written in
        log_level: Logging level name
        default_category: Category used when no merchant keyword matches
        transfer_category: Category forced on transfer templates
        adjustment_category: Category of reconciliation adjustments
    """

    base_currency: str = DEFAULT_CURRENCY
    timezone: str = DEFAULT_TIMEZONE
    log_level: str = "WARNING"
    default_category: str = "Other"
    transfer_category: str = "Transfer"
    adjustment_category: str = "Balance Adjustment"

    @property
    def tzinfo(self) -> tzinfo:
        zone = tz.gettz(self.timezone)
        if zone is None:
            raise ConfigurationError(unknown_timezone(self.timezone))
        return zone


def load_settings(**overrides) -> Settings:
    """Load settings from the environment.

    Reads SMSLEDGER_CURRENCY, SMSLEDGER_TIMEZONE and SMSLEDGER_LOG_LEVEL.
    Keyword overrides that are not None win over the environment.

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the timezone is unknown
    """
    settings = Settings(
        base_currency=os.environ.get("SMSLEDGER_CURRENCY", DEFAULT_CURRENCY),
        timezone=os.environ.get("SMSLEDGER_TIMEZONE", DEFAULT_TIMEZONE),
        log_level=os.environ.get("SMSLEDGER_LOG_LEVEL", "WARNING"),
    )
    explicit = {key: value for key, value in overrides.items() if value is not None}
    if explicit:
        settings = replace(settings, **explicit)

    # Fail early rather than on the first parsed message
    settings.tzinfo
    return settings
