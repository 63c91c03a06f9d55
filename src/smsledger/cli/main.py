"""Main CLI entry point."""

import click

from smsledger.config import load_settings
from smsledger.domain.errors import ConfigurationError
from smsledger.logging_config import configure_logging

# Import and register all commands at module level
from smsledger.cli.commands import batch, ledger, parse, reconcile


@click.group()
@click.option(
    "--timezone",
    help="Timezone message dates are written in (overrides SMSLEDGER_TIMEZONE)",
    envvar="SMSLEDGER_TIMEZONE",
)
@click.option(
    "--currency",
    help="Ledger base currency (overrides SMSLEDGER_CURRENCY)",
    envvar="SMSLEDGER_CURRENCY",
)
@click.option(
    "--log-level",
    help="Log level for stderr diagnostics (overrides SMSLEDGER_LOG_LEVEL)",
    envvar="SMSLEDGER_LOG_LEVEL",
)
@click.option("--json-logs", is_flag=True, help="Emit log lines as JSON")
@click.pass_context
def cli(ctx, timezone: str | None, currency: str | None, log_level: str | None, json_logs: bool):
    """smsledger - Bank SMS parser and running-balance ledger.

    Turns BML and MIB notification messages into transactions and keeps
    account balances consistent with what the bank reports.
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is not None:
        try:
            settings = load_settings(
                timezone=timezone, base_currency=currency, log_level=log_level
            )
        except ConfigurationError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        configure_logging(settings.log_level, json_output=json_logs)
        ctx.obj["settings"] = settings


# Register all commands
parse.register_commands(cli)
batch.register_commands(cli)
ledger.register_commands(cli)
reconcile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
