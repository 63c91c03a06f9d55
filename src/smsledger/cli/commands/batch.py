"""Batch import command."""

import click

from smsledger.cli.commands.parse import echo_parsed
from smsledger.cli.error_handling import handle_domain_error
from smsledger.cli.loaders import load_accounts
from smsledger.domain.batch import BatchImportService
from smsledger.domain.errors import DomainError
from smsledger.domain.sms_parser import TransactionParser


@click.command("batch")
@click.argument("text_file", type=click.Path(exists=True))
@click.option("--accounts", type=click.Path(exists=True), help="Accounts CSV used to match each message")
@click.pass_context
def batch_import(ctx, text_file: str, accounts: str | None):
    """Parse a file holding several pasted bank messages."""
    settings = ctx.obj["settings"]

    try:
        known_accounts = load_accounts(accounts) if accounts else None
        with open(text_file, "r", encoding="utf-8") as f:
            text = f.read()
    except (DomainError, ValueError, OSError) as e:
        handle_domain_error(ctx, e)

    service = BatchImportService(TransactionParser(settings))
    result = service.parse_batch(text, accounts=known_accounts)

    if not result.items:
        click.echo("No messages found.")
        return

    for item in result.items:
        if item.ok:
            click.echo(f"\n[{item.index + 1}] OK")
            echo_parsed(item.parsed, indent="    ")
            if known_accounts is not None:
                click.echo(f"    Matched account: {item.account_id}")
        else:
            click.echo(f"\n[{item.index + 1}] FAILED: {item.error}")
            click.echo(f"    {item.raw}")

    click.echo("\nBatch complete:")
    click.echo(f"  Parsed: {result.ok}")
    click.echo(f"  Failed: {result.failed}")


def register_commands(cli):
    """Register batch command with main CLI."""
    cli.add_command(batch_import)
