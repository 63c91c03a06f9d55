"""Single message parse command."""

import click

from smsledger.cli.error_handling import handle_domain_error
from smsledger.cli.loaders import load_accounts
from smsledger.domain.account_matcher import match_account
from smsledger.domain.entities import ParsedTransaction
from smsledger.domain.errors import DomainError
from smsledger.domain.sms_parser import TransactionParser


def echo_parsed(parsed: ParsedTransaction, indent: str = "  ") -> None:
    """Print the fields of a parsed transaction."""
    click.echo(f"{indent}Bank: {parsed.bank_name} ({parsed.variant})")
    click.echo(f"{indent}Type: {parsed.type.value}")
    click.echo(f"{indent}Amount: {parsed.currency} {parsed.amount:,.2f}")
    click.echo(f"{indent}Date: {parsed.date.isoformat()}")
    click.echo(f"{indent}Merchant: {parsed.merchant or 'Unknown'}")
    click.echo(f"{indent}Category: {parsed.category}")
    if parsed.account_number_fragment:
        click.echo(f"{indent}Account: {parsed.account_number_fragment}")
    if parsed.reference_number:
        click.echo(f"{indent}Reference: {parsed.reference_number}")
    if parsed.approval_code:
        click.echo(f"{indent}Approval: {parsed.approval_code}")
    if parsed.balance is not None:
        click.echo(f"{indent}Balance: {parsed.currency} {parsed.balance:,.2f}")


@click.command("parse")
@click.argument("text", required=False)
@click.option("--file", "file_path", type=click.Path(exists=True), help="Read the message from a file")
@click.option("--accounts", type=click.Path(exists=True), help="Accounts CSV used to match the message")
@click.pass_context
def parse_message(ctx, text: str | None, file_path: str | None, accounts: str | None):
    """Parse one bank SMS.

    Examples:
        smsledger parse "Transaction from 1621 on 31/12/25 at 10:18:03 for MVR265.00 ..."
        smsledger parse --file sms.txt --accounts accounts.csv
    """
    settings = ctx.obj["settings"]

    if file_path is None and text is None:
        click.echo("Error: Provide the message text or --file", err=True)
        ctx.exit(1)

    try:
        if file_path is not None:
            with open(file_path, "r", encoding="utf-8") as f:
                text = f.read()
        known_accounts = load_accounts(accounts) if accounts else None
        parsed = TransactionParser(settings).parse(text)
    except (DomainError, ValueError, OSError) as e:
        handle_domain_error(ctx, e)

    click.echo("\nParsed transaction:")
    echo_parsed(parsed)
    if known_accounts is not None:
        account_id = match_account(parsed, known_accounts)
        click.echo(f"  Matched account: {account_id if account_id is not None else 'none'}")


def register_commands(cli):
    """Register parse command with main CLI."""
    cli.add_command(parse_message)
