"""Reconciliation command."""

from datetime import datetime

import click

from smsledger.cli.error_handling import handle_domain_error
from smsledger.cli.loaders import find_account, load_accounts, load_transactions
from smsledger.domain.errors import DomainError
from smsledger.domain.ledger import account_balance, total_balance
from smsledger.domain.reconciliation import build_adjustment, reconcile
from smsledger.utils.amount_parser import parse_amount


@click.command("reconcile")
@click.option("--actual", required=True, help="Balance reported by the bank")
@click.option("--calculated", help="Balance computed by the ledger")
@click.option("--transactions", "transactions_csv", type=click.Path(exists=True), help="Compute the balance from this CSV")
@click.option("--starting-balance", default="0", help="Opening balance used with --transactions")
@click.option("--account", type=int, help="Only include transactions of this account ID")
@click.option("--accounts", "accounts_csv", type=click.Path(exists=True), help="Accounts CSV; the account's starting balance is used")
@click.pass_context
def reconcile_balance(
    ctx,
    actual: str,
    calculated: str | None,
    transactions_csv: str | None,
    starting_balance: str,
    account: int | None,
    accounts_csv: str | None,
):
    """Compare the ledger balance with the bank's balance.

    Examples:
        smsledger reconcile --calculated 4000 --actual 4000.01
        smsledger reconcile --actual 5712.50 --transactions transactions.csv --starting-balance 5000
        smsledger reconcile --actual 5712.50 --transactions transactions.csv --accounts accounts.csv --account 1
    """
    settings = ctx.obj["settings"]

    if (calculated is None) == (transactions_csv is None):
        click.echo("Error: Provide exactly one of --calculated or --transactions", err=True)
        ctx.exit(1)
    if accounts_csv is not None and account is None:
        click.echo("Error: --accounts requires --account", err=True)
        ctx.exit(1)

    known = None
    try:
        actual_balance = parse_amount(actual)
        if calculated is not None:
            calculated_balance = parse_amount(calculated)
        else:
            transactions = load_transactions(transactions_csv, settings.tzinfo)
            if accounts_csv is not None:
                known = find_account(load_accounts(accounts_csv), account)
                calculated_balance = account_balance(known, transactions)
            else:
                if account is not None:
                    transactions = [t for t in transactions if t.account_id == account]
                calculated_balance = total_balance(parse_amount(starting_balance), transactions)
    except (DomainError, ValueError, OSError) as e:
        handle_domain_error(ctx, e)

    result = reconcile(calculated_balance, actual_balance)
    currency = settings.base_currency

    click.echo(f"Calculated: {currency} {calculated_balance:,.2f}")
    click.echo(f"Actual:     {currency} {actual_balance:,.2f}")
    click.echo(f"Difference: {currency} {result.difference:+,.2f}")
    if result.needs_adjustment:
        click.echo(
            f"Adjustment needed: {result.adjustment_type.value} of {currency} {result.adjustment_amount:,.2f}"
        )
        if known is not None:
            next_id = max((t.id for t in transactions), default=0) + 1
            adjustment = build_adjustment(
                result, known, datetime.now(settings.tzinfo), next_id, settings=settings
            )
            click.echo(
                f"Adjustment transaction: #{adjustment.id} {adjustment.type.value} "
                f"{adjustment.currency} {adjustment.amount:,.2f} [{adjustment.category}]"
            )
    else:
        click.echo("No adjustment needed.")


def register_commands(cli):
    """Register reconcile command with main CLI."""
    cli.add_command(reconcile_balance)
