"""Running balance commands."""

import click

from smsledger.cli.error_handling import handle_domain_error
from smsledger.cli.loaders import load_transactions
from smsledger.domain.errors import DomainError
from smsledger.domain.ledger import balance_history, balance_stats, running_balances, total_balance
from smsledger.utils.amount_parser import parse_amount
from smsledger.utils.date_parser import parse_date


@click.command("ledger")
@click.argument("transactions_csv", type=click.Path(exists=True))
@click.option("--starting-balance", required=True, help="Opening balance of the account (e.g., 5000.00)")
@click.option("--account", type=int, help="Only include transactions of this account ID")
@click.option("--history-days", type=int, help="Also print end-of-day balances for the last N days")
@click.option("--today", "today_str", default="today", help="Last day of the history window (YYYY-MM-DD or 'today')")
@click.pass_context
def show_ledger(
    ctx,
    transactions_csv: str,
    starting_balance: str,
    account: int | None,
    history_days: int | None,
    today_str: str,
):
    """Show running balances, newest first.

    Examples:
        smsledger ledger transactions.csv --starting-balance 5000
        smsledger ledger transactions.csv --starting-balance 5000 --account 1 --history-days 7
    """
    settings = ctx.obj["settings"]

    try:
        start = parse_amount(starting_balance)
        transactions = load_transactions(transactions_csv, settings.tzinfo)
        today = parse_date(today_str)
    except (DomainError, ValueError, OSError) as e:
        handle_domain_error(ctx, e)

    if account is not None:
        transactions = [t for t in transactions if t.account_id == account]

    if not transactions:
        click.echo("No transactions found.")
        click.echo(f"Balance: {settings.base_currency} {start:,.2f}")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 96)
    click.echo(
        f"{'ID':<6} {'Date':<26} {'Type':<7} {'Amount':>14} {'Before':>14} {'After':>14}  {'Description'}"
    )
    click.echo("-" * 96)
    for snapshot in running_balances(transactions, start):
        txn = snapshot.transaction
        description = (txn.description or txn.merchant or "")[:20]
        click.echo(
            f"{txn.id:<6} {txn.date.isoformat():<26} {txn.type.value:<7} {txn.amount:>14,.2f} "
            f"{snapshot.balance_before:>14,.2f} {snapshot.balance_after:>14,.2f}  {description}"
        )

    click.echo("-" * 96)
    click.echo(f"Balance: {settings.base_currency} {total_balance(start, transactions):,.2f}")

    if history_days:
        history = balance_history(start, transactions, days=history_days, today=today)
        click.echo(f"\nLast {history_days} day(s):")
        for point in history:
            click.echo(f"  {point.date.isoformat()}  {point.balance:>14,.2f}  {point.change:>+14,.2f}")
        stats = balance_stats(history)
        click.echo(
            f"  Average: {stats.average:,.2f}  Min: {stats.minimum:,.2f}  "
            f"Max: {stats.maximum:,.2f}  Trend: {stats.trend:+.2f}%"
        )


def register_commands(cli):
    """Register ledger command with main CLI."""
    cli.add_command(show_ledger)
