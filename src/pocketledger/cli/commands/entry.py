"""Ledger entry commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.helpers import (
    format_money,
    get_clock,
    get_store,
    parse_amount_or_exit,
    parse_date_or_exit,
    refresh,
)
from pocketledger.domain.errors import DomainError
from pocketledger.domain.ledger import group_by_date
from pocketledger.services.dashboard import DashboardService
from pocketledger.services.entries import EntryService


@click.group()
def entry_group():
    """Record and browse expenses."""
    pass


@entry_group.command("add")
@click.argument("merchant")
@click.option("--amount", required=True, help="Amount spent (e.g., 123.45 or 123,45)")
@click.option("--category", required=True, help="Category name (e.g., 'Groceries')")
@click.option("--date", "entry_date", help="Expense date (YYYY-MM-DD or relative like 'yesterday')")
@click.pass_context
def add_entry(ctx, merchant: str, amount: str, category: str, entry_date: str | None):
    """Record an expense.

    Examples:
        pocketledger entry add "Corner Market" --amount 84.50 --category Groceries
        pocketledger entry add Taxi --amount 120 --category Transport --date yesterday
    """
    total = parse_amount_or_exit(ctx, amount)
    day = parse_date_or_exit(ctx, entry_date)

    service = EntryService(get_store(ctx), get_clock(ctx))
    try:
        entry = service.add_entry(merchant=merchant, total=total, category=category, entry_date=day)
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)

    click.echo(f"Recorded {entry.merchant} ({entry.id})")
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  Amount: {format_money(entry.total, entry.currency)}")
    click.echo(f"  Category: {entry.category}")


@entry_group.command("list")
@click.option("--search", help="Text to look for in merchant or category")
@click.option("--category", help="Exact category label")
@click.option("--start-date", help="Earliest date (inclusive)")
@click.option("--end-date", help="Latest date (inclusive)")
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum entries to show")
@click.pass_context
def list_entries(ctx, search, category, start_date, end_date, limit: int):
    """List the ledger, installments included, newest first."""
    start = parse_date_or_exit(ctx, start_date, "start date")
    end = parse_date_or_exit(ctx, end_date, "end date")

    dashboard = DashboardService(get_store(ctx), get_clock(ctx))
    entries = dashboard.search_ledger(search, category, start, end)[:limit]
    if not entries:
        click.echo("No entries found.")
        return

    for day, day_entries in group_by_date(entries):
        click.echo(f"\n{day.isoformat()}")
        for entry in day_entries:
            marker = "*" if entry.is_virtual else " "
            click.echo(
                f" {marker} {entry.merchant:<40} {entry.category:<20} "
                f"{format_money(entry.total, entry.currency):>14}"
            )
    if any(e.is_virtual for e in entries):
        click.echo("\n* projected installment")


@entry_group.command("remove")
@click.argument("entry_id")
@click.pass_context
def remove_entry(ctx, entry_id: str):
    """Delete a recorded expense."""
    service = EntryService(get_store(ctx), get_clock(ctx))
    try:
        service.remove_entry(entry_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)
    click.echo(f"Removed entry {entry_id}")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
