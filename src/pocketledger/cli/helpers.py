"""Shared CLI helpers: context access, parsing and formatting."""

from datetime import date
from decimal import Decimal

import click

from pocketledger.database.base import Store
from pocketledger.domain.engine import Recomputation
from pocketledger.domain.entities import DEFAULT_CURRENCY
from pocketledger.services.dashboard import DashboardService
from pocketledger.utils.amount_parser import parse_amount
from pocketledger.utils.clock import Clock
from pocketledger.utils.date_parser import parse_date


def get_store(ctx: click.Context) -> Store:
    return ctx.obj["store"]


def get_clock(ctx: click.Context) -> Clock:
    return ctx.obj["clock"]


def refresh(ctx: click.Context) -> Recomputation:
    """Run a recomputation pass after a state change."""
    return DashboardService(get_store(ctx), get_clock(ctx)).refresh()


def parse_date_or_exit(ctx: click.Context, value: str | None, label: str = "date") -> date | None:
    """Parse a CLI date relative to the context clock, exiting on bad input."""
    if value is None:
        return None
    try:
        return parse_date(value, today=get_clock(ctx).today())
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, value: str | None) -> Decimal | None:
    """Parse a CLI amount, exiting on bad input."""
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def format_money(amount: Decimal, currency: str = DEFAULT_CURRENCY) -> str:
    return f"{currency}{amount:,.2f}"
