"""Subscription commands."""

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
from pocketledger.domain.entities import BillingCycle
from pocketledger.domain.errors import DomainError
from pocketledger.services.subscriptions import SubscriptionService


@click.group()
def subscription_group():
    """Manage recurring subscriptions."""
    pass


@subscription_group.command("add")
@click.argument("platform")
@click.option("--amount", required=True, help="Amount charged per cycle")
@click.option(
    "--cycle",
    type=click.Choice([c.value for c in BillingCycle], case_sensitive=False),
    default=BillingCycle.MONTHLY.value,
    show_default=True,
    help="Billing cycle",
)
@click.option("--first-payment", help="First payment date (defaults to today)")
@click.option("--next-payment", help="Next payment date (defaults to the first payment)")
@click.pass_context
def add_subscription(ctx, platform: str, amount: str, cycle: str, first_payment, next_payment):
    """Add a subscription.

    Past cycles between the next payment date and today are posted as
    expenses right away.

    Examples:
        pocketledger subscription add Netflix --amount 149.99
        pocketledger subscription add "Cloud Storage" --amount 400 --cycle yearly
    """
    price = parse_amount_or_exit(ctx, amount)
    first = parse_date_or_exit(ctx, first_payment, "first payment date")
    upcoming = parse_date_or_exit(ctx, next_payment, "next payment date")

    service = SubscriptionService(get_store(ctx), get_clock(ctx))
    try:
        sub = service.create_subscription(
            platform=platform,
            amount=price,
            first_payment_date=first,
            billing_cycle=BillingCycle(cycle.lower()),
            next_payment_date=upcoming,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    result = refresh(ctx)

    click.echo(f"Created subscription '{sub.platform}' (ID: {sub.id})")
    posted = [e for e in result.renewals.created if e.merchant == sub.platform]
    if posted:
        click.echo(f"  Posted {len(posted)} past payment(s)")


@subscription_group.command("list")
@click.pass_context
def list_subscriptions(ctx):
    """List subscriptions and their monthly cost."""
    refresh(ctx)
    service = SubscriptionService(get_store(ctx), get_clock(ctx))
    subs = service.list_subscriptions()
    if not subs:
        click.echo("No subscriptions.")
        return

    for sub in subs:
        state = "" if sub.is_active else " [paused]"
        click.echo(
            f"  {sub.platform:<30} {format_money(sub.amount, sub.currency):>14} "
            f"{sub.billing_cycle.value:<8} next {sub.next_payment_date}{state}  (ID: {sub.id})"
        )
    click.echo(f"\nMonthly cost: {format_money(service.monthly_cost())}")


def _set_active(ctx, subscription_id: str, is_active: bool) -> None:
    service = SubscriptionService(get_store(ctx), get_clock(ctx))
    try:
        sub = service.set_active(subscription_id, is_active)
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)
    click.echo(f"{'Resumed' if is_active else 'Paused'} subscription '{sub.platform}'")


@subscription_group.command("pause")
@click.argument("subscription_id")
@click.pass_context
def pause_subscription(ctx, subscription_id: str):
    """Stop posting renewals for a subscription."""
    _set_active(ctx, subscription_id, False)


@subscription_group.command("resume")
@click.argument("subscription_id")
@click.pass_context
def resume_subscription(ctx, subscription_id: str):
    """Resume a paused subscription.

    Cycles missed while paused are posted on the next pass.
    """
    _set_active(ctx, subscription_id, True)


@subscription_group.command("remove")
@click.argument("subscription_id")
@click.pass_context
def remove_subscription(ctx, subscription_id: str):
    """Delete a subscription. Payments already posted are kept."""
    service = SubscriptionService(get_store(ctx), get_clock(ctx))
    try:
        service.remove_subscription(subscription_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)
    click.echo(f"Removed subscription {subscription_id}")


def register_commands(cli):
    """Register subscription commands with main CLI."""
    cli.add_command(subscription_group, name="subscription")
