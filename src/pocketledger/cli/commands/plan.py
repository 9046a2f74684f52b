"""Installment plan commands."""

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
from pocketledger.services.plans import PlanService


@click.group()
def plan_group():
    """Manage installment plans."""
    pass


@plan_group.command("add")
@click.argument("title")
@click.option("--total", required=True, help="Total amount to pay")
@click.option("--installments", required=True, type=int, help="Number of monthly installments")
@click.option("--start-date", help="First installment date (defaults to today)")
@click.option("--icon", default="credit_card", show_default=True, help="Icon token")
@click.pass_context
def add_plan(ctx, title: str, total: str, installments: int, start_date: str | None, icon: str):
    """Add an installment plan.

    Examples:
        pocketledger plan add Laptop --total 12000 --installments 12 --start-date 2024-01-15
    """
    amount = parse_amount_or_exit(ctx, total)
    start = parse_date_or_exit(ctx, start_date, "start date")
    service = PlanService(get_store(ctx), get_clock(ctx))
    try:
        plan = service.create_plan(
            title=title,
            total_amount=amount,
            total_installments=installments,
            start_date=start,
            icon=icon,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)
    click.echo(f"Created plan '{plan.title}' (ID: {plan.id})")
    click.echo(f"  Monthly payment: {format_money(plan.monthly_payment)}")


@plan_group.command("list")
@click.pass_context
def list_plans(ctx):
    """Show plan progress, outstanding debt and monthly outflow."""
    service = PlanService(get_store(ctx), get_clock(ctx))
    overview = service.overview()
    if not overview.active and not overview.completed:
        click.echo("No installment plans.")
        return

    click.echo(f"Outstanding debt: {format_money(overview.outstanding_debt)}")
    click.echo(f"Monthly outflow:  {format_money(overview.monthly_outflow)}")

    if overview.active:
        click.echo("\nActive:")
        for progress in overview.active:
            plan = progress.plan
            click.echo(
                f"  {plan.title:<30} {progress.current_installment}/{plan.total_installments}"
                f"  {format_money(progress.remaining_amount):>14} left"
                f"  next {progress.next_payment_date} ({progress.days_left} days)"
                f"  (ID: {plan.id})"
            )
    if overview.completed:
        click.echo("\nCompleted:")
        for progress in overview.completed:
            click.echo(f"  {progress.plan.title:<30} (ID: {progress.plan.id})")


@plan_group.command("remove")
@click.argument("plan_id")
@click.pass_context
def remove_plan(ctx, plan_id: str):
    """Delete a plan and its projected installments."""
    service = PlanService(get_store(ctx), get_clock(ctx))
    try:
        service.remove_plan(plan_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)
    click.echo(f"Removed plan {plan_id}")


def register_commands(cli):
    """Register plan commands with main CLI."""
    cli.add_command(plan_group, name="plan")
