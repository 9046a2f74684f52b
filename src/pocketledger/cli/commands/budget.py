"""Budget summary command."""

import click

from pocketledger.cli.helpers import format_money, refresh
from pocketledger.domain.budget import budget_status
from pocketledger.domain.entities import BudgetStatus

STATUS_LABELS = {
    BudgetStatus.UNDER_BUDGET: "",
    BudgetStatus.AT_RISK: "at risk",
    BudgetStatus.OVER_BUDGET: "OVER",
}


@click.command("summary")
@click.option("--all", "show_all", is_flag=True, help="Include categories with no spend")
@click.pass_context
def summary(ctx, show_all: bool):
    """Show spending against budget for the current billing period."""
    result = refresh(ctx)
    budget = result.derived.budget
    period = budget.period

    click.echo(f"Billing period: {period.start} to {period.end} ({period.days} days)")
    click.echo(f"Budget:    {format_money(budget.budget):>16}")
    click.echo(f"Spent:     {format_money(budget.total_spent):>16}")
    click.echo(f"Remaining: {format_money(budget.remaining):>16}")

    rows = [row for row in budget.categories if show_all or row.spent > 0]
    if not rows:
        click.echo("\nNo spending this period.")
        return

    click.echo()
    for row in rows:
        status = STATUS_LABELS[budget_status(row.spent, row.limit)]
        click.echo(
            f"  {row.category.name:<30} {format_money(row.spent):>14} / "
            f"{format_money(row.limit):>14}  {status}".rstrip()
        )

    created = result.renewals.created
    if created:
        click.echo(f"\nPosted {len(created)} subscription renewal(s) this pass.")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
