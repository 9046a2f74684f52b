"""Spending trend command."""

import click

from pocketledger.cli.helpers import format_money, refresh
from pocketledger.domain.entities import TrendMode


@click.command("trend")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in TrendMode], case_sensitive=False),
    default=TrendMode.MONTHLY.value,
    show_default=True,
    help="Reporting window",
)
@click.option("--path", "show_path", is_flag=True, help="Print the SVG chart path")
@click.pass_context
def trend(ctx, mode: str, show_path: bool):
    """Compare spending with the previous window."""
    report = refresh(ctx).derived.trends[TrendMode(mode.lower())]

    click.echo(f"Window:   {report.window.start} to {report.window.end}")
    click.echo(f"Previous: {report.previous_window.start} to {report.previous_window.end}")
    click.echo(f"Spent:    {format_money(report.current_total)}")
    click.echo(f"Before:   {format_money(report.previous_total)}")
    sign = "+" if report.percent_change > 0 else ""
    click.echo(f"Change:   {sign}{report.percent_change:.1f}%")

    click.echo()
    for point in report.points:
        if point.label or point.value:
            click.echo(f"  {point.label or point.start.isoformat():<12} {format_money(point.value):>14}")

    if report.category_totals:
        click.echo("\nTop categories:")
        for name, total in report.category_totals[:5]:
            click.echo(f"  {name:<30} {format_money(total):>14}")

    if show_path:
        click.echo(f"\n{report.path}")


def register_commands(cli):
    """Register trend command with main CLI."""
    cli.add_command(trend)
