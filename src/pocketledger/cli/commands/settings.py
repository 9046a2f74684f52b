"""Settings commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.helpers import format_money, get_store, parse_amount_or_exit, refresh
from pocketledger.domain.errors import DomainError
from pocketledger.services.settings import SettingsService


@click.group()
def settings_group():
    """View and change settings."""
    pass


@settings_group.command("show")
@click.pass_context
def show_settings(ctx):
    """Show current settings."""
    service = SettingsService(get_store(ctx))
    click.echo(f"Budget:        {format_money(service.get_budget())}")
    click.echo(f"Statement day: {service.get_statement_day()}")
    click.echo(f"Theme:         {service.get_theme().value}")
    user = service.get_user()
    if user is not None:
        click.echo(f"Profile:       {user.name} {user.surname}".rstrip())


@settings_group.command("budget")
@click.argument("amount")
@click.pass_context
def set_budget(ctx, amount: str):
    """Set the global budget per billing period."""
    value = parse_amount_or_exit(ctx, amount)
    try:
        SettingsService(get_store(ctx)).set_budget(value)
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)
    click.echo(f"Budget set to {format_money(value)}")


@settings_group.command("statement-day")
@click.argument("day", type=int)
@click.pass_context
def set_statement_day(ctx, day: int):
    """Set the card statement day (1-31) billing periods start on."""
    try:
        SettingsService(get_store(ctx)).set_statement_day(day)
    except DomainError as e:
        handle_domain_error(ctx, e)
    period = refresh(ctx).derived.period
    click.echo(f"Statement day set to {day}")
    click.echo(f"Current period: {period.start} to {period.end}")


@settings_group.command("theme")
@click.pass_context
def toggle_theme(ctx):
    """Switch between light and dark theme."""
    theme = SettingsService(get_store(ctx)).toggle_theme()
    click.echo(f"Theme set to {theme.value}")


@settings_group.command("profile")
@click.option("--name", help="First name")
@click.option("--surname", help="Last name")
@click.option("--email", help="Email address")
@click.option("--avatar", help="Avatar URL")
@click.pass_context
def update_profile(ctx, name, surname, email, avatar):
    """Update the display profile."""
    try:
        user = SettingsService(get_store(ctx)).update_user(
            name=name, surname=surname, email=email, avatar=avatar
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Profile updated for {user.name}")


def register_commands(cli):
    """Register settings commands with main CLI."""
    cli.add_command(settings_group, name="settings")
