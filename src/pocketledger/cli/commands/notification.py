"""Notification commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.helpers import get_store, refresh
from pocketledger.domain.errors import DomainError
from pocketledger.services.notifications import NotificationService


@click.group()
def notification_group():
    """Show and acknowledge reminders and budget alerts."""
    pass


@notification_group.command("list")
@click.option("--unread", is_flag=True, help="Only show unread notifications")
@click.pass_context
def list_notifications(ctx, unread: bool):
    """List current notifications."""
    refresh(ctx)
    service = NotificationService(get_store(ctx))
    notifications = service.list_notifications(unread_only=unread)
    if not notifications:
        click.echo("No notifications.")
        return

    for n in notifications:
        marker = " " if n.read else "*"
        click.echo(f"{marker} [{n.type.value}] {n.title}: {n.message}")
        click.echo(f"    {n.id}")


@notification_group.command("read")
@click.argument("notification_id", required=False)
@click.option("--all", "read_all", is_flag=True, help="Mark every notification read")
@click.pass_context
def mark_read(ctx, notification_id: str | None, read_all: bool):
    """Mark a notification (or all of them) read."""
    service = NotificationService(get_store(ctx))
    if read_all:
        count = service.mark_all_read()
        click.echo(f"Marked {count} notification(s) read")
        return
    if notification_id is None:
        click.echo("Error: Give a notification ID or --all", err=True)
        ctx.exit(1)
    try:
        service.mark_read(notification_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Marked {notification_id} read")


@notification_group.command("clear")
@click.pass_context
def clear_notifications(ctx):
    """Remove all notifications."""
    NotificationService(get_store(ctx)).clear()
    click.echo("Cleared notifications")


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(notification_group, name="notifications")
