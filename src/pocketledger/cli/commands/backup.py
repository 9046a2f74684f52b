"""Backup export and import commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.helpers import get_store, refresh
from pocketledger.domain.errors import DomainError
from pocketledger.services.backup import BackupService


@click.group()
def backup_group():
    """Export and restore all data."""
    pass


@backup_group.command("export")
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@click.pass_context
def export_backup(ctx, path: str):
    """Write a JSON backup of all data."""
    target = BackupService(get_store(ctx)).export_to(path)
    click.echo(f"Exported backup to {target}")


@backup_group.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_backup(ctx, path: str, yes: bool):
    """Replace all data with a JSON backup.

    The backup is validated before anything is replaced.
    """
    if not yes:
        click.confirm("This replaces all existing data. Continue?", abort=True)
    try:
        snapshot = BackupService(get_store(ctx)).import_from(path)
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)
    click.echo(
        f"Imported {len(snapshot.entries)} entries, {len(snapshot.plans)} plans "
        f"and {len(snapshot.subscriptions)} subscriptions"
    )


def register_commands(cli):
    """Register backup commands with main CLI."""
    cli.add_command(backup_group, name="backup")
