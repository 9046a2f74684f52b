"""Main CLI entry point."""

import logging

import click

from pocketledger.database.factories import create_sqlite_store
from pocketledger.utils.clock import Clock

# Import and register all commands at module level
from pocketledger.cli.commands import (
    backup,
    budget,
    category,
    entry,
    notification,
    plan,
    settings,
    subscription,
    trend,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides POCKETLEDGER_DB_PATH environment variable)",
    envvar="POCKETLEDGER_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Pocketledger - Personal spending tracker.

    Record expenses, track subscriptions and installment plans, and follow
    your spending against a budget aligned to your card statement.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Open the store only when actually running a command (not for help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.obj.setdefault("clock", Clock())
        ctx.call_on_close(store.disconnect)


# Register all commands
entry.register_commands(cli)
category.register_commands(cli)
plan.register_commands(cli)
subscription.register_commands(cli)
budget.register_commands(cli)
trend.register_commands(cli)
notification.register_commands(cli)
settings.register_commands(cli)
backup.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
