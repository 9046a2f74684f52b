"""Category management commands."""

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.cli.helpers import format_money, get_store, parse_amount_or_exit, refresh
from pocketledger.domain.errors import DomainError
from pocketledger.services.categories import CategoryService


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List categories with their monthly limits."""
    service = CategoryService(get_store(ctx))
    categories = service.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for category in categories:
        limit = format_money(category.effective_limit)
        click.echo(f"  {category.name:<30} {limit:>14}  (ID: {category.id})")


@category_group.command("create")
@click.argument("name")
@click.option("--icon", default="sell", show_default=True, help="Icon token")
@click.option("--color", default="#94a3b8", show_default=True, help="Color token")
@click.option("--limit", "budget_limit", help="Monthly budget limit")
@click.pass_context
def create_category(ctx, name: str, icon: str, color: str, budget_limit: str | None):
    """Create a new category."""
    limit = parse_amount_or_exit(ctx, budget_limit)
    service = CategoryService(get_store(ctx))
    try:
        category = service.create_category(name=name, icon=icon, color=color, budget_limit=limit)
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)
    click.echo(f"Created category '{category.name}' (ID: {category.id})")


@category_group.command("update")
@click.argument("category_id")
@click.option("--name", help="New name")
@click.option("--icon", help="New icon token")
@click.option("--color", help="New color token")
@click.option("--limit", "budget_limit", help="New monthly budget limit")
@click.pass_context
def update_category(ctx, category_id: str, name, icon, color, budget_limit):
    """Update a category.

    Entries keep their category label; renaming a category stops them from
    joining to it.
    """
    limit = parse_amount_or_exit(ctx, budget_limit)
    service = CategoryService(get_store(ctx))
    try:
        category = service.update_category(
            category_id, name=name, icon=icon, color=color, budget_limit=limit
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)
    click.echo(f"Updated category '{category.name}' (ID: {category.id})")


@category_group.command("remove")
@click.argument("category_id")
@click.pass_context
def remove_category(ctx, category_id: str):
    """Delete a category. Its entries count as unmatched spend."""
    service = CategoryService(get_store(ctx))
    try:
        service.remove_category(category_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    refresh(ctx)
    click.echo(f"Removed category {category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
