import click

from inventory.infrastructure.bootstrap import build_inventory
from inventory.infrastructure.cli.product_commands import (
    product_add,
    product_decrement,
    product_delete,
    product_increment,
    product_list,
    product_sell,
    product_show,
    product_type,
    product_update,
)
from inventory.infrastructure.config import get_settings
from inventory.infrastructure.log_config import setup_logging


@click.group()
@click.option("--database", type=click.Path(dir_okay=False), default=None,
              help="SQLite database file (default from settings).")
@click.option("--log-level", default=None, help="Logging level, e.g. INFO.")
@click.pass_context
def cli(ctx: click.Context, database: str | None, log_level: str | None) -> None:
    """Inventory — product stock keeping"""
    settings = get_settings()
    setup_logging(log_level or settings.log_level)

    inventory = build_inventory(settings, database_path=database)
    ctx.obj = inventory
    ctx.call_on_close(inventory.close)


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_decrement)
product.add_command(product_delete)
product.add_command(product_increment)
product.add_command(product_list)
product.add_command(product_sell)
product.add_command(product_show)
product.add_command(product_type)
product.add_command(product_update)
