import click

from catalog.infrastructure.cli.context import AppContext
from catalog.infrastructure.cli.product_commands import (
    product_clear,
    product_create,
    product_delete,
    product_get,
    product_list,
    product_update,
)
from catalog.infrastructure.config import Settings
from catalog.infrastructure.logging_config import setup_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Catalog — product store with a Redis cache in front"""
    if ctx.obj is None:
        settings = Settings.from_env()
        setup_logging(settings.log_level, settings.log_file)
        ctx.obj = AppContext(settings=settings)


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
product.add_command(product_clear)
product.add_command(product_create)
product.add_command(product_delete)
product.add_command(product_get)
product.add_command(product_list)
product.add_command(product_update)
