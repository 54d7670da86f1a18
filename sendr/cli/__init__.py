import click

from sendr.core.logging_config import configure_logging

from .create_tables import create_tables
from .place_order import place_order
from .seed_demo import seed_demo


@click.group()
@click.option('--log-level', default=None, help='Overrides LOG_LEVEL')
def cli(log_level):
    """Sendr storefront maintenance commands"""
    configure_logging(log_level)


cli.add_command(create_tables)
cli.add_command(seed_demo)
cli.add_command(place_order)
