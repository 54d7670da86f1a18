# sendr/cli/create_tables.py
import asyncio
import click

from sendr.database import create_tables as create_all_tables, engine


@click.command()
def create_tables():
    """Create all database tables directly using SQLAlchemy"""

    async def _create_tables():
        try:
            await create_all_tables()
        finally:
            await engine.dispose()
        click.echo("All tables created successfully!")

    asyncio.run(_create_tables())


if __name__ == "__main__":
    create_tables()
