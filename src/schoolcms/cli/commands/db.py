"""
Database management commands.

Usage:
    schoolcms db init                 # Create missing tables
    schoolcms db drop --yes           # Drop every table
"""

import asyncio

import click
from loguru import logger

from ...services.database import DatabaseService


async def _init(url: str | None) -> None:
    db = DatabaseService(url) if url else DatabaseService.from_settings()
    try:
        await db.create_all()
    finally:
        await db.dispose()


async def _drop(url: str | None) -> None:
    db = DatabaseService(url) if url else DatabaseService.from_settings()
    try:
        await db.drop_all()
    finally:
        await db.dispose()


@click.command("init")
@click.option("--url", default=None, help="Database URL (overrides DATABASE__URL)")
def init(url: str | None):
    """Create all tables that do not exist yet."""
    asyncio.run(_init(url))
    click.secho("✓ Tables created", fg="green")


@click.command("drop")
@click.option("--url", default=None, help="Database URL (overrides DATABASE__URL)")
@click.confirmation_option("--yes", prompt="Drop every SchoolCMS table?")
def drop(url: str | None):
    """Drop all tables (data is lost)."""
    asyncio.run(_drop(url))
    logger.warning("All tables dropped")
    click.secho("✓ Tables dropped", fg="yellow")


def register_commands(db_group):
    """Register db commands."""
    db_group.add_command(init)
    db_group.add_command(drop)
