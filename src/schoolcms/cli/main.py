"""
SchoolCMS CLI entry point.

Usage:
    schoolcms serve --reload
    schoolcms db init
    schoolcms db drop --yes
    schoolcms admin create --username principal
    schoolcms admin delete --username principal
"""

import sys

import click
from loguru import logger


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool):
    """SchoolCMS - school website content management."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


@cli.group()
def db():
    """Database operations (create and drop tables)."""
    pass


@cli.group()
def admin():
    """Admin console accounts."""
    pass


# Register commands
from .commands.admin import register_commands as register_admin_commands
from .commands.db import register_commands as register_db_commands
from .commands.serve import register_command as register_serve_command

register_db_commands(db)
register_admin_commands(admin)
register_serve_command(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
