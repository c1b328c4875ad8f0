"""
Admin account commands.

The first console account has to be created here: registering through the
API already requires an admin session.

Usage:
    schoolcms admin create --username principal     # prompts for the password
    schoolcms admin delete --username principal
"""

import asyncio
from typing import Any

import click

from ...errors import SchoolCMSError, ValidationError
from ...services import AdminService, DatabaseService, SqlStore
from ...services.database import AdminRow


async def _run(url: str | None, action: str, payload: dict[str, Any]) -> dict[str, Any]:
    db = DatabaseService(url) if url else DatabaseService.from_settings()
    try:
        await db.create_all()
        admins = AdminService(SqlStore(db, AdminRow))
        if action == "create":
            return await admins.register(payload)
        return await admins.delete(payload)
    finally:
        await db.dispose()


def _report(error: SchoolCMSError) -> None:
    click.secho(f"✗ {error.message}", fg="red")
    if isinstance(error, ValidationError):
        for field_error in error.errors:
            click.echo(f"  {field_error.field}: {field_error.message}")


@click.command("create")
@click.option("--username", prompt=True, help="Login name (at least 5 characters)")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True, help="At least 8 characters")
@click.option("--url", default=None, help="Database URL (overrides DATABASE__URL)")
def create(username: str, password: str, url: str | None):
    """Create an admin account."""
    try:
        admin = asyncio.run(_run(url, "create", {"username": username, "password": password}))
    except SchoolCMSError as e:
        _report(e)
        raise click.Abort() from e
    click.secho(f"✓ Admin created: {admin['username']} (id={admin['id']})", fg="green")


@click.command("delete")
@click.option("--username", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
@click.option("--url", default=None, help="Database URL (overrides DATABASE__URL)")
def delete(username: str, password: str, url: str | None):
    """Delete an admin account (its password is required)."""
    try:
        admin = asyncio.run(_run(url, "delete", {"username": username, "password": password}))
    except SchoolCMSError as e:
        _report(e)
        raise click.Abort() from e
    click.secho(f"✓ Admin deleted: {admin['username']}", fg="green")


def register_commands(admin_group):
    """Register admin commands."""
    admin_group.add_command(create)
    admin_group.add_command(delete)
