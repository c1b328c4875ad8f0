"""
Admin Service - console account management.

Handles account creation, credential checks and removal. Passwords are
stored as PBKDF2 hashes with a per-account salt. Session cookies are
issued by the web layer; this service only answers "is this a valid
admin?".
"""

from typing import Any

from loguru import logger

from ..errors import AuthenticationError, FieldError, ValidationError
from ..models.entities import AdminCredentials, AdminRegister
from ..utils.passwords import hash_password, verify_password
from .lifecycle.manager import RecordStore
from .validation import validate_payload


def public(admin: dict[str, Any]) -> dict[str, Any]:
    return {"id": admin["id"], "username": admin["username"]}


class AdminService:
    """Service for managing admin accounts."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def get_by_username(self, username: str) -> dict[str, Any] | None:
        admins = await self.store.find_many(None, filters={"username": username}, limit=1)
        return admins[0] if admins else None

    async def register(self, payload: Any) -> dict[str, Any]:
        """
        Create an admin account.

        Raises:
            ValidationError: Bad payload or the username is taken
        """
        credentials = validate_payload(AdminRegister, payload)
        if await self.get_by_username(credentials.username):
            raise ValidationError(
                [FieldError(field="username", message="Username already exists")],
                "User already exists with this username. Please try a different username",
            )

        password_hash, salt = hash_password(credentials.password)
        admin_id = await self.store.insert(
            {"username": credentials.username, "password_hash": password_hash, "salt": salt}
        )
        logger.info(f"Created admin: {credentials.username}")
        return {"id": admin_id, "username": credentials.username}

    async def authenticate(self, payload: Any) -> dict[str, Any]:
        """
        Check credentials.

        Raises:
            AuthenticationError: Unknown user or wrong password (same message for both)
        """
        credentials = validate_payload(AdminCredentials, payload)
        admin = await self.get_by_username(credentials.username)
        if admin is None or not verify_password(credentials.password, admin["password_hash"], admin["salt"]):
            logger.warning(f"Failed login for {credentials.username}")
            raise AuthenticationError("Invalid credentials")
        return public(admin)

    async def delete(self, payload: Any) -> dict[str, Any]:
        """Delete an account after re-checking its password."""
        admin = await self.authenticate(payload)
        await self.store.delete_by_id(admin["id"])
        logger.info(f"Deleted admin: {admin['username']}")
        return admin
