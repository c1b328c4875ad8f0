"""
SchoolCMS Utilities

- date_utils: UTC timestamps matching the database columns
- passwords: PBKDF2 password hashing for admin accounts
"""

from .date_utils import utc_now
from .passwords import hash_password, verify_password

__all__ = [
    "utc_now",
    "hash_password",
    "verify_password",
]
