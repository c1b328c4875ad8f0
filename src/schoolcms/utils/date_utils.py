"""Date helpers shared by models and stores."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Naive UTC timestamp, matching what the database columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
