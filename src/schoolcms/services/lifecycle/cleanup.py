"""
Best-effort image cleanup.

Deleting a resource removes its files from ImageKit first. That call is a
side effect whose failure must never block or undo the local delete: the
database row is the source of truth and an orphaned remote file is
acceptable cleanup debt. Every failure is logged with the owning record
and discarded here.
"""

from collections.abc import Sequence

from loguru import logger

from ..imagekit import AssetStore


class ImageCleanup:
    """Scoped error boundary around AssetStore.bulk_delete."""

    def __init__(self, assets: AssetStore):
        self.assets = assets

    async def run(self, file_ids: Sequence[str], owner: str) -> bool:
        """
        Delete files, swallowing any failure.

        Args:
            file_ids: ImageKit file ids, in stored order
            owner: Human-readable owner for log lines (e.g. "blog 7")

        Returns:
            True when the asset store accepted the call (or nothing to do)
        """
        if not file_ids:
            return True
        try:
            await self.assets.bulk_delete(list(file_ids))
        except Exception as e:
            # TODO: queue failed ids for a reconciliation job instead of dropping them
            logger.error(f"ImageKit cleanup failed for {owner} (soft fail, {len(file_ids)} file(s) orphaned): {e}")
            return False
        logger.info(f"ImageKit cleanup removed {len(file_ids)} file(s) for {owner}")
        return True
