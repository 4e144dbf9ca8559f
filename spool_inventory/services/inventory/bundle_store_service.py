from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spool_inventory.core.config import STORE_PROFILE
from spool_inventory.models.inventory.bundle_models import BundleSnapshot
from spool_inventory.services.inventory.inventory_repository import InventoryRepository
import logging

logger = logging.getLogger(__name__)


async def load_repository(
    db: AsyncSession,
    profile: str = STORE_PROFILE,
) -> InventoryRepository:
    """Read the stored bundle, whatever its vintage, into a repository."""
    snapshot = await db.scalar(
        select(BundleSnapshot).where(BundleSnapshot.profile == profile)
    )
    if snapshot is None:
        logger.info("No stored bundle, starting empty", extra={"profile": profile})
        return InventoryRepository()

    return InventoryRepository.from_document(snapshot.payload)


async def save_repository(
    db: AsyncSession,
    repo: InventoryRepository,
    profile: str = STORE_PROFILE,
) -> None:
    """Replace the stored bundle with the repository's current one."""
    document = repo.to_document()

    snapshot = await db.scalar(
        select(BundleSnapshot).where(BundleSnapshot.profile == profile)
    )
    if snapshot is None:
        snapshot = BundleSnapshot(profile=profile)
        db.add(snapshot)

    snapshot.payload = document
    snapshot.schema_version = repo.bundle.id_counters.schema_version
    snapshot.filament_count = len(repo.bundle.filaments)

    await db.commit()
    logger.debug(
        "Bundle saved",
        extra={"profile": profile, "filaments": snapshot.filament_count},
    )
