from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from spool_inventory.core.db import get_db
from spool_inventory.services.inventory.bundle_store_service import load_repository
from spool_inventory.services.inventory.inventory_repository import InventoryRepository


async def get_repository(
    db: AsyncSession = Depends(get_db),
) -> InventoryRepository:
    return await load_repository(db)
