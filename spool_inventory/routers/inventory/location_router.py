# spool_inventory/routers/inventory/location_router.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from spool_inventory.core.db import get_db
from spool_inventory.schemas.inventory.filament_schemas import FilamentListData
from spool_inventory.schemas.inventory.location_schemas import (
    LocationCreate,
    LocationRename,
    LocationTreeData,
    LocationRemoveData,
)
from spool_inventory.services.inventory.bundle_store_service import save_repository
from spool_inventory.services.inventory.inventory_repository import InventoryRepository
from spool_inventory.utils.get_repository import get_repository
from spool_inventory.utils.response import APIResponse, list_data, success_response
import logging

router = APIRouter(prefix="/inventory/locations", tags=["Locations"])
logger = logging.getLogger(__name__)


def _tree_data(repo: InventoryRepository) -> LocationTreeData:
    return LocationTreeData(tree=repo.bundle.storage_tree, paths=repo.location_paths())


@router.get("/", response_model=APIResponse[LocationTreeData])
async def get_location_tree_api(
    repo: InventoryRepository = Depends(get_repository),
):
    return success_response("Locations fetched successfully", _tree_data(repo))


@router.post("/", response_model=APIResponse[LocationTreeData])
async def add_location_api(
    payload: LocationCreate,
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    logger.info("Add location", extra={"parent_path": payload.parent_path})
    repo.add_location(payload.parent_path, payload.name)
    await save_repository(db, repo)
    return success_response("Location created successfully", _tree_data(repo))


@router.patch("/rename", response_model=APIResponse[LocationTreeData])
async def rename_location_api(
    payload: LocationRename,
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    repo.rename_location(payload.path, payload.new_name)
    await save_repository(db, repo)
    return success_response("Location renamed successfully", _tree_data(repo))


@router.delete("/", response_model=APIResponse[LocationRemoveData])
async def remove_location_api(
    path: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    removed, cleared = repo.remove_location(path)
    await save_repository(db, repo)
    return success_response(
        "Location removed successfully",
        LocationRemoveData(removed_paths=removed, cleared_filaments=cleared),
    )


@router.get("/dangling", response_model=APIResponse[FilamentListData])
async def list_dangling_filaments_api(
    repo: InventoryRepository = Depends(get_repository),
):
    """Spools whose stored location is no longer in the tree; they read as unsorted."""
    return success_response("Dangling filaments fetched successfully", list_data(repo.dangling_items()))
