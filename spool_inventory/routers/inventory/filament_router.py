# spool_inventory/routers/inventory/filament_router.py

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from spool_inventory.core.db import get_db
from spool_inventory.schemas.inventory.filament_schemas import (
    Filament,
    FilamentPayload,
    FilamentWeightUpdate,
    FilamentListData,
    ReidentificationCheck,
)
from spool_inventory.services.inventory.bundle_store_service import save_repository
from spool_inventory.services.inventory.inventory_repository import InventoryRepository
from spool_inventory.utils.get_repository import get_repository
from spool_inventory.utils.response import APIResponse, list_data, success_response
import logging

router = APIRouter(prefix="/inventory/filaments", tags=["Filaments"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=APIResponse[FilamentListData])
async def list_filaments_api(
    repo: InventoryRepository = Depends(get_repository),
    location: Optional[str] = Query(None, description="Location path, or __UNSORTED__"),
    material: Optional[str] = Query(None),
    color: Optional[str] = Query(None),
):
    items = repo.list_items(location=location, material=material, color=color)
    return success_response("Filaments fetched successfully", list_data(items))


@router.post("/", response_model=APIResponse[Filament])
async def create_filament_api(
    payload: FilamentPayload,
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    logger.info("Create filament", extra={"material": payload.material_type})
    filament = repo.create_item(payload)
    await save_repository(db, repo)
    return success_response("Filament created successfully", filament)


@router.get("/{spool_id}", response_model=APIResponse[Filament])
async def get_filament_api(
    spool_id: str,
    repo: InventoryRepository = Depends(get_repository),
):
    return success_response("Filament fetched successfully", repo.get_item(spool_id))


@router.post("/{spool_id}/reidentification-check", response_model=APIResponse[ReidentificationCheck])
async def check_reidentification_api(
    spool_id: str,
    payload: FilamentPayload,
    repo: InventoryRepository = Depends(get_repository),
):
    changes = repo.needs_reidentification(spool_id, payload)
    return success_response(
        "Re-identification check completed",
        ReidentificationCheck(id=spool_id, required=bool(changes), changes=changes),
    )


@router.put("/{spool_id}", response_model=APIResponse[Filament])
async def update_filament_api(
    spool_id: str,
    payload: FilamentPayload,
    confirm_reidentification: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    filament = repo.update_item(spool_id, payload, confirm_reidentification)
    await save_repository(db, repo)
    return success_response("Filament updated successfully", filament)


@router.patch("/{spool_id}/weight", response_model=APIResponse[Filament])
async def update_filament_weight_api(
    spool_id: str,
    payload: FilamentWeightUpdate,
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    filament = repo.update_weight(spool_id, payload.total_weight)
    await save_repository(db, repo)
    return success_response("Weight updated successfully", filament)


@router.get("/{spool_id}/copy", response_model=APIResponse[FilamentPayload])
async def copy_filament_api(
    spool_id: str,
    repo: InventoryRepository = Depends(get_repository),
):
    return success_response("Filament template fetched successfully", repo.copy_template(spool_id))


@router.delete("/{spool_id}", response_model=APIResponse[None])
async def delete_filament_api(
    spool_id: str,
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    repo.delete_item(spool_id)
    await save_repository(db, repo)
    return success_response("Filament deleted successfully")
