# spool_inventory/routers/inventory/bundle_router.py

from typing import Any, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from spool_inventory.constants.error_codes import ErrorCode
from spool_inventory.core.db import get_db
from spool_inventory.core.exceptions import AppException
from spool_inventory.schemas.inventory.bundle_schemas import (
    ColorCodeInfo,
    ImportPreview,
    ImportRequest,
    InventoryStatistics,
)
from spool_inventory.services.inventory.bundle_store_service import save_repository
from spool_inventory.services.inventory.inventory_repository import InventoryRepository
from spool_inventory.utils.get_repository import get_repository
from spool_inventory.utils.response import APIResponse, success_response
import logging

router = APIRouter(prefix="/inventory/bundle", tags=["Bundle"])
logger = logging.getLogger(__name__)


def _require_confirmation(confirm: bool, action: str) -> None:
    if not confirm:
        raise AppException(
            400,
            f"{action} replaces the whole inventory and must be confirmed",
            ErrorCode.CONFIRMATION_REQUIRED,
        )


@router.get("/export")
async def export_bundle_api(
    repo: InventoryRepository = Depends(get_repository),
):
    # Bare document, so the response body is the backup file itself
    return repo.to_document()


@router.post("/import/preview", response_model=APIResponse[ImportPreview])
async def preview_import_api(
    document: Any = Body(...),
):
    preview = InventoryRepository.preview_import(document)
    return success_response("Import preview generated", preview)


@router.post("/import", response_model=APIResponse[ImportPreview])
async def import_bundle_api(
    payload: ImportRequest,
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    _require_confirmation(payload.confirm, "Import")
    summary = repo.replace(payload.document)
    await save_repository(db, repo)
    logger.info("Bundle imported", extra={"filaments": summary.filament_count})
    return success_response("Inventory imported successfully", summary)


@router.post("/reset", response_model=APIResponse[None])
async def reset_bundle_api(
    confirm: bool = Body(False, embed=True),
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    _require_confirmation(confirm, "Reset")
    repo.reset()
    await save_repository(db, repo)
    return success_response("Inventory reset successfully")


@router.get("/colors", response_model=APIResponse[List[ColorCodeInfo]])
async def color_legend_api(
    repo: InventoryRepository = Depends(get_repository),
):
    return success_response("Color codes fetched successfully", repo.color_legend())


@router.get("/statistics", response_model=APIResponse[InventoryStatistics])
async def statistics_api(
    repo: InventoryRepository = Depends(get_repository),
):
    return success_response("Statistics fetched successfully", repo.statistics())
