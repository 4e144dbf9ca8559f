# spool_inventory/routers/inventory/printer_router.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from spool_inventory.core.db import get_db
from spool_inventory.schemas.inventory.printer_schemas import Printer, PrinterCreate, PrinterUpdate
from spool_inventory.services.inventory.bundle_store_service import save_repository
from spool_inventory.services.inventory.inventory_repository import InventoryRepository
from spool_inventory.utils.get_repository import get_repository
from spool_inventory.utils.response import APIResponse, success_response
import logging

router = APIRouter(prefix="/inventory/printers", tags=["Printers"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=APIResponse[List[Printer]])
async def list_printers_api(
    repo: InventoryRepository = Depends(get_repository),
):
    return success_response("Printers fetched successfully", repo.bundle.printers)


@router.post("/", response_model=APIResponse[Printer])
async def create_printer_api(
    payload: PrinterCreate,
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    printer = repo.add_printer(payload)
    await save_repository(db, repo)
    logger.info("Printer created", extra={"printer_id": printer.id})
    return success_response("Printer created successfully", printer)


@router.put("/{printer_id}", response_model=APIResponse[Printer])
async def update_printer_api(
    printer_id: str,
    payload: PrinterUpdate,
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    printer = repo.update_printer(printer_id, payload)
    await save_repository(db, repo)
    return success_response("Printer updated successfully", printer)


@router.delete("/{printer_id}", response_model=APIResponse[List[str]])
async def delete_printer_api(
    printer_id: str,
    db: AsyncSession = Depends(get_db),
    repo: InventoryRepository = Depends(get_repository),
):
    released = repo.delete_printer(printer_id)
    await save_repository(db, repo)
    return success_response("Printer deleted successfully", released)
