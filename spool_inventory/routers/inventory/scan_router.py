# spool_inventory/routers/inventory/scan_router.py

from fastapi import APIRouter, Depends

from spool_inventory.schemas.inventory.scan_schemas import ScanRequest, ScanResult
from spool_inventory.services.inventory.inventory_repository import InventoryRepository
from spool_inventory.services.inventory.scan_service import resolve_scan
from spool_inventory.utils.get_repository import get_repository
from spool_inventory.utils.response import APIResponse, success_response

router = APIRouter(prefix="/inventory/scan", tags=["Scan"])


@router.post("/", response_model=APIResponse[ScanResult])
async def scan_code_api(
    payload: ScanRequest,
    repo: InventoryRepository = Depends(get_repository),
):
    return success_response("Code resolved successfully", resolve_scan(repo, payload.code))
