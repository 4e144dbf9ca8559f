from spool_inventory.constants.error_codes import ErrorCode
from spool_inventory.constants.scan_codes import SCAN_SEPARATOR, ScanKind
from spool_inventory.core.exceptions import AppException
from spool_inventory.schemas.inventory.scan_schemas import ScanResult
from spool_inventory.services.inventory.inventory_repository import InventoryRepository
import logging

logger = logging.getLogger(__name__)


def encode_scan_code(kind: ScanKind, payload: str) -> str:
    return f"{kind.value}{SCAN_SEPARATOR}{payload}"


def resolve_scan(repo: InventoryRepository, scanned: str) -> ScanResult:
    kind_text, sep, payload = (scanned or "").partition(SCAN_SEPARATOR)
    if not sep:
        raise AppException(
            400,
            f"Unknown code format: {scanned}",
            ErrorCode.SCAN_CODE_UNKNOWN,
        )

    try:
        kind = ScanKind(kind_text)
    except ValueError:
        raise AppException(
            400,
            f"Unknown code format: {scanned}",
            ErrorCode.SCAN_CODE_UNKNOWN,
        )

    if kind is ScanKind.SPOOL:
        if not repo.has_item(payload):
            raise AppException(
                404,
                "Spool not found",
                ErrorCode.SCAN_TARGET_NOT_FOUND,
                {"id": payload},
            )
        return ScanResult(kind=kind, target=payload, filament=repo.get_item(payload))

    # Empty location payload selects the whole inventory
    if payload and payload not in repo.location_paths():
        raise AppException(
            404,
            "Location not found",
            ErrorCode.SCAN_TARGET_NOT_FOUND,
            {"path": payload},
        )

    logger.debug("Location scanned", extra={"location": payload})
    return ScanResult(
        kind=kind,
        target=payload,
        filaments=repo.list_items(location=payload or None),
    )
