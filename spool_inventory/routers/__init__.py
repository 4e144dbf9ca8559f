# spool_inventory/routers/__init__.py

from .inventory.filament_router import router as filament_router
from .inventory.location_router import router as location_router
from .inventory.printer_router import router as printer_router
from .inventory.bundle_router import router as bundle_router
from .inventory.scan_router import router as scan_router


__all__ = [
"filament_router",
"location_router",
"printer_router",
"bundle_router",
"scan_router",
]
