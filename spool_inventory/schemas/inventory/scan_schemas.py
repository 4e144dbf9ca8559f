from typing import List, Optional
from pydantic import BaseModel, Field

from spool_inventory.constants.scan_codes import ScanKind
from spool_inventory.schemas.inventory.filament_schemas import Filament


class ScanRequest(BaseModel):
    code: str = Field(..., min_length=1)


class ScanResult(BaseModel):
    kind: ScanKind
    target: str
    filament: Optional[Filament] = None
    filaments: List[Filament] = Field(default_factory=list)
