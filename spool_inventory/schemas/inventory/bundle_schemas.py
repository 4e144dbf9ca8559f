# spool_inventory/schemas/inventory/bundle_schemas.py

from typing import Any, Dict, List, Tuple
from pydantic import BaseModel, Field

from spool_inventory.constants.inventory import CURRENT_SCHEMA_VERSION
from spool_inventory.schemas.base_schemas import CamelModel
from spool_inventory.schemas.inventory.filament_schemas import Filament
from spool_inventory.schemas.inventory.location_schemas import LocationNode
from spool_inventory.schemas.inventory.printer_schemas import Printer


class TypeCounter(CamelModel):
    next_spool_number: int = 1


class IdCounterState(CamelModel):
    color_map: Dict[str, str] = Field(default_factory=dict)
    next_color_number: int = 1
    type_counters: Dict[str, TypeCounter] = Field(default_factory=dict)
    schema_version: int = CURRENT_SCHEMA_VERSION

    def is_empty(self) -> bool:
        return not self.color_map and not self.type_counters


class Bundle(CamelModel):
    filaments: List[Filament] = Field(default_factory=list)
    storage_tree: List[LocationNode] = Field(default_factory=list)
    id_counters: IdCounterState = Field(default_factory=IdCounterState)
    printers: List[Printer] = Field(default_factory=list)

    def to_document(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ImportPreview(BaseModel):
    filament_count: int
    location_count: int
    printer_count: int
    schema_version: int


class ColorCodeInfo(BaseModel):
    color_label: str
    color_hex: str
    code: str


class InventoryStatistics(BaseModel):
    total_spools: int
    total_value: float
    total_weight: float
    value_by_type: List[Tuple[str, float]]
    weight_by_type: Dict[str, float]
    value_by_diameter: List[Tuple[str, float]]


class ImportRequest(BaseModel):
    confirm: bool = False
    document: Any = None
