# spool_inventory/schemas/inventory/printer_schemas.py

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from spool_inventory.constants.materials import DEFAULT_DIAMETER_MM
from spool_inventory.schemas.base_schemas import CamelModel


class Printer(CamelModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    manufacturer: str = ""
    nozzle: str = ""
    filament_diameter: float = DEFAULT_DIAMETER_MM


class PrinterCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    manufacturer: str = ""
    nozzle: str = ""
    filament_diameter: float = Field(DEFAULT_DIAMETER_MM, gt=0)


class PrinterUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    manufacturer: Optional[str] = None
    nozzle: Optional[str] = None
    filament_diameter: Optional[float] = Field(None, gt=0)
