# spool_inventory/schemas/inventory/filament_schemas.py

import math
from typing import Annotated, Optional, List
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from spool_inventory.models.enums.spool_status import SpoolStatus, LEGACY_STATUS_LABELS
from spool_inventory.schemas.base_schemas import CamelModel


def coerce_number(value):
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def coerce_text(value):
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _lenient_optional_text(value):
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else str(value)


def _lenient_status(value):
    if isinstance(value, SpoolStatus):
        return value
    if isinstance(value, str) and value in LEGACY_STATUS_LABELS:
        return LEGACY_STATUS_LABELS[value]
    try:
        return SpoolStatus(value)
    except ValueError:
        return SpoolStatus.SEALED


# Imported files are hand-edited; bad values degrade instead of failing
LenientFloat = Annotated[Optional[float], BeforeValidator(coerce_number)]
LenientText = Annotated[str, BeforeValidator(coerce_text)]
LenientOptionalText = Annotated[Optional[str], BeforeValidator(_lenient_optional_text)]
LenientStatus = Annotated[SpoolStatus, BeforeValidator(_lenient_status)]


class FilamentFields(CamelModel):
    material_type: LenientText = ""
    color_label: LenientText = ""
    location_path: LenientText = ""
    status: LenientStatus = SpoolStatus.SEALED
    manufacturer: LenientText = ""
    color: LenientText = ""
    color_hex: LenientText = ""
    made_date: LenientText = ""

    total_weight: LenientFloat = None
    spool_weight: LenientFloat = None
    spool_size: LenientFloat = None
    spool_length: LenientFloat = None
    diameter: LenientFloat = None
    price: LenientFloat = None

    assigned_printer_id: LenientOptionalText = None
    notes: LenientText = ""


class Filament(FilamentFields):
    """One spool. Keys this layer does not know are carried through untouched."""

    model_config = ConfigDict(extra="allow")

    id: LenientText = ""


class FilamentPayload(FilamentFields):
    """Create/update body; the id is always allocated server side."""

    model_config = ConfigDict(extra="allow")


class FilamentWeightUpdate(BaseModel):
    total_weight: float = Field(..., ge=0)


class ReidentificationCheck(BaseModel):
    id: str
    required: bool
    changes: List[str]


class FilamentListData(BaseModel):
    total: int
    items: List[Filament]
