import math
from typing import Dict, Iterable, Optional

from spool_inventory.constants.materials import DENSITIES, DEFAULT_DENSITY
from spool_inventory.schemas.inventory.bundle_schemas import InventoryStatistics
from spool_inventory.schemas.inventory.filament_schemas import Filament


def density_for(material_type: Optional[str]) -> float:
    type_key = (material_type or "").lower()
    for key, density in DENSITIES.items():
        if key in type_key:
            return density
    return DEFAULT_DENSITY


def nominal_length_m(
    filament_weight_g: Optional[float],
    diameter_mm: Optional[float],
    material_type: Optional[str],
) -> float:
    """Metres of filament on a spool of the given net weight."""
    if not filament_weight_g or filament_weight_g <= 0 or not diameter_mm:
        return 0.0

    area_cm2 = math.pi * (diameter_mm / 20) ** 2
    volume_cm3 = filament_weight_g / density_for(material_type)
    return volume_cm3 / area_cm2 / 100


def remaining_weight_g(filament: Filament) -> float:
    return max(0.0, (filament.total_weight or 0.0) - (filament.spool_weight or 0.0))


def remaining_value(filament: Filament) -> float:
    if not filament.spool_size or filament.spool_size <= 0:
        return 0.0
    return (filament.price or 0.0) * remaining_weight_g(filament) / filament.spool_size


def summarize(filaments: Iterable[Filament]) -> InventoryStatistics:
    total_spools = 0
    total_value = 0.0
    total_weight = 0.0
    value_by_type: Dict[str, float] = {}
    weight_by_type: Dict[str, float] = {}
    value_by_diameter: Dict[str, float] = {}

    for filament in filaments:
        total_spools += 1
        weight = remaining_weight_g(filament)
        value = remaining_value(filament)
        total_weight += weight
        total_value += value

        type_key = filament.material_type or "Unknown"
        value_by_type[type_key] = value_by_type.get(type_key, 0.0) + value
        weight_by_type[type_key] = weight_by_type.get(type_key, 0.0) + weight

        diameter_key = f"{filament.diameter or 0:.2f}"
        value_by_diameter[diameter_key] = value_by_diameter.get(diameter_key, 0.0) + value

    return InventoryStatistics(
        total_spools=total_spools,
        total_value=round(total_value, 2),
        total_weight=round(total_weight, 2),
        value_by_type=sorted(value_by_type.items(), key=lambda kv: kv[1], reverse=True),
        weight_by_type=weight_by_type,
        value_by_diameter=sorted(value_by_diameter.items(), key=lambda kv: kv[1], reverse=True),
    )
