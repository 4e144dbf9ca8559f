"""Spool id allocation.

Ids have the shape ``TYPE-NNNN-CCC``: up to four characters of the material
type, a per-type running spool number and a color code that is shared by every
spool carrying the same manufacturer color label, whatever its material.
Counter state is passed in and a new copy handed back; nothing here mutates
the caller's counters.
"""
import re
from typing import Iterable, List, Optional, Tuple

from spool_inventory.constants.inventory import (
    TYPE_CODE_LENGTH,
    SPOOL_NUMBER_WIDTH,
    COLOR_CODE_WIDTH,
    UNKNOWN_TYPE_CODE,
    UNKNOWN_COLOR_LABEL,
)
from spool_inventory.core.exceptions import MalformedIdError
from spool_inventory.schemas.inventory.bundle_schemas import IdCounterState, TypeCounter
import logging

logger = logging.getLogger(__name__)

_NON_ALNUM = re.compile(r"[^A-Z0-9]")
_CURRENT_ID = re.compile(r"[A-Z0-9]+-[0-9]+-[0-9]+")
_DIGITS = re.compile(r"[0-9]+")


def normalize_type_code(material_type: Optional[str]) -> str:
    code = _NON_ALNUM.sub("", (material_type or "").upper())[:TYPE_CODE_LENGTH]
    return code or UNKNOWN_TYPE_CODE


def normalize_color_label(color_label: Optional[str]) -> str:
    return color_label or UNKNOWN_COLOR_LABEL


def is_digits(text: Optional[str]) -> bool:
    """ASCII digits only; ``str.isdigit`` also accepts '²' and friends."""
    return bool(text) and _DIGITS.fullmatch(text) is not None


def format_id(type_code: str, spool_number: int, color_code: int) -> str:
    return (
        f"{type_code}-{spool_number:0{SPOOL_NUMBER_WIDTH}d}"
        f"-{color_code:0{COLOR_CODE_WIDTH}d}"
    )


def allocate(
    material_type: Optional[str],
    color_label: Optional[str],
    counters: IdCounterState,
) -> Tuple[str, IdCounterState]:
    updated = counters.model_copy(deep=True)

    type_code = normalize_type_code(material_type)
    label = normalize_color_label(color_label)

    if label not in updated.color_map:
        updated.color_map[label] = str(updated.next_color_number).zfill(COLOR_CODE_WIDTH)
        updated.next_color_number += 1

    counter = updated.type_counters.setdefault(type_code, TypeCounter())
    spool_number = counter.next_spool_number
    counter.next_spool_number += 1

    new_id = format_id(type_code, spool_number, int(updated.color_map[label]))
    return new_id, updated


def allocate_unique(
    material_type: Optional[str],
    color_label: Optional[str],
    counters: IdCounterState,
    taken: Iterable[str],
) -> Tuple[str, IdCounterState]:
    """Allocate, skipping spool numbers whose id is already in ``taken``.

    Only hand-edited counters can lag behind the ids in a bundle; skipped
    numbers stay consumed.
    """
    taken = set(taken)
    new_id, updated = allocate(material_type, color_label, counters)
    while new_id in taken:
        logger.warning("Skipping spool id already in use", extra={"spool_id": new_id})
        new_id, updated = allocate(material_type, color_label, updated)
    return new_id, updated


def parse_id(spool_id: str) -> Tuple[str, int, str]:
    """Split an id into (type code, spool number, color code)."""
    parts = (spool_id or "").split("-")
    if len(parts) != 3 or not all(parts):
        raise MalformedIdError(spool_id)

    type_code, spool_part, color_code = parts
    if not is_digits(spool_part) or not is_digits(color_code):
        raise MalformedIdError(spool_id)

    return type_code, int(spool_part), color_code


def is_current_format(spool_id: Optional[str]) -> bool:
    return bool(spool_id) and _CURRENT_ID.fullmatch(spool_id) is not None


def reidentification_changes(
    existing_material: str,
    existing_color: str,
    material_type: str,
    color_label: str,
) -> List[str]:
    changes: List[str] = []
    if existing_material != material_type:
        changes.append(f"materialType: {existing_material} → {material_type}")
    if existing_color != color_label:
        changes.append(f"colorLabel: {existing_color} → {color_label}")
    return changes

