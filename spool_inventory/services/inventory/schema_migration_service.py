"""Upgrade a persisted bundle of any earlier vintage to the current shape.

``migrate`` never raises: malformed parts of the input are repaired, skipped
or defaulted so a user's only copy of their data can always be opened. Each
step below carries its own guard and leaves already-current data alone, which
makes the whole pipeline idempotent.
"""
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Tuple

from spool_inventory.constants.inventory import CURRENT_SCHEMA_VERSION, PATH_SEPARATOR
from spool_inventory.constants.materials import (
    DEFAULT_DIAMETER_MM,
    DEFAULT_MATERIAL,
    DEFAULT_SPOOL_SIZE_G,
)
from spool_inventory.core.exceptions import MalformedIdError
from spool_inventory.models.enums.spool_status import LEGACY_STATUS_LABELS
from spool_inventory.schemas.inventory.bundle_schemas import Bundle, IdCounterState, TypeCounter
from spool_inventory.schemas.inventory.filament_schemas import Filament, coerce_number, coerce_text
from spool_inventory.schemas.inventory.location_schemas import LocationNode
from spool_inventory.schemas.inventory.printer_schemas import Printer
from spool_inventory.services.inventory.filament_metrics_service import nominal_length_m
from spool_inventory.services.inventory.id_allocator_service import (
    allocate,
    allocate_unique,
    is_current_format,
    is_digits,
    normalize_color_label,
    parse_id,
)
from spool_inventory.services.inventory.location_tree_service import join_path
import logging

logger = logging.getLogger(__name__)

LEGACY_ITEM_KEYS = (
    "type",
    "manufacturerColor",
    "netWeight",
    "storageLocation",
    "storageZone",
    "storagePosition",
)
LEGACY_LOCATION_KEYS = ("storageLocation", "storageZone", "storagePosition")


@dataclass
class MigrationState:
    version: int
    items: List[Dict[str, Any]] = field(default_factory=list)
    filaments: List[Filament] = field(default_factory=list)
    counters: IdCounterState = field(default_factory=IdCounterState)


# =====================================================
# INPUT HELPERS
# =====================================================
def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _as_int(value, default: int) -> int:
    number = coerce_number(value)
    return int(number) if number is not None else default


def _counters_recorded(raw_counters: dict) -> bool:
    return bool(_as_dict(raw_counters.get("colorMap")) or _as_dict(raw_counters.get("typeCounters")))


def detect_version(raw_counters: dict, items: List[dict]) -> int:
    for key in ("schemaVersion", "version"):
        recorded = coerce_number(raw_counters.get(key))
        if recorded is not None:
            return int(recorded)

    # Counters lost but ids already in TYPE-NNNN-CCC form: rebuild, don't renumber
    if (
        items
        and not _counters_recorded(raw_counters)
        and all(is_current_format(coerce_text(item.get("id"))) for item in items)
    ):
        return CURRENT_SCHEMA_VERSION

    return 1


def read_counters(raw_counters: dict) -> IdCounterState:
    color_map = {
        str(label): coerce_text(code)
        for label, code in _as_dict(raw_counters.get("colorMap")).items()
        if is_digits(coerce_text(code))
    }

    next_color_number = _as_int(
        raw_counters.get("nextColorNumber", raw_counters.get("nextColorNum")),
        1,
    )
    if color_map:
        next_color_number = max(next_color_number, max(int(c) for c in color_map.values()) + 1)

    type_counters = {}
    for type_code, entry in _as_dict(raw_counters.get("typeCounters")).items():
        entry = _as_dict(entry)
        next_spool = _as_int(entry.get("nextSpoolNumber", entry.get("nextSpoolNum")), 1)
        type_counters[str(type_code)] = TypeCounter(next_spool_number=max(1, next_spool))

    return IdCounterState(
        color_map=color_map,
        next_color_number=max(1, next_color_number),
        type_counters=type_counters,
    )


# =====================================================
# STEP 1: LEGACY FIELD NORMALIZATION
# =====================================================
def needs_legacy_normalization(item: dict) -> bool:
    return (
        "locationPath" not in item
        or "spoolLength" not in item
        or any(key in item for key in LEGACY_ITEM_KEYS)
        or (isinstance(item.get("status"), str) and item["status"] in LEGACY_STATUS_LABELS)
    )


def normalize_legacy_item(item: dict) -> dict:
    normalized = dict(item)

    if "materialType" not in normalized and "type" in normalized:
        normalized["materialType"] = normalized.pop("type")
    if "colorLabel" not in normalized and "manufacturerColor" in normalized:
        normalized["colorLabel"] = normalized.pop("manufacturerColor")

    status = normalized.get("status")
    if isinstance(status, str) and status in LEGACY_STATUS_LABELS:
        normalized["status"] = LEGACY_STATUS_LABELS[status].value

    if "netWeight" in normalized:
        net_weight = coerce_number(normalized.pop("netWeight"))
        normalized["spoolSize"] = net_weight
        if coerce_number(normalized.get("totalWeight")) is None and net_weight is not None:
            normalized["totalWeight"] = net_weight + (coerce_number(normalized.get("spoolWeight")) or 0.0)

    if "spoolLength" not in normalized:
        length = nominal_length_m(
            coerce_number(normalized.get("spoolSize")) or DEFAULT_SPOOL_SIZE_G,
            coerce_number(normalized.get("diameter")) or DEFAULT_DIAMETER_MM,
            coerce_text(normalized.get("materialType")) or DEFAULT_MATERIAL,
        )
        normalized["spoolLength"] = round(length, 2)

    if "locationPath" not in normalized:
        segments = [coerce_text(normalized.get(key)).strip() for key in LEGACY_LOCATION_KEYS]
        normalized["locationPath"] = PATH_SEPARATOR.join(s for s in segments if s)
    for key in LEGACY_LOCATION_KEYS:
        normalized.pop(key, None)

    return normalized


def normalize_legacy_fields(state: MigrationState) -> MigrationState:
    legacy = [i for i, item in enumerate(state.items) if needs_legacy_normalization(item)]
    items = list(state.items)
    if legacy:
        logger.info("Migrating legacy filament fields", extra={"count": len(legacy)})
        for i in legacy:
            items[i] = normalize_legacy_item(items[i])

    filaments = [Filament.model_validate(item) for item in items]
    return replace(state, items=items, filaments=filaments)


# =====================================================
# STEP 2: ID FORMAT (version < 3)
# =====================================================
def migrate_id_format(state: MigrationState) -> MigrationState:
    if state.version >= CURRENT_SCHEMA_VERSION or not state.filaments:
        return state

    logger.info(
        "Regenerating spool ids",
        extra={"from_version": state.version, "count": len(state.filaments)},
    )

    order = sorted(
        range(len(state.filaments)),
        key=lambda i: (state.filaments[i].made_date, state.filaments[i].id),
    )

    counters = IdCounterState()
    new_ids: Dict[int, str] = {}
    for i in order:
        filament = state.filaments[i]
        new_ids[i], counters = allocate(filament.material_type, filament.color_label, counters)

    filaments = [
        filament.model_copy(update={"id": new_ids[i]})
        for i, filament in enumerate(state.filaments)
    ]
    return replace(state, filaments=filaments, counters=counters)


# =====================================================
# STEP 3: COUNTER BACKFILL (version >= 3, counters empty)
# =====================================================
def backfill_counters(state: MigrationState) -> MigrationState:
    if (
        state.version < CURRENT_SCHEMA_VERSION
        or not state.counters.is_empty()
        or not state.filaments
    ):
        return state

    logger.info("Rebuilding id counters from existing ids", extra={"count": len(state.filaments)})

    counters = IdCounterState()
    for filament in state.filaments:
        try:
            type_code, spool_number, color_code = parse_id(filament.id)
        except MalformedIdError:
            logger.warning("Skipping malformed spool id", extra={"spool_id": filament.id})
            continue

        counter = counters.type_counters.setdefault(type_code, TypeCounter())
        counter.next_spool_number = max(counter.next_spool_number, spool_number + 1)

        label = normalize_color_label(filament.color_label)
        if label not in counters.color_map:
            counters.color_map[label] = color_code
            counters.next_color_number = max(counters.next_color_number, int(color_code) + 1)

    return replace(state, counters=counters)


# =====================================================
# STEP 4: MISSING / DUPLICATE IDS
# =====================================================
def assign_missing_ids(state: MigrationState) -> MigrationState:
    ids = [f.id for f in state.filaments]
    if all(ids) and len(set(ids)) == len(ids):
        return state

    taken = {spool_id for spool_id in ids if spool_id}
    seen = set()
    counters = state.counters
    filaments = []

    for filament in state.filaments:
        if filament.id and filament.id not in seen:
            seen.add(filament.id)
            filaments.append(filament)
            continue

        new_id, counters = allocate_unique(
            filament.material_type, filament.color_label, counters, taken
        )
        logger.warning(
            "Assigned new spool id",
            extra={"previous_id": filament.id, "spool_id": new_id},
        )
        taken.add(new_id)
        seen.add(new_id)
        filaments.append(filament.model_copy(update={"id": new_id}))

    return replace(state, filaments=filaments, counters=counters)


# =====================================================
# STEP 5: VERSION STAMP
# =====================================================
def stamp_version(state: MigrationState) -> MigrationState:
    counters = state.counters.model_copy(update={"schema_version": CURRENT_SCHEMA_VERSION})
    return replace(state, counters=counters, version=CURRENT_SCHEMA_VERSION)


MIGRATION_STEPS: Tuple[Callable[[MigrationState], MigrationState], ...] = (
    normalize_legacy_fields,
    migrate_id_format,
    backfill_counters,
    assign_missing_ids,
    stamp_version,
)


# =====================================================
# PASS-THROUGH ENTITIES
# =====================================================
def normalize_tree(raw_nodes, parent_path: str = "") -> List[LocationNode]:
    nodes = []
    for raw in _as_list(raw_nodes):
        if not isinstance(raw, dict):
            continue

        name = coerce_text(raw.get("name")).strip()
        path = coerce_text(raw.get("path"))
        if not path and name:
            path = join_path(parent_path, name)
        if not name and path:
            name = path.rpartition(PATH_SEPARATOR)[2]
        if not path:
            logger.warning("Dropping unnamed location node", extra={"parent_path": parent_path})
            continue

        nodes.append(
            LocationNode(
                name=name,
                path=path,
                children=normalize_tree(raw.get("children"), path),
            )
        )
    return nodes


def normalize_printers(raw_printers) -> List[Printer]:
    printers = []
    for raw in _as_list(raw_printers):
        if not isinstance(raw, dict):
            continue

        data = dict(raw)
        data["id"] = coerce_text(data.get("id")) or uuid.uuid4().hex
        for key in ("name", "manufacturer", "nozzle"):
            data[key] = coerce_text(data.get(key))

        diameter = coerce_number(data.get("filamentDiameter"))
        data["filamentDiameter"] = DEFAULT_DIAMETER_MM if diameter is None else diameter

        printers.append(Printer.model_validate(data))
    return printers


# =====================================================
# ENTRY POINT
# =====================================================
def migrate(raw_bundle: Any) -> Bundle:
    document = _as_dict(raw_bundle)
    raw_counters = _as_dict(document.get("idCounters"))
    items = [dict(item) for item in _as_list(document.get("filaments")) if isinstance(item, dict)]

    state = MigrationState(
        version=detect_version(raw_counters, items),
        items=items,
        counters=read_counters(raw_counters),
    )
    for step in MIGRATION_STEPS:
        state = step(state)

    return Bundle(
        filaments=state.filaments,
        storage_tree=normalize_tree(document.get("storageTree")),
        id_counters=state.counters,
        printers=normalize_printers(document.get("printers")),
    )
