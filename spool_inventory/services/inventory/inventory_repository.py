"""In-memory owner of the current bundle.

Every mutation computes a complete new bundle from the current one and only
then swaps it in, so an operation that raises leaves ``self.bundle`` exactly
as it was. Persisting the bundle is the caller's job.
"""
import uuid
from typing import Any, Dict, List, Optional, Set, Tuple

from spool_inventory.constants.error_codes import ErrorCode
from spool_inventory.constants.inventory import DEFAULT_COLOR_HEX, UNSORTED_FILTER
from spool_inventory.core.exceptions import AppException, ReidentificationRequired
from spool_inventory.models.enums.spool_status import SpoolStatus
from spool_inventory.schemas.inventory.bundle_schemas import (
    Bundle,
    ColorCodeInfo,
    ImportPreview,
    InventoryStatistics,
)
from spool_inventory.schemas.inventory.filament_schemas import Filament, FilamentPayload
from spool_inventory.schemas.inventory.printer_schemas import Printer, PrinterCreate, PrinterUpdate
from spool_inventory.services.inventory import location_tree_service as location_tree
from spool_inventory.services.inventory.filament_metrics_service import nominal_length_m, summarize
from spool_inventory.services.inventory.id_allocator_service import (
    allocate_unique,
    reidentification_changes,
)
from spool_inventory.services.inventory.schema_migration_service import migrate
import logging

logger = logging.getLogger(__name__)


class InventoryRepository:
    def __init__(self, bundle: Optional[Bundle] = None) -> None:
        self.bundle = bundle if bundle is not None else Bundle()

    # =====================================================
    # LOAD / EXPORT
    # =====================================================
    @classmethod
    def from_document(cls, document: Any) -> "InventoryRepository":
        return cls(migrate(document))

    def to_document(self) -> dict:
        return self.bundle.to_document()

    def _commit(self, **changes) -> None:
        self.bundle = self.bundle.model_copy(update=changes)

    # =====================================================
    # FILAMENTS: READ
    # =====================================================
    def get_item(self, spool_id: str) -> Filament:
        for filament in self.bundle.filaments:
            if filament.id == spool_id:
                return filament
        raise AppException(
            404,
            "Spool not found",
            ErrorCode.FILAMENT_NOT_FOUND,
            {"id": spool_id},
        )

    def has_item(self, spool_id: str) -> bool:
        return any(f.id == spool_id for f in self.bundle.filaments)

    def list_items(
        self,
        location: Optional[str] = None,
        material: Optional[str] = None,
        color: Optional[str] = None,
    ) -> List[Filament]:
        items = self.bundle.filaments

        if location == UNSORTED_FILTER:
            paths = set(self.location_paths())
            items = [f for f in items if not self.resolve_location(f, paths)]
        elif location:
            items = [f for f in items if location_tree.is_within(f.location_path, location)]

        if material:
            needle = material.lower()
            items = [f for f in items if needle in f.material_type.lower()]

        if color:
            needle = color.lower()
            items = [
                f for f in items
                if needle in f.color_label.lower() or needle in f.color.lower()
            ]

        return list(items)

    # =====================================================
    # FILAMENTS: WRITE
    # =====================================================
    def _prepare(self, payload: FilamentPayload, spool_id: str) -> Filament:
        data = payload.model_dump(by_alias=True)
        data["id"] = spool_id

        if data.get("status") != SpoolStatus.ON_PRINTER:
            data["assignedPrinterId"] = None
        elif data.get("assignedPrinterId") and not any(
            p.id == data["assignedPrinterId"] for p in self.bundle.printers
        ):
            raise AppException(
                404,
                "Printer not found",
                ErrorCode.PRINTER_NOT_FOUND,
                {"id": data["assignedPrinterId"]},
            )

        if data.get("spoolLength") is None and data.get("spoolSize") and data.get("diameter"):
            data["spoolLength"] = round(
                nominal_length_m(data["spoolSize"], data["diameter"], data.get("materialType")),
                2,
            )

        return Filament.model_validate(data)

    def _release_printer(self, filaments: List[Filament], keep: Filament) -> List[Filament]:
        """One spool per printer: anything else on ``keep``'s printer is taken off."""
        if keep.status != SpoolStatus.ON_PRINTER or not keep.assigned_printer_id:
            return filaments

        released = []
        for f in filaments:
            if f.id != keep.id and f.assigned_printer_id == keep.assigned_printer_id:
                f = f.model_copy(update={"status": SpoolStatus.OPENED, "assigned_printer_id": None})
            released.append(f)
        return released

    def create_item(self, payload: FilamentPayload) -> Filament:
        new_id, counters = allocate_unique(
            payload.material_type,
            payload.color_label,
            self.bundle.id_counters,
            (f.id for f in self.bundle.filaments),
        )
        filament = self._prepare(payload, new_id)

        filaments = self._release_printer(self.bundle.filaments + [filament], filament)
        self._commit(filaments=filaments, id_counters=counters)

        logger.info("Spool created", extra={"spool_id": new_id})
        return filament

    def needs_reidentification(self, spool_id: str, payload: FilamentPayload) -> List[str]:
        existing = self.get_item(spool_id)
        return reidentification_changes(
            existing.material_type,
            existing.color_label,
            payload.material_type,
            payload.color_label,
        )

    def update_item(
        self,
        spool_id: str,
        payload: FilamentPayload,
        confirm_reidentification: bool = False,
    ) -> Filament:
        changes = self.needs_reidentification(spool_id, payload)
        counters = self.bundle.id_counters
        new_id = spool_id

        if changes:
            if not confirm_reidentification:
                raise ReidentificationRequired(spool_id, changes)
            new_id, counters = allocate_unique(
                payload.material_type,
                payload.color_label,
                counters,
                (f.id for f in self.bundle.filaments),
            )

        updated = self._prepare(payload, new_id)
        filaments = [updated if f.id == spool_id else f for f in self.bundle.filaments]
        filaments = self._release_printer(filaments, updated)
        self._commit(filaments=filaments, id_counters=counters)

        if new_id != spool_id:
            logger.info(
                "Spool re-identified",
                extra={"previous_id": spool_id, "spool_id": new_id},
            )
        return updated

    def delete_item(self, spool_id: str) -> None:
        self.get_item(spool_id)
        self._commit(filaments=[f for f in self.bundle.filaments if f.id != spool_id])
        logger.info("Spool deleted", extra={"spool_id": spool_id})

    def update_weight(self, spool_id: str, total_weight: float) -> Filament:
        updated = self.get_item(spool_id).model_copy(update={"total_weight": total_weight})
        self._commit(
            filaments=[updated if f.id == spool_id else f for f in self.bundle.filaments]
        )
        return updated

    def copy_template(self, spool_id: str) -> dict:
        """Field values for a new spool modelled on an existing one."""
        data = self.get_item(spool_id).model_dump(by_alias=True)
        data.pop("id", None)
        return data

    # =====================================================
    # LOCATIONS
    # =====================================================
    def location_paths(self) -> List[str]:
        return location_tree.list_paths(self.bundle.storage_tree)

    def resolve_location(self, filament: Filament, paths: Optional[Set[str]] = None) -> str:
        """The spool's location for display; dangling references read as unassigned."""
        if paths is None:
            paths = set(self.location_paths())
        if filament.location_path and filament.location_path in paths:
            return filament.location_path
        return ""

    def dangling_items(self) -> List[Filament]:
        paths = set(self.location_paths())
        return [f for f in self.bundle.filaments if f.location_path and f.location_path not in paths]

    def add_location(self, parent_path: str, name: str) -> str:
        tree = location_tree.add_location(self.bundle.storage_tree, parent_path, name)
        self._commit(storage_tree=tree)
        new_path = location_tree.join_path(parent_path, name.strip())
        logger.info("Location added", extra={"location": new_path})
        return new_path

    def rename_location(self, path: str, new_name: str) -> str:
        tree = location_tree.rename_location(self.bundle.storage_tree, path, new_name)
        new_path = location_tree.join_path(location_tree.parent_of(path), new_name.strip())

        filaments = [
            f.model_copy(
                update={"location_path": location_tree.rebase_path(f.location_path, path, new_path)}
            )
            if location_tree.is_within(f.location_path, path)
            else f
            for f in self.bundle.filaments
        ]
        self._commit(storage_tree=tree, filaments=filaments)

        logger.info("Location renamed", extra={"location": path, "new_location": new_path})
        return new_path

    def remove_location(self, path: str) -> Tuple[List[str], List[str]]:
        tree, removed = location_tree.remove_location(self.bundle.storage_tree, path)

        removed_set = set(removed)
        cleared: List[str] = []
        filaments = []
        for f in self.bundle.filaments:
            if f.location_path in removed_set or location_tree.is_within(f.location_path, path):
                f = f.model_copy(update={"location_path": ""})
                cleared.append(f.id)
            filaments.append(f)

        self._commit(storage_tree=tree, filaments=filaments)

        logger.info(
            "Location removed",
            extra={"location": path, "removed": len(removed), "cleared": len(cleared)},
        )
        return removed, cleared

    # =====================================================
    # PRINTERS
    # =====================================================
    def get_printer(self, printer_id: str) -> Printer:
        for printer in self.bundle.printers:
            if printer.id == printer_id:
                return printer
        raise AppException(
            404,
            "Printer not found",
            ErrorCode.PRINTER_NOT_FOUND,
            {"id": printer_id},
        )

    def add_printer(self, payload: PrinterCreate) -> Printer:
        printer = Printer(id=uuid.uuid4().hex, **payload.model_dump())
        self._commit(printers=self.bundle.printers + [printer])
        return printer

    def update_printer(self, printer_id: str, payload: PrinterUpdate) -> Printer:
        updates = payload.model_dump(exclude_unset=True, exclude_none=True)
        if not updates:
            raise AppException(
                400,
                "No changes detected",
                ErrorCode.VALIDATION_ERROR,
            )

        updated = self.get_printer(printer_id).model_copy(update=updates)
        self._commit(
            printers=[updated if p.id == printer_id else p for p in self.bundle.printers]
        )
        return updated

    def delete_printer(self, printer_id: str) -> List[str]:
        self.get_printer(printer_id)

        released: List[str] = []
        filaments = []
        for f in self.bundle.filaments:
            if f.assigned_printer_id == printer_id:
                f = f.model_copy(update={"status": SpoolStatus.OPENED, "assigned_printer_id": None})
                released.append(f.id)
            filaments.append(f)

        self._commit(
            printers=[p for p in self.bundle.printers if p.id != printer_id],
            filaments=filaments,
        )
        return released

    # =====================================================
    # WHOLE BUNDLE
    # =====================================================
    @staticmethod
    def _summarize_bundle(bundle: Bundle) -> ImportPreview:
        return ImportPreview(
            filament_count=len(bundle.filaments),
            location_count=location_tree.count_nodes(bundle.storage_tree),
            printer_count=len(bundle.printers),
            schema_version=bundle.id_counters.schema_version,
        )

    @classmethod
    def preview_import(cls, document: Any) -> ImportPreview:
        return cls._summarize_bundle(migrate(document))

    def replace(self, document: Any) -> ImportPreview:
        self.bundle = migrate(document)
        logger.info("Bundle replaced", extra={"filaments": len(self.bundle.filaments)})
        return self._summarize_bundle(self.bundle)

    def reset(self) -> None:
        self.bundle = Bundle()
        logger.info("Bundle reset")

    # =====================================================
    # SUMMARIES
    # =====================================================
    def color_legend(self) -> List[ColorCodeInfo]:
        hex_by_label: Dict[str, str] = {}
        for f in self.bundle.filaments:
            if f.color_label and f.color_label not in hex_by_label:
                hex_by_label[f.color_label] = f.color_hex

        legend = [
            ColorCodeInfo(
                color_label=label,
                color_hex=hex_by_label.get(label) or DEFAULT_COLOR_HEX,
                code=code,
            )
            for label, code in self.bundle.id_counters.color_map.items()
        ]
        return sorted(legend, key=lambda info: info.color_label.lower())

    def statistics(self) -> InventoryStatistics:
        return summarize(self.bundle.filaments)
