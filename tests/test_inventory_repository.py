import pytest

from spool_inventory.constants.error_codes import ErrorCode
from spool_inventory.core.exceptions import AppException, DuplicatePathError, ReidentificationRequired
from spool_inventory.models.enums.spool_status import SpoolStatus
from spool_inventory.schemas.inventory.printer_schemas import PrinterCreate, PrinterUpdate
from spool_inventory.services.inventory.inventory_repository import InventoryRepository


# =====================================================
# FILAMENTS
# =====================================================
def test_create_allocates_id_and_commits_counters(repo, make_payload):
    first = repo.create_item(make_payload("PLA", "Galaxy Black"))
    second = repo.create_item(make_payload("PETG", "Galaxy Black"))

    assert first.id == "PLA-0001-001"
    assert second.id == "PETG-0001-001"
    assert repo.bundle.id_counters.color_map == {"Galaxy Black": "001"}
    assert [f.id for f in repo.list_items()] == ["PLA-0001-001", "PETG-0001-001"]


def test_create_fills_nominal_length(repo, make_payload):
    filament = repo.create_item(make_payload(spool_size=1000, diameter=1.75))

    assert filament.spool_length == pytest.approx(335.3, abs=0.5)


def test_get_missing_item(repo):
    with pytest.raises(AppException) as exc_info:
        repo.get_item("PLA-0001-001")
    assert exc_info.value.error_code == ErrorCode.FILAMENT_NOT_FOUND


def test_update_without_identity_change_keeps_id(repo, make_payload):
    created = repo.create_item(make_payload(total_weight=1200))

    updated = repo.update_item(created.id, make_payload(total_weight=800, notes="half"))

    assert updated.id == created.id
    assert repo.get_item(created.id).total_weight == 800
    assert repo.get_item(created.id).notes == "half"


def test_update_identity_change_requires_confirmation(repo, make_payload):
    created = repo.create_item(make_payload("PLA", "Red"))
    before = repo.to_document()

    assert repo.needs_reidentification(created.id, make_payload("PETG", "Red")) == [
        "materialType: PLA → PETG"
    ]
    with pytest.raises(ReidentificationRequired) as exc_info:
        repo.update_item(created.id, make_payload("PETG", "Red"))

    assert exc_info.value.status_code == 409
    assert repo.to_document() == before


def test_confirmed_reidentification_issues_new_id(repo, make_payload):
    created = repo.create_item(make_payload("PLA", "Red"))

    updated = repo.update_item(created.id, make_payload("PETG", "Red"), confirm_reidentification=True)

    assert updated.id == "PETG-0001-001"
    assert not repo.has_item(created.id)
    assert repo.bundle.id_counters.type_counters["PLA"].next_spool_number == 2


def test_delete_and_update_weight(repo, make_payload):
    keep = repo.create_item(make_payload())
    gone = repo.create_item(make_payload())

    repo.delete_item(gone.id)
    repo.update_weight(keep.id, 455.5)

    assert [f.id for f in repo.list_items()] == [keep.id]
    assert repo.get_item(keep.id).total_weight == 455.5


def test_copy_template_has_no_id(repo, make_payload):
    created = repo.create_item(make_payload(manufacturer="Prusament", price=29.9))

    template = repo.copy_template(created.id)

    assert "id" not in template
    assert template["manufacturer"] == "Prusament"
    assert template["materialType"] == "PLA"


def test_list_filters(shelf_repo, make_payload):
    shelf_repo.create_item(make_payload("PLA", "Red", location_path="Shelf1/BoxA/Bin1"))
    shelf_repo.create_item(make_payload("PETG", "Blue", location_path="Shelf1/BoxA2"))
    shelf_repo.create_item(make_payload("PLA", "Blue"))

    assert len(shelf_repo.list_items(location="Shelf1/BoxA")) == 1
    assert len(shelf_repo.list_items(location="Shelf1")) == 2
    assert len(shelf_repo.list_items(location="__UNSORTED__")) == 1
    assert len(shelf_repo.list_items(material="pla")) == 2
    assert len(shelf_repo.list_items(color="blue")) == 2


# =====================================================
# LOCATIONS
# =====================================================
def test_rename_carries_item_paths(shelf_repo, make_payload):
    inner = shelf_repo.create_item(make_payload(location_path="Shelf1/BoxA/Bin1"))
    sibling = shelf_repo.create_item(make_payload(location_path="Shelf1/BoxA2"))

    new_path = shelf_repo.rename_location("Shelf1/BoxA", "BoxB")

    assert new_path == "Shelf1/BoxB"
    assert shelf_repo.get_item(inner.id).location_path == "Shelf1/BoxB/Bin1"
    assert shelf_repo.get_item(sibling.id).location_path == "Shelf1/BoxA2"
    assert "Shelf1/BoxB/Bin1" in shelf_repo.location_paths()


def test_remove_clears_item_paths(shelf_repo, make_payload):
    box = shelf_repo.create_item(make_payload(location_path="Shelf1/BoxA"))
    bin_ = shelf_repo.create_item(make_payload(location_path="Shelf1/BoxA/Bin1"))
    sibling = shelf_repo.create_item(make_payload(location_path="Shelf1/BoxA2"))

    removed, cleared = shelf_repo.remove_location("Shelf1/BoxA")

    assert removed == ["Shelf1/BoxA", "Shelf1/BoxA/Bin1"]
    assert cleared == [box.id, bin_.id]
    assert shelf_repo.get_item(box.id).location_path == ""
    assert shelf_repo.get_item(bin_.id).location_path == ""
    assert shelf_repo.get_item(sibling.id).location_path == "Shelf1/BoxA2"


def test_duplicate_location_keeps_prior_state(shelf_repo):
    before = shelf_repo.to_document()

    with pytest.raises(DuplicatePathError):
        shelf_repo.add_location("Shelf1", "BoxA")

    assert shelf_repo.to_document() == before


def test_dangling_location_reads_as_unassigned(shelf_repo, make_payload):
    filament = shelf_repo.create_item(make_payload(location_path="Attic/Crate"))

    assert shelf_repo.resolve_location(filament) == ""
    assert [f.id for f in shelf_repo.dangling_items()] == [filament.id]
    assert [f.id for f in shelf_repo.list_items(location="__UNSORTED__")] == [filament.id]
    assert shelf_repo.list_items(location="Attic") == [filament]
    assert shelf_repo.get_item(filament.id).location_path == "Attic/Crate"


# =====================================================
# PRINTERS
# =====================================================
def test_one_spool_per_printer(repo, make_payload):
    printer = repo.add_printer(PrinterCreate(name="MK4"))
    first = repo.create_item(
        make_payload(status=SpoolStatus.ON_PRINTER, assigned_printer_id=printer.id)
    )
    second = repo.create_item(
        make_payload(status=SpoolStatus.ON_PRINTER, assigned_printer_id=printer.id)
    )

    assert repo.get_item(second.id).assigned_printer_id == printer.id
    assert repo.get_item(first.id).assigned_printer_id is None
    assert repo.get_item(first.id).status == SpoolStatus.OPENED


def test_printer_assignment_needs_on_printer_status(repo, make_payload):
    printer = repo.add_printer(PrinterCreate(name="MK4"))

    filament = repo.create_item(make_payload(status="opened", assigned_printer_id=printer.id))

    assert filament.assigned_printer_id is None


def test_unknown_printer_rejected(repo, make_payload):
    with pytest.raises(AppException) as exc_info:
        repo.create_item(make_payload(status="on_printer", assigned_printer_id="missing"))

    assert exc_info.value.error_code == ErrorCode.PRINTER_NOT_FOUND
    assert repo.list_items() == []


def test_delete_printer_releases_spools(repo, make_payload):
    printer = repo.add_printer(PrinterCreate(name="MK4"))
    filament = repo.create_item(make_payload(status="on_printer", assigned_printer_id=printer.id))

    released = repo.delete_printer(printer.id)

    assert released == [filament.id]
    assert repo.bundle.printers == []
    assert repo.get_item(filament.id).status == SpoolStatus.OPENED


def test_update_printer(repo):
    printer = repo.add_printer(PrinterCreate(name="MK4"))

    updated = repo.update_printer(printer.id, PrinterUpdate(nozzle="0.6"))

    assert updated.nozzle == "0.6"
    assert updated.name == "MK4"
    with pytest.raises(AppException):
        repo.update_printer(printer.id, PrinterUpdate())


# =====================================================
# WHOLE BUNDLE
# =====================================================
def test_preview_then_replace(shelf_repo, make_payload):
    shelf_repo.create_item(make_payload())
    incoming = {
        "filaments": [{"id": "1", "type": "ABS", "manufacturerColor": "White", "netWeight": 750}],
        "storageTree": [{"name": "Rack", "path": "Rack", "children": [{"name": "Top", "path": "Rack/Top"}]}],
    }

    preview = InventoryRepository.preview_import(incoming)
    assert (preview.filament_count, preview.location_count, preview.printer_count) == (1, 2, 0)
    assert len(shelf_repo.list_items()) == 1

    shelf_repo.replace(incoming)

    assert [f.id for f in shelf_repo.list_items()] == ["ABS-0001-001"]
    assert shelf_repo.location_paths() == ["Rack", "Rack/Top"]


def test_export_round_trip(shelf_repo, make_payload):
    shelf_repo.create_item(make_payload(location_path="Shelf1/BoxA"))
    shelf_repo.add_printer(PrinterCreate(name="MK4"))

    reloaded = InventoryRepository.from_document(shelf_repo.to_document())

    assert reloaded.to_document() == shelf_repo.to_document()


def test_reset(shelf_repo, make_payload):
    shelf_repo.create_item(make_payload())

    shelf_repo.reset()

    assert shelf_repo.list_items() == []
    assert shelf_repo.location_paths() == []
    assert shelf_repo.bundle.id_counters.is_empty()


def test_color_legend_and_statistics(repo, make_payload):
    repo.create_item(
        make_payload("PLA", "Red", color_hex="#FF0000", total_weight=1200, spool_weight=200, spool_size=1000, price=20)
    )
    repo.create_item(make_payload("PETG", "blue", total_weight=700, spool_weight=200, spool_size=1000, price=30))

    legend = repo.color_legend()
    assert [(c.color_label, c.code) for c in legend] == [("blue", "002"), ("Red", "001")]
    assert legend[0].color_hex == "#CCCCCC"

    stats = repo.statistics()
    assert stats.total_spools == 2
    assert stats.total_weight == 1500
    assert stats.total_value == 35
    assert stats.value_by_type[0] == ("PLA", 20)
