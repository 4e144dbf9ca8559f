import pytest

from spool_inventory.constants.error_codes import ErrorCode
from spool_inventory.constants.scan_codes import ScanKind
from spool_inventory.core.exceptions import AppException
from spool_inventory.services.inventory.scan_service import encode_scan_code, resolve_scan


def test_encode_scan_code():
    assert encode_scan_code(ScanKind.SPOOL, "PLA-0001-001") == "FMT_SPOOL::PLA-0001-001"
    assert encode_scan_code(ScanKind.LOCATION, "Shelf1/BoxA") == "FMT_LOCATION::Shelf1/BoxA"


def test_scan_spool(repo, make_payload):
    filament = repo.create_item(make_payload())

    result = resolve_scan(repo, encode_scan_code(ScanKind.SPOOL, filament.id))

    assert result.kind is ScanKind.SPOOL
    assert result.filament.id == filament.id


def test_scan_location_lists_subtree(shelf_repo, make_payload):
    inside = shelf_repo.create_item(make_payload(location_path="Shelf1/BoxA/Bin1"))
    shelf_repo.create_item(make_payload(location_path="Shelf1/BoxA2"))

    result = resolve_scan(shelf_repo, "FMT_LOCATION::Shelf1/BoxA")

    assert result.target == "Shelf1/BoxA"
    assert [f.id for f in result.filaments] == [inside.id]


def test_scan_empty_location_lists_everything(repo, make_payload):
    repo.create_item(make_payload())
    repo.create_item(make_payload())

    assert len(resolve_scan(repo, "FMT_LOCATION::").filaments) == 2


@pytest.mark.parametrize("code", ["PLA-0001-001", "FMT_BOX::x", ""])
def test_unknown_code_format(repo, code):
    with pytest.raises(AppException) as exc_info:
        resolve_scan(repo, code)
    assert exc_info.value.error_code == ErrorCode.SCAN_CODE_UNKNOWN


@pytest.mark.parametrize("code", ["FMT_SPOOL::PLA-0009-001", "FMT_LOCATION::Garage"])
def test_unknown_scan_target(repo, code):
    with pytest.raises(AppException) as exc_info:
        resolve_scan(repo, code)
    assert exc_info.value.status_code == 404
    assert exc_info.value.error_code == ErrorCode.SCAN_TARGET_NOT_FOUND
