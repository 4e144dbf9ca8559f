"""
Pytest configuration and shared fixtures for the spool inventory tests.
"""
import os
import tempfile

import pytest

# The engine is built at import time, so point it at a scratch store first
_DB_DIR = tempfile.mkdtemp(prefix="spool-inventory-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["APP_ENV"] = "development"

from fastapi.testclient import TestClient  # noqa: E402

from spool_inventory.schemas.inventory.filament_schemas import FilamentPayload  # noqa: E402
from spool_inventory.services.inventory.inventory_repository import InventoryRepository  # noqa: E402


@pytest.fixture(scope="session")
def app_client():
    """One client (and one event loop) for the whole session."""
    from main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def client(app_client):
    """Client on an empty inventory."""
    response = app_client.post("/inventory/bundle/reset", json={"confirm": True})
    assert response.status_code == 200
    return app_client


@pytest.fixture
def repo():
    return InventoryRepository()


@pytest.fixture
def make_payload():
    def _make(material_type="PLA", color_label="Galaxy Black", **fields):
        return FilamentPayload(material_type=material_type, color_label=color_label, **fields)

    return _make


@pytest.fixture
def shelf_repo(repo):
    """Shelf1 > BoxA > Bin1, plus the look-alike sibling Shelf1 > BoxA2."""
    repo.add_location("", "Shelf1")
    repo.add_location("Shelf1", "BoxA")
    repo.add_location("Shelf1/BoxA", "Bin1")
    repo.add_location("Shelf1", "BoxA2")
    return repo
