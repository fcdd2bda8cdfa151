"""
Unit tests for data/persistence.py

Covers the key/value layout on disk, schema version tagging, legacy
migration and tolerance of corrupt documents.
"""
import json

import pytest

from skytracker.config import CATALOG_KEY, INVENTORY_KEY, SCHEMA_VERSION_KEY, SCHEMA_VERSION, SHARE_VIEWS_KEY
from skytracker.data.schemas import CatalogItem, InventoryRecord, SavedShareView
from skytracker.data.persistence import LocalStorage, PersistenceGateway, migrate
from skytracker.errors import PersistenceWriteError


def test_load_returns_none_when_nothing_saved(storage):
    assert PersistenceGateway(storage).load() is None


def test_save_then_load(storage):
    gw = PersistenceGateway(storage)
    catalog = [CatalogItem(id="spyro", name="Spyro", element="Magic", image_url="s.png")]
    inventory = {"spyro": InventoryRecord(have=True, count=2, value=10.0, notes="boxed")}
    gw.save(catalog, inventory)

    state = gw.load()
    assert state.catalog == catalog
    assert state.inventory == inventory
    assert state.version == SCHEMA_VERSION


def test_saved_documents_use_storage_keys(storage):
    PersistenceGateway(storage).save(
        [CatalogItem(id="spyro", name="Spyro")],
        {"spyro": InventoryRecord(for_trade=True)},
    )
    assert set(storage.keys()) == {CATALOG_KEY, INVENTORY_KEY, SCHEMA_VERSION_KEY}
    assert json.loads(storage.get_item(SCHEMA_VERSION_KEY)) == SCHEMA_VERSION

    catalog = json.loads(storage.get_item(CATALOG_KEY))
    assert catalog[0]["imageUrl"] == ""
    inventory = json.loads(storage.get_item(INVENTORY_KEY))
    assert inventory["spyro"]["forTrade"] is True
    assert inventory["spyro"]["currency"] == "USD"


def test_legacy_state_is_migrated(storage):
    storage.set_item(CATALOG_KEY, json.dumps([{"id": "spyro", "name": "Spyro"}]))
    storage.set_item(INVENTORY_KEY, json.dumps({"spyro": {"have": True, "count": 1}}))

    state = PersistenceGateway(storage).load()
    rec = state.inventory["spyro"]
    assert rec.have is True
    assert rec.count == 1
    assert rec.need is False
    assert rec.notes == ""
    assert state.catalog[0].element == "Unknown"


def test_migrate_fills_defaults():
    _, inventory = migrate([], {"a": {"value": 4}}, 0)
    assert inventory["a"]["value"] == 4
    assert inventory["a"]["forTrade"] is False


def test_migrate_unknown_version_raises():
    with pytest.raises(ValueError):
        migrate([], {}, -1)


def test_corrupt_document_is_ignored(storage):
    storage.set_item(CATALOG_KEY, "[{not json")
    storage.set_item(INVENTORY_KEY, json.dumps({"spyro": {"count": 3}}))
    storage.set_item(SCHEMA_VERSION_KEY, "1")

    state = PersistenceGateway(storage).load()
    assert state.catalog == []
    assert state.inventory["spyro"].count == 3


def test_malformed_catalog_entries_skipped(storage):
    storage.set_item(CATALOG_KEY, json.dumps([{"name": "no id"}, "junk", {"id": "spyro"}]))
    storage.set_item(SCHEMA_VERSION_KEY, "1")
    state = PersistenceGateway(storage).load()
    assert [it.id for it in state.catalog] == ["spyro"]


def test_views_round_trip(storage):
    gw = PersistenceGateway(storage)
    view = SavedShareView(id="1", title="T", description="D", show_values=True,
                          selected_ids=["spyro"], created_at="2024-01-01T00:00:00+00:00")
    gw.save_views([view])
    assert gw.load_views() == [view]
    assert json.loads(storage.get_item(SHARE_VIEWS_KEY))[0]["selectedIds"] == ["spyro"]


def test_write_failure_raises_persistence_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    gw = PersistenceGateway(LocalStorage(blocker / "storage"))
    with pytest.raises(PersistenceWriteError):
        gw.save([], {})


def test_atomic_write_leaves_no_temp_files(storage):
    storage.set_item("k", "v1")
    storage.set_item("k", "v2")
    assert storage.get_item("k") == "v2"
    assert [p.name for p in storage.directory.iterdir()] == ["k.json"]


def test_clear_removes_everything(storage):
    gw = PersistenceGateway(storage)
    gw.save([CatalogItem(id="spyro")], {})
    gw.clear()
    assert gw.load() is None


def test_oversized_stored_numbers_load_as_zero(storage):
    storage.set_item(CATALOG_KEY, json.dumps([{"id": "spyro", "name": "Spyro"}]))
    storage.set_item(INVENTORY_KEY, '{"spyro": {"have": true, "count": 1e999, "value": 1e999}}')
    storage.set_item(SCHEMA_VERSION_KEY, "1")

    rec = PersistenceGateway(storage).load().inventory["spyro"]
    assert rec.have is True
    assert rec.count == 0
    assert rec.value == 0.0


def test_failed_catalog_write_keeps_loadable_state(storage):
    class CatalogFailingStorage(LocalStorage):
        def set_item(self, key, value):
            if key == CATALOG_KEY:
                raise OSError("disk full")
            super().set_item(key, value)

    PersistenceGateway(storage).save(
        [CatalogItem(id="spyro", name="Spyro")],
        {"spyro": InventoryRecord(count=1)},
    )
    gw = PersistenceGateway(CatalogFailingStorage(storage.directory))
    with pytest.raises(PersistenceWriteError):
        gw.save(
            [CatalogItem(id="spyro", name="Spyro"), CatalogItem(id="eruptor", name="Eruptor")],
            {"spyro": InventoryRecord(count=1), "eruptor": InventoryRecord()},
        )

    state = PersistenceGateway(storage).load()
    assert [it.id for it in state.catalog] == ["spyro"]
    assert set(state.inventory) == {"spyro", "eruptor"}
    assert state.inventory["spyro"].count == 1
