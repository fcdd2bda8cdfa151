"""
Shared fixtures: a small five-figure catalog and stores backed by tmp_path.
"""
import pytest

from skytracker.data.schemas import CatalogItem
from skytracker.data.persistence import LocalStorage, PersistenceGateway
from skytracker.data.store import InventoryStore

SAMPLE_CSV = """id,name,element,category,game,imageUrl,link
spyro,Spyro,Magic,Core,Spyro's Adventure,https://img.example/spyro.png,
eruptor,Eruptor,Fire,Core,Spyro's Adventure,,
ignitor,Ignitor,Fire,Core,Spyro's Adventure,,
sunburn,Sunburn,Fire,Core,Spyro's Adventure,,
gill-grunt,Gill Grunt,Water,Core,Spyro's Adventure,,
"""


@pytest.fixture
def catalog():
    return [
        CatalogItem(id="spyro", name="Spyro", element="Magic", category="Core"),
        CatalogItem(id="eruptor", name="Eruptor", element="Fire", category="Core"),
        CatalogItem(id="ignitor", name="Ignitor", element="Fire", category="Core"),
        CatalogItem(id="sunburn", name="Sunburn", element="Fire", category="Core"),
        CatalogItem(id="gill-grunt", name="Gill Grunt", element="Water", category="Core"),
    ]


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage")


@pytest.fixture
def store(storage, catalog):
    s = InventoryStore(PersistenceGateway(storage)).load()
    s.import_catalog(catalog)
    return s


@pytest.fixture
def empty_store(storage):
    return InventoryStore(PersistenceGateway(storage)).load()
