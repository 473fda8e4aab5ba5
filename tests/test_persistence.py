import json

import pytest

from gridgraph.graph_store import GraphStore
from gridgraph.persistence import EDGES_KEY, NODES_KEY, GraphPersistence
from gridgraph.storage import FileBackend, MemoryBackend


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def persistence(backend):
    return GraphPersistence(backend)


def sample_store():
    store = GraphStore(grid=48)
    for x in (0, 100, 200):
        store.create_node(x, 0)
    store.delete_node("1")
    return store


def test_save_writes_two_independent_entries(persistence, backend):
    persistence.save(sample_store())
    assert sorted(backend.keys()) == [EDGES_KEY, NODES_KEY]
    assert set(json.loads(backend.get_item(NODES_KEY))) == {"0", "2"}
    assert set(json.loads(backend.get_item(EDGES_KEY))) == {"0:2"}


def test_load_round_trip(persistence):
    original = sample_store()
    persistence.save(original)

    loaded = persistence.load(grid=48)

    assert list(loaded.nodes) == ["0", "2"]
    assert list(loaded.edges) == list(original.edges)
    assert loaded.create_node(500, 500).id == "3"


def test_load_empty_backend(persistence):
    store = persistence.load()
    assert store.nodes == {}
    assert store.edges == {}


def test_load_corrupt_backend(persistence, backend):
    backend.set_item(NODES_KEY, "not json")
    backend.set_item(EDGES_KEY, "also not json")
    store = persistence.load()
    assert len(store) == 0


def test_load_passes_store_options(persistence):
    store = persistence.load(grid=32, monotonic_ids=False, min_radius=4)
    assert store.grid == 32
    assert store.monotonic_ids is False
    assert store.min_radius == 4


def test_clear(persistence, backend):
    persistence.save(sample_store())
    persistence.clear()
    assert backend.keys() == []
    assert len(persistence.load()) == 0


def test_file_backed_session_survives_restart(tmp_path):
    path = tmp_path / "state.json"
    first = GraphPersistence(FileBackend(path))
    store = first.load()
    store.create_node(10, 10)
    store.create_node(50, 50)
    first.save(store)

    second = GraphPersistence(FileBackend(path))
    reloaded = second.load()
    assert [(n.id, n.x, n.y) for n in reloaded.nodes.values()] == [("0", 0, 0), ("1", 48, 48)]
    assert list(reloaded.edges) == ["0:1"]
