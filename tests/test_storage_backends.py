"""
Tests for storage backends.

Tests FileBackend, MemoryBackend and the backend factory.
"""

import json
import logging

import pytest

from gridgraph.storage.protocol import KeyValueStore
from gridgraph.storage.file_backend import FileBackend
from gridgraph.storage.memory_backend import MemoryBackend
from gridgraph.storage.factory import create_backend, get_backend_type


class TestFileBackend:
    """Tests for the JSON file backend."""

    @pytest.fixture
    def store_path(self, tmp_path):
        return tmp_path / "db" / "state.json"

    def test_conforms_to_protocol(self, store_path):
        backend = FileBackend(store_path)
        assert isinstance(backend, KeyValueStore)
        assert backend.backend_type == "file"

    def test_missing_file_is_empty(self, store_path):
        backend = FileBackend(store_path)
        assert backend.get_item("nodes") is None
        assert backend.keys() == []
        assert store_path.parent.exists()

    def test_set_item_persists_across_instances(self, store_path):
        backend = FileBackend(store_path)
        backend.set_item("nodes", '{"0": {}}')
        backend.set_item("edges", "{}")

        with open(store_path, encoding="utf-8") as f:
            assert json.load(f) == {"nodes": '{"0": {}}', "edges": "{}"}

        reopened = FileBackend(store_path)
        assert reopened.get_item("nodes") == '{"0": {}}'
        assert sorted(reopened.keys()) == ["edges", "nodes"]

    def test_no_temp_files_left_behind(self, store_path):
        backend = FileBackend(store_path)
        backend.set_item("a", "1")
        backend.set_item("a", "2")
        assert [p.name for p in store_path.parent.iterdir()] == ["state.json"]

    def test_remove_item(self, store_path):
        backend = FileBackend(store_path)
        backend.set_item("nodes", "x")
        assert backend.remove_item("nodes") is True
        assert backend.remove_item("nodes") is False
        assert FileBackend(store_path).get_item("nodes") is None

    def test_clear_deletes_file(self, store_path):
        backend = FileBackend(store_path)
        backend.set_item("nodes", "x")
        backend.clear()
        assert not store_path.exists()
        assert backend.get_item("nodes") is None

    def test_corrupt_file_is_treated_as_empty(self, store_path, caplog):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            backend = FileBackend(store_path)
        assert backend.keys() == []
        assert "Failed to read store file" in caplog.text

    def test_invalid_utf8_file_is_treated_as_empty(self, store_path, caplog):
        store_path.parent.mkdir(parents=True)
        store_path.write_bytes(b'{"nodes": "\xff\xfe"}')
        with caplog.at_level(logging.WARNING):
            backend = FileBackend(store_path)
        assert backend.keys() == []
        assert "Failed to read store file" in caplog.text

    def test_non_object_file_is_treated_as_empty(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("[1, 2, 3]", encoding="utf-8")
        assert FileBackend(store_path).keys() == []

    def test_non_string_values_are_ignored(self, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({"nodes": "{}", "edges": {"not": "a string"}}), encoding="utf-8")
        backend = FileBackend(store_path)
        assert backend.keys() == ["nodes"]


class TestMemoryBackend:
    def test_round_trip(self):
        backend = MemoryBackend()
        assert isinstance(backend, KeyValueStore)
        assert backend.backend_type == "memory"
        backend.set_item("nodes", "{}")
        assert backend.get_item("nodes") == "{}"
        assert backend.remove_item("nodes") is True
        assert backend.remove_item("nodes") is False

    def test_initial_items_are_copied(self):
        items = {"nodes": "{}"}
        backend = MemoryBackend(items)
        backend.clear()
        assert backend.keys() == []
        assert items == {"nodes": "{}"}


class TestBackendFactory:
    """Tests for the backend factory."""

    def test_get_backend_type_default(self):
        assert get_backend_type() == "file"
        assert get_backend_type({}) == "file"

    def test_get_backend_type_from_config(self):
        assert get_backend_type({"storage_backend": "memory"}) == "memory"

    def test_unknown_backend_falls_back_to_file(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert get_backend_type({"storage_backend": "redis"}) == "file"
        assert "Unknown storage backend" in caplog.text

    def test_create_file_backend(self, tmp_path):
        path = tmp_path / "state.json"
        backend = create_backend({"storage_backend": "file", "storage_path": str(path)})
        assert isinstance(backend, FileBackend)
        assert backend.path == path

    def test_create_memory_backend(self):
        assert isinstance(create_backend({"storage_backend": "memory"}), MemoryBackend)

    def test_force_backend_and_path_override(self, tmp_path):
        backend = create_backend({"storage_backend": "memory"}, force_backend="file", path=tmp_path / "s.json")
        assert isinstance(backend, FileBackend)
        assert backend.path == tmp_path / "s.json"
