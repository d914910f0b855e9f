"""Test the DuckDB key-value store."""

import pytest

from footprints.storage.kv_store import DuckDBKeyValueStore, InMemoryKeyValueStore, KeyValueStore


@pytest.fixture
def store(tmp_path):
    s = DuckDBKeyValueStore(str(tmp_path / "data" / "kv.duckdb"))
    yield s
    s.close()


class TestDuckDBKeyValueStore:
    def test_missing_key(self, store):
        assert store.get_string("Footprint EURUSD") is None

    def test_set_overwrites(self, store):
        store.set_string("Footprint EURUSD", "FP1|a")
        store.set_string("Footprint EURUSD", "FP1|b")
        store.flush()

        assert store.get_string("Footprint EURUSD") == "FP1|b"
        assert store.keys() == ["Footprint EURUSD"]

    def test_remove(self, store):
        store.set_string("k", "v")
        store.remove("k")
        assert store.get_string("k") is None

    def test_persists_across_connections(self, tmp_path):
        path = str(tmp_path / "kv.duckdb")
        first = DuckDBKeyValueStore(path)
        first.set_string("Footprint BTCUSD", "FP1|BTC-USD|0|0")
        first.close()

        second = DuckDBKeyValueStore(path)
        try:
            assert second.get_string("Footprint BTCUSD") == "FP1|BTC-USD|0|0"
        finally:
            second.close()


class TestKeyValueStoreInterface:
    def test_interface_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            KeyValueStore()

    def test_partial_implementation_is_rejected(self):
        class GetOnly(KeyValueStore):
            def get_string(self, key):
                return None

        with pytest.raises(TypeError):
            GetOnly()

    def test_in_memory_store_implements_interface(self):
        store = InMemoryKeyValueStore({"b": "2", "a": "1"})
        store.remove("b")
        store.flush()

        assert isinstance(store, KeyValueStore)
        assert store.keys() == ["a"]
        assert store.flush_count == 1
