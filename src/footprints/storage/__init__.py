"""
Storage layer: tick log, its FP1 codec and key-value persistence.
"""

from .tick_storage import BarTickView, FootprintTickStorage
from .kv_store import KeyValueStore, InMemoryKeyValueStore, DuckDBKeyValueStore
from .tick_persistence import TickPersistence

__all__ = [
    "BarTickView",
    "FootprintTickStorage",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "DuckDBKeyValueStore",
    "TickPersistence",
]
