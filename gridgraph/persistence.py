"""
GraphPersistence - saves and reloads a GraphStore through a KeyValueStore.

Layout in the store (two independent entries):
- "nodes": node id -> {id, x, y, r, dragging}
- "edges": edge id -> {id, node1: {...}, node2: {...}}
"""

import logging
from typing import Any, Optional

from gridgraph.codec import PersistenceCodec
from gridgraph.graph_store import GraphStore
from gridgraph.storage.protocol import KeyValueStore

logger = logging.getLogger(__name__)

NODES_KEY = "nodes"
EDGES_KEY = "edges"


class GraphPersistence:
    """
    Connects the codec to a key-value backend.

    load() never fails on bad stored data; it returns an empty store instead.
    """

    def __init__(self, backend: KeyValueStore, codec: Optional[PersistenceCodec] = None):
        self.backend = backend
        self.codec = codec or PersistenceCodec()

    def load(self, **store_options: Any) -> GraphStore:
        """Rebuild a GraphStore from the backend (empty if nothing usable is stored)."""
        nodes_text = self.backend.get_item(NODES_KEY)
        edges_text = self.backend.get_item(EDGES_KEY)
        store = self.codec.load(nodes_text, edges_text, **store_options)
        logger.info(f"Loaded {len(store.nodes)} nodes and {len(store.edges)} edges from {self.backend.backend_type} store")
        return store

    def save(self, store: GraphStore) -> None:
        nodes, edges = store.snapshot()
        nodes_text, edges_text = self.codec.encode(nodes, edges)
        self.backend.set_item(NODES_KEY, nodes_text)
        self.backend.set_item(EDGES_KEY, edges_text)
        logger.debug(f"Saved {len(nodes)} nodes and {len(edges)} edges")

    def clear(self) -> None:
        """Forget everything persisted."""
        self.backend.clear()
        logger.info("Cleared persisted graph state")
