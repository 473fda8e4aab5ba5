"""
GridGraph - an interactive editor for grid-snapped undirected graphs.

Core modules:
- graph_store: GraphStore, the authoritative node/edge collections
- codec: PersistenceCodec, JSON round-trip of a GraphStore snapshot
- persistence: GraphPersistence, codec + key-value store wiring
"""

__version__ = "0.1.0"
