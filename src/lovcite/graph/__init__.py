"""Neo4j graph database operations module."""

from .connection import Neo4jConnection, Neo4jSettings, get_connection
from .schema import SchemaManager, setup_schema
from .loader import StatuteLoader, load_seed_directory, provision_node_id
from .store import GraphCitationStore

__all__ = [
    "Neo4jConnection",
    "Neo4jSettings",
    "get_connection",
    "SchemaManager",
    "setup_schema",
    "StatuteLoader",
    "load_seed_directory",
    "provision_node_id",
    "GraphCitationStore",
]
