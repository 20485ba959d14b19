"""Shared fixtures for integration tests that need a live Neo4j."""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from dotenv import load_dotenv

load_dotenv()

from lovcite.graph.connection import Neo4jConnection


@pytest.fixture(scope="module")
def neo4j_connection():
    """A verified connection; skips the module when Neo4j is not running."""
    conn = Neo4jConnection()
    if not conn.verify_connection():
        conn.close()
        pytest.skip(f"Neo4j not reachable at {conn.uri}")
    yield conn
    conn.close()
