"""Tests for the Neo4j connection."""

import pytest

from lovcite.graph.connection import Neo4jConnection

pytestmark = pytest.mark.integration


def test_neo4j_connection(neo4j_connection):
    """Test that we can connect to Neo4j and run a simple query."""
    with neo4j_connection.session() as session:
        record = session.run("RETURN 1 AS test").single()
        assert record["test"] == 1


def test_unreachable_server_reports_false():
    conn = Neo4jConnection(uri="bolt://127.0.0.1:1", password="wrong")
    try:
        assert conn.verify_connection() is False
    finally:
        conn.close()
