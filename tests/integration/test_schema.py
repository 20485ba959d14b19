"""Tests for Neo4j schema setup."""

import pytest

from lovcite.graph.schema import SchemaManager

pytestmark = pytest.mark.integration


@pytest.fixture(scope="module")
def schema_manager(neo4j_connection):
    """Create and setup schema manager."""
    manager = SchemaManager(neo4j_connection)
    manager.connect()
    manager.setup_all()
    return manager


def test_constraints_created(schema_manager):
    """Test that all constraints exist."""
    constraint_names = [c.get("name", "") for c in schema_manager.get_constraints()]

    for name in ["statute_id", "provision_id", "eu_document_id", "term_id"]:
        assert name in constraint_names, f"Missing constraint: {name}"


def test_indexes_created(schema_manager):
    """Test that all indexes exist."""
    index_names = [i.get("name", "") for i in schema_manager.get_indexes()]

    for name in ["statute_status", "provision_statute", "provision_ref", "eu_document_type"]:
        assert name in index_names, f"Missing index: {name}"


def test_setup_is_idempotent(schema_manager):
    result = schema_manager.setup_all()
    assert result["constraints_created"] == len(SchemaManager.CONSTRAINTS)
    assert result["indexes_created"] == len(SchemaManager.INDEXES)


def test_schema_info(schema_manager):
    """Test schema info retrieval."""
    info = schema_manager.get_schema_info()

    assert info["constraints"] >= 4
    assert info["indexes"] >= 4
    assert set(info["node_counts"]) == {"Statute", "Provision", "EUDocument", "Term"}
