"""Unit tests for schema statements and connection settings."""

import sys
from contextlib import contextmanager
from pathlib import Path

import pytest
from neo4j.exceptions import Neo4jError

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lovcite.graph.connection import Neo4jConnection, Neo4jSettings
from lovcite.graph.schema import SchemaManager, UNIQUE_KEYS


class SchemaError(Neo4jError):
    """A server error carrying only a message."""

    def __str__(self):
        return self.args[0]


class FakeSession:
    def __init__(self, fail_with=None):
        self.statements = []
        self.fail_with = fail_with

    def run(self, statement, params=None):
        self.statements.append(statement)
        if self.fail_with is not None:
            raise self.fail_with


class FakeConnection:
    uri = "bolt://fake:7687"

    def __init__(self, fail_with=None, reachable=True):
        self.fake_session = FakeSession(fail_with)
        self.reachable = reachable
        self.queries = []

    @contextmanager
    def session(self):
        yield self.fake_session

    def query(self, cypher, params=None):
        self.queries.append(cypher)
        if cypher.startswith("MATCH"):
            return [{"count": 2}]
        return [{"name": "x"}]

    def verify_connection(self):
        return self.reachable

    def close(self):
        pass


class TestSchemaManager:
    """Tests for SchemaManager against a fake connection."""

    def test_constraint_statements(self):
        assert SchemaManager.CONSTRAINTS[0] == (
            "CREATE CONSTRAINT statute_id IF NOT EXISTS FOR (n:Statute) REQUIRE n.id IS UNIQUE"
        )
        assert len(SchemaManager.CONSTRAINTS) == len(UNIQUE_KEYS)

    def test_index_statements(self):
        assert "CREATE INDEX provision_ref IF NOT EXISTS FOR (n:Provision) ON (n.provision_ref)" in (
            SchemaManager.INDEXES
        )

    def test_setup_all_runs_every_statement(self):
        conn = FakeConnection()
        result = SchemaManager(conn).setup_all()

        assert result == {"constraints_created": 4, "indexes_created": 4}
        assert conn.fake_session.statements == SchemaManager.CONSTRAINTS + SchemaManager.INDEXES

    def test_existing_items_are_skipped(self):
        conn = FakeConnection(fail_with=SchemaError("An equivalent constraint already exists"))
        assert SchemaManager(conn).create_constraints() == 0

    def test_other_errors_propagate(self):
        conn = FakeConnection(fail_with=SchemaError("Invalid input"))
        with pytest.raises(SchemaError):
            SchemaManager(conn).create_indexes()

    def test_unreachable_database(self):
        with pytest.raises(ConnectionError):
            SchemaManager(FakeConnection(reachable=False)).connect()

    def test_clear_database_per_label(self):
        conn = FakeConnection()
        SchemaManager(conn).clear_database()
        assert conn.fake_session.statements[0] == "MATCH (n:Statute) DETACH DELETE n"
        assert len(conn.fake_session.statements) == 4

    def test_schema_info(self):
        info = SchemaManager(FakeConnection()).get_schema_info()
        assert info["constraints"] == 1
        assert info["node_counts"]["Term"] == 2


class TestNeo4jSettings:
    """Tests for environment-driven connection settings."""

    def test_defaults(self, monkeypatch):
        for name in ("NEO4J_URI", "NEO4J_USER", "NEO4J_PASSWORD", "NEO4J_DATABASE"):
            monkeypatch.delenv(name, raising=False)
        settings = Neo4jSettings.from_env()
        assert settings.uri == "bolt://localhost:7687"
        assert settings.database == "neo4j"

    def test_environment_and_arguments(self, monkeypatch):
        monkeypatch.setenv("NEO4J_URI", "bolt://graph:7687")
        monkeypatch.setenv("NEO4J_DATABASE", "lover")

        conn = Neo4jConnection(password="secret")

        assert conn.uri == "bolt://graph:7687"
        assert conn.database == "lover"
        assert conn.settings.password == "secret"
