"""Neo4j schema for the statute citation graph.

Node Types:
- Statute: a Norwegian statute, keyed by LOV id
- Provision: one section of a statute, keyed by "<LOV id>/<provision_ref>"
- EUDocument: an EU directive or regulation, keyed by "directive:2016/680"
- Term: a defined term, keyed by "<LOV id>/<term>"

Key Relationships:
- HAS_PROVISION: Statute -> Provision
- AMENDED_BY: Provision -> Statute (amending statute)
- REPEALED_BY: Statute -> Statute
- REFERENCES: Provision -> Statute | Provision
- REFERENCES_EU: Provision -> EUDocument
- DEFINES: Provision -> Term
"""

from typing import List, NamedTuple, Optional
import logging

from neo4j.exceptions import Neo4jError

from .connection import Neo4jConnection, get_connection

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class PropertyRule(NamedTuple):
    """A named constraint or index on one node property."""

    name: str
    label: str
    prop: str

    def constraint(self) -> str:
        return (
            f"CREATE CONSTRAINT {self.name} IF NOT EXISTS "
            f"FOR (n:{self.label}) REQUIRE n.{self.prop} IS UNIQUE"
        )

    def index(self) -> str:
        return f"CREATE INDEX {self.name} IF NOT EXISTS FOR (n:{self.label}) ON (n.{self.prop})"


UNIQUE_KEYS = (
    PropertyRule("statute_id", "Statute", "id"),
    PropertyRule("provision_id", "Provision", "provision_id"),
    PropertyRule("eu_document_id", "EUDocument", "id"),
    PropertyRule("term_id", "Term", "term_id"),
)

LOOKUP_INDEXES = (
    PropertyRule("statute_status", "Statute", "status"),
    PropertyRule("provision_statute", "Provision", "statute_id"),
    PropertyRule("provision_ref", "Provision", "provision_ref"),
    PropertyRule("eu_document_type", "EUDocument", "type"),
)

NODE_LABELS = ("Statute", "Provision", "EUDocument", "Term")


class SchemaManager:
    """Creates and inspects the statute graph schema."""

    CONSTRAINTS = [rule.constraint() for rule in UNIQUE_KEYS]
    INDEXES = [rule.index() for rule in LOOKUP_INDEXES]
    NODE_LABELS = list(NODE_LABELS)

    def __init__(self, connection: Optional[Neo4jConnection] = None):
        self.connection = connection or get_connection()
        self._connected = False

    def connect(self) -> None:
        """Verify the database is reachable.

        Raises:
            ConnectionError: if Neo4j does not answer
        """
        if not self.connection.verify_connection():
            raise ConnectionError(f"Failed to verify Neo4j connection at {self.connection.uri}")
        self._connected = True
        logger.info(f"Connected to Neo4j at {self.connection.uri}")

    def close(self) -> None:
        self.connection.close()
        self._connected = False

    def _apply(self, rules, statement_for, kind: str) -> int:
        applied = 0
        with self.connection.session() as session:
            for rule in rules:
                try:
                    session.run(statement_for(rule))
                except Neo4jError as e:
                    # Older servers reject an equivalent schema item under another name
                    if "already exists" not in str(e).lower():
                        raise
                    logger.debug(f"{kind} {rule.name} already exists")
                    continue
                logger.info(f"Ensured {kind} {rule.name} on :{rule.label}({rule.prop})")
                applied += 1
        return applied

    def create_constraints(self) -> int:
        """Ensure every uniqueness constraint; returns how many statements ran."""
        return self._apply(UNIQUE_KEYS, PropertyRule.constraint, "constraint")

    def create_indexes(self) -> int:
        """Ensure every lookup index; returns how many statements ran."""
        return self._apply(LOOKUP_INDEXES, PropertyRule.index, "index")

    def setup_all(self) -> dict:
        if not self._connected:
            self.connect()

        logger.info("Setting up Neo4j schema...")
        return {
            "constraints_created": self.create_constraints(),
            "indexes_created": self.create_indexes(),
        }

    def clear_database(self) -> None:
        """Delete statute graph nodes and their relationships, label by label."""
        with self.connection.session() as session:
            for label in NODE_LABELS:
                session.run(f"MATCH (n:{label}) DETACH DELETE n")
        logger.warning("Statute graph cleared!")

    def get_constraints(self) -> List[dict]:
        return self.connection.query("SHOW CONSTRAINTS")

    def get_indexes(self) -> List[dict]:
        return self.connection.query("SHOW INDEXES")

    def get_schema_info(self) -> dict:
        """Constraint and index totals plus a node count per label."""
        counts = {
            label: self.connection.query(f"MATCH (n:{label}) RETURN count(n) AS count")[0]["count"]
            for label in NODE_LABELS
        }
        return {
            "constraints": len(self.get_constraints()),
            "indexes": len(self.get_indexes()),
            "node_counts": counts,
        }


def setup_schema() -> dict:
    """Connect, create constraints and indexes, and report schema info."""
    manager = SchemaManager()
    manager.connect()
    result = manager.setup_all()
    info = manager.get_schema_info()
    manager.close()
    return {**result, **info}
