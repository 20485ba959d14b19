"""Citation store backed by the Neo4j statute graph."""

from typing import Optional

from ..citation.models import StoredDocument
from .connection import Neo4jConnection, get_connection
from .loader import provision_node_id


class GraphCitationStore:
    """Looks up statutes and provisions loaded by StatuteLoader."""

    def __init__(self, conn: Optional[Neo4jConnection] = None):
        self.conn = conn or get_connection()

    def get_document(self, document_id: str) -> Optional[StoredDocument]:
        with self.conn.session() as session:
            record = session.run(
                "MATCH (s:Statute {id: $id}) WHERE s.title IS NOT NULL "
                "RETURN s.id AS id, s.title AS title, s.status AS status",
                {"id": document_id},
            ).single()
        if record is None:
            return None
        return StoredDocument(id=record["id"], title=record["title"], status=record["status"] or "in_force")

    def provision_exists(self, document_id: str, provision_ref: str) -> bool:
        with self.conn.session() as session:
            record = session.run(
                "MATCH (:Statute {id: $statute_id})-[:HAS_PROVISION]->"
                "(p:Provision {provision_id: $provision_id}) RETURN count(p) AS count",
                {
                    "statute_id": document_id,
                    "provision_id": provision_node_id(document_id, provision_ref),
                },
            ).single()
        return record["count"] > 0
