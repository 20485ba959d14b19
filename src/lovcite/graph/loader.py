"""Load statute seed documents into the Neo4j graph.

Creates the chain Statute -> Provision and links each provision to the
statutes that amended it, the statutes and provisions it references and
the EU acts it cites. Every write is a MERGE, so reloading a seed is safe.
"""

from typing import Iterable, Optional
from pathlib import Path
import json
import logging

from ..collection.models import SeedProvision, StatuteDocument
from ..parser.eu_references import generate_eu_document_id
from ..parser.models import LegalDefinition
from .connection import get_connection, Neo4jConnection
from .schema import SchemaManager

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def provision_node_id(statute_id: str, provision_ref: str) -> str:
    return f"{statute_id}/{provision_ref}"


class StatuteLoader:
    """Loads statute seed documents into Neo4j."""

    def __init__(self, conn: Optional[Neo4jConnection] = None):
        self.conn = conn or get_connection()
        self.stats = {
            "statutes": 0,
            "provisions": 0,
            "amendments": 0,
            "references": 0,
            "eu_references": 0,
            "definitions": 0,
        }

    def load_from_json(self, json_path: str | Path) -> dict:
        """Load one seed JSON file.

        Returns:
            Statistics about loaded nodes and relationships
        """
        logger.info(f"Loading statute from {json_path}")
        with open(json_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return self.load_document(StatuteDocument.model_validate(data))

    def load_document(self, document: StatuteDocument) -> dict:
        """Load a statute, its provisions and their references."""
        with self.conn.session() as session:
            self._merge_statute(session, document)

            for ordering, provision in enumerate(document.provisions, start=1):
                self._merge_provision(session, document.id, provision, ordering)

            amendments = document.metadata_amendments
            if amendments and amendments.repealed_by_lov:
                session.run(
                    """
                    MATCH (s:Statute {id: $statute_id})
                    MERGE (r:Statute {id: $repealed_by})
                    MERGE (s)-[rel:REPEALED_BY]->(r)
                    SET rel.date = $repealed_date
                    """,
                    {
                        "statute_id": document.id,
                        "repealed_by": amendments.repealed_by_lov,
                        "repealed_date": amendments.repealed_date,
                    },
                )

        logger.info(f"Loaded {document.id}. Stats: {self.stats}")
        return self.stats

    def _merge_statute(self, session, document: StatuteDocument) -> None:
        query = """
        MERGE (s:Statute {id: $id})
        SET s.title = $title,
            s.short_name = $short_name,
            s.status = $status,
            s.issued_date = $issued_date,
            s.in_force_date = $in_force_date,
            s.url = $url,
            s.ingestion_mode = $ingestion_mode
        """
        session.run(
            query,
            {
                "id": document.id,
                "title": document.title,
                "short_name": document.short_name,
                "status": document.status,
                "issued_date": document.issued_date,
                "in_force_date": document.in_force_date,
                "url": document.url,
                "ingestion_mode": document.ingestion_mode,
            },
        )
        self.stats["statutes"] += 1

    def _merge_provision(
        self, session, statute_id: str, provision: SeedProvision, ordering: int
    ) -> None:
        provision_id = provision_node_id(statute_id, provision.provision_ref)
        query = """
        MATCH (s:Statute {id: $statute_id})
        MERGE (p:Provision {provision_id: $provision_id})
        SET p.statute_id = $statute_id,
            p.provision_ref = $provision_ref,
            p.chapter = $chapter,
            p.section = $section,
            p.title = $title,
            p.content = $content,
            p.ordering = $ordering
        MERGE (s)-[:HAS_PROVISION]->(p)
        """
        session.run(
            query,
            {
                "statute_id": statute_id,
                "provision_id": provision_id,
                "provision_ref": provision.provision_ref,
                "chapter": provision.chapter,
                "section": provision.section,
                "title": provision.title,
                "content": provision.content,
                "ordering": ordering,
            },
        )
        self.stats["provisions"] += 1

        for amendment in provision.amendments:
            session.run(
                """
                MATCH (p:Provision {provision_id: $provision_id})
                MERGE (a:Statute {id: $amended_by})
                MERGE (p)-[rel:AMENDED_BY {type: $type}]->(a)
                SET rel.position = $position, rel.raw_text = $raw_text
                """,
                {
                    "provision_id": provision_id,
                    "amended_by": amendment.amended_by_lov,
                    "type": amendment.amendment_type,
                    "position": amendment.position,
                    "raw_text": amendment.raw_text,
                },
            )
            self.stats["amendments"] += 1

        for ref in provision.cross_references:
            if ref.target_law_id:
                query = """
                MATCH (p:Provision {provision_id: $provision_id})
                MERGE (t:Statute {id: $target_id})
                MERGE (p)-[rel:REFERENCES]->(t)
                SET rel.raw_text = $raw_text
                """
                target_id = ref.target_law_id
            else:
                # Provision pinpoints without a statute id point into the same statute
                query = """
                MATCH (p:Provision {provision_id: $provision_id})
                MERGE (t:Provision {provision_id: $target_id})
                ON CREATE SET t.statute_id = $statute_id, t.provision_ref = $target_ref
                MERGE (p)-[rel:REFERENCES]->(t)
                SET rel.raw_text = $raw_text
                """
                target_id = provision_node_id(statute_id, ref.target_provision_ref)
            session.run(
                query,
                {
                    "provision_id": provision_id,
                    "statute_id": statute_id,
                    "target_id": target_id,
                    "target_ref": ref.target_provision_ref,
                    "raw_text": ref.raw_text,
                },
            )
            self.stats["references"] += 1

        for eu_ref in provision.eu_references:
            session.run(
                """
                MATCH (p:Provision {provision_id: $provision_id})
                MERGE (e:EUDocument {id: $eu_id})
                ON CREATE SET e.type = $type, e.year = $year, e.number = $number,
                    e.community = $community
                MERGE (p)-[rel:REFERENCES_EU]->(e)
                SET rel.reference_type = $reference_type,
                    rel.article = $article,
                    rel.full_text = $full_text
                """,
                {
                    "provision_id": provision_id,
                    "eu_id": generate_eu_document_id(eu_ref),
                    "type": eu_ref.type,
                    "year": eu_ref.year,
                    "number": eu_ref.number,
                    "community": eu_ref.community,
                    "reference_type": eu_ref.reference_type,
                    "article": eu_ref.article,
                    "full_text": eu_ref.full_text,
                },
            )
            self.stats["eu_references"] += 1

    def load_definitions(self, definitions: Iterable[LegalDefinition]) -> int:
        """Attach extracted term definitions to their source provisions."""
        loaded = 0
        with self.conn.session() as session:
            for definition in definitions:
                session.run(
                    """
                    MATCH (p:Provision {provision_id: $provision_id})
                    MERGE (t:Term {term_id: $term_id})
                    SET t.term = $term, t.definition = $definition, t.statute_id = $statute_id
                    MERGE (p)-[:DEFINES]->(t)
                    """,
                    {
                        "provision_id": provision_node_id(definition.document_id, definition.source_provision),
                        "term_id": f"{definition.document_id}/{definition.term.lower()}",
                        "term": definition.term,
                        "definition": definition.definition,
                        "statute_id": definition.document_id,
                    },
                )
                loaded += 1
        self.stats["definitions"] += loaded
        return loaded


def load_seed_directory(seed_dir: str | Path = "data/seed") -> dict:
    """Set up the schema, then load every seed JSON in a directory."""
    manager = SchemaManager()
    manager.connect()
    manager.setup_all()

    loader = StatuteLoader(manager.connection)
    for path in sorted(Path(seed_dir).glob("*.json")):
        loader.load_from_json(path)

    manager.close()
    return loader.stats
