"""Unit tests for the graph loader and graph-backed citation store."""

import json
import sys
from contextlib import contextmanager
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lovcite.collection.models import SeedProvision, StatuteDocument
from lovcite.graph.loader import StatuteLoader, provision_node_id
from lovcite.graph.store import GraphCitationStore
from lovcite.parser.models import (
    AmendmentReference,
    EUReference,
    ExtractedRef,
    LegalDefinition,
    StatuteMetadataAmendments,
)


class FakeResult:
    def __init__(self, record=None):
        self.record = record

    def single(self):
        return self.record


class FakeSession:
    """Records every query instead of talking to Neo4j."""

    def __init__(self, records=None):
        self.calls = []
        self.records = records or []

    def run(self, query, params=None):
        self.calls.append((query, params or {}))
        return FakeResult(self.records.pop(0) if self.records else None)


class FakeConnection:
    def __init__(self, records=None):
        self.fake_session = FakeSession(records)

    @contextmanager
    def session(self):
        yield self.fake_session


def make_document():
    provision = SeedProvision(
        provision_ref="1:2",
        chapter="1",
        section="2",
        content="Forordning (EU) 2016/679 gjelder. Endret ved lov 20 juni 2014 nr. 49.",
        amendments=[
            AmendmentReference(
                amended_by_lov="LOV-2014-06-20-49",
                amendment_type="endret",
                position="inline",
                raw_text="Endret ved lov 20 juni 2014 nr. 49",
            )
        ],
        cross_references=[
            ExtractedRef(target_law_id="LOV-2005-06-17-62", raw_text="LOV-2005-06-17-62"),
            ExtractedRef(target_provision_ref="2:3", raw_text="2 kap. 3 §"),
        ],
        eu_references=[
            EUReference(
                type="regulation",
                id="2016/679",
                year=2016,
                number=679,
                community="EU",
                reference_type="applies",
                full_text="Forordning (EU) 2016/679",
                context="Forordning (EU) 2016/679 gjelder.",
            )
        ],
    )
    return StatuteDocument(
        id="LOV-2018-06-15-38",
        title="Lov om behandling av personopplysninger (personopplysningsloven)",
        url="https://lovdata.no/dokument/NL/lov/2018-06-15-38",
        metadata_amendments=StatuteMetadataAmendments(repealed_by_lov="LOV-2030-01-01-1"),
        provisions=[provision],
    )


def queries_containing(session, text):
    return [params for query, params in session.calls if text in query]


class TestStatuteLoader:
    """Tests for StatuteLoader."""

    def test_load_document_stats(self):
        conn = FakeConnection()
        stats = StatuteLoader(conn).load_document(make_document())

        assert stats == {
            "statutes": 1,
            "provisions": 1,
            "amendments": 1,
            "references": 2,
            "eu_references": 1,
            "definitions": 0,
        }

    def test_load_document_relationships(self):
        conn = FakeConnection()
        StatuteLoader(conn).load_document(make_document())
        session = conn.fake_session

        provisions = queries_containing(session, "HAS_PROVISION")
        assert provisions[0]["provision_id"] == "LOV-2018-06-15-38/1:2"
        assert provisions[0]["ordering"] == 1

        amended = queries_containing(session, "AMENDED_BY")
        assert amended[0]["amended_by"] == "LOV-2014-06-20-49"

        eu = queries_containing(session, "REFERENCES_EU")
        assert eu[0]["eu_id"] == "regulation:2016/679"

        repealed = queries_containing(session, "REPEALED_BY")
        assert repealed[0]["repealed_by"] == "LOV-2030-01-01-1"

    def test_provision_pinpoint_targets_same_statute(self):
        conn = FakeConnection()
        StatuteLoader(conn).load_document(make_document())

        targets = [
            params["target_id"]
            for params in queries_containing(conn.fake_session, "MERGE (p)-[rel:REFERENCES]->")
        ]
        assert targets == ["LOV-2005-06-17-62", "LOV-2018-06-15-38/2:3"]

    def test_no_repeal_without_metadata(self):
        document = make_document().model_copy(update={"metadata_amendments": None})
        conn = FakeConnection()
        StatuteLoader(conn).load_document(document)
        assert queries_containing(conn.fake_session, "REPEALED_BY") == []

    def test_load_from_json(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(
            json.dumps(make_document().model_dump(by_alias=True, exclude_none=True)),
            encoding="utf-8",
        )

        stats = StatuteLoader(FakeConnection()).load_from_json(path)

        assert stats["provisions"] == 1
        assert stats["eu_references"] == 1

    def test_load_definitions(self):
        conn = FakeConnection()
        loader = StatuteLoader(conn)
        loaded = loader.load_definitions([
            LegalDefinition(
                document_id="LOV-2018-06-15-38",
                term="Behandlingsansvarlig",
                definition="den som bestemmer formålet med behandlingen.",
                source_provision="1:2",
            )
        ])

        assert loaded == 1
        assert loader.stats["definitions"] == 1
        params = queries_containing(conn.fake_session, "DEFINES")[0]
        assert params["provision_id"] == "LOV-2018-06-15-38/1:2"
        assert params["term_id"] == "LOV-2018-06-15-38/behandlingsansvarlig"


def test_provision_node_id():
    assert provision_node_id("LOV-2018-06-15-38", "5 a") == "LOV-2018-06-15-38/5 a"


class TestGraphCitationStore:
    """Tests for GraphCitationStore."""

    def test_get_document(self):
        conn = FakeConnection([{"id": "LOV-2018-06-15-38", "title": "Personopplysningsloven", "status": None}])
        document = GraphCitationStore(conn).get_document("LOV-2018-06-15-38")

        assert document.title == "Personopplysningsloven"
        assert document.status == "in_force"

    def test_get_document_missing(self):
        assert GraphCitationStore(FakeConnection()).get_document("LOV-1900-01-01-1") is None

    def test_provision_exists(self):
        conn = FakeConnection([{"count": 1}])
        assert GraphCitationStore(conn).provision_exists("LOV-2018-06-15-38", "1:2")
        assert conn.fake_session.calls[0][1]["provision_id"] == "LOV-2018-06-15-38/1:2"

    def test_provision_missing(self):
        conn = FakeConnection([{"count": 0}])
        assert not GraphCitationStore(conn).provision_exists("LOV-2018-06-15-38", "9:9")
