"""Unit tests for cross-reference and EU reference extraction."""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lovcite.parser.cross_references import extract_cross_references
from lovcite.parser.eu_references import (
    extract_eu_references,
    format_eu_reference,
    generate_celex_number,
    generate_eu_document_id,
    parse_community,
    parse_eu_document_id,
    summarize_eu_references,
)


class TestCrossReferences:
    """Tests for domestic cross-references."""

    def test_all_shapes_in_order(self):
        text = "Se LOV-2018-06-15-38, (2018:218) og 3 kap. 5 a § samt kapittel 2 § 4."
        refs = extract_cross_references(text)

        assert refs[0].target_law_id == "LOV-2018-06-15-38"
        assert refs[1].target_law_id == "2018:218"
        assert refs[1].raw_text == "(2018:218)"
        assert refs[2].target_provision_ref == "3:5 a"
        assert refs[3].target_provision_ref == "2:4"
        assert len(refs) == 4

    def test_duplicates_collapse(self):
        text = "LOV-2018-06-15-38 og LOV-2018-06-15-38; 3 kap. 5 § og 3 kap. 5 §."
        refs = extract_cross_references(text)
        assert len(refs) == 2

    def test_no_references(self):
        assert extract_cross_references("Denne loven gjelder for alle.") == []


class TestEUReferences:
    """Tests for EU directive and regulation references."""

    def test_regulation_with_community(self):
        refs = extract_eu_references("Loven gjennomfører forordning (EU) 2016/679 i norsk rett.")

        assert len(refs) == 1
        ref = refs[0]
        assert ref.type == "regulation"
        assert ref.id == "2016/679"
        assert ref.year == 2016
        assert ref.number == 679
        assert ref.community == "EU"
        assert ref.full_text == "forordning (EU) 2016/679"
        assert ref.reference_type == "implements"
        assert ref.implementation_keyword == "gjennomfører"

    def test_regulation_with_nr(self):
        refs = extract_eu_references("forordning (EF) nr. 765/2008")
        assert refs[0].id == "765/2008"
        assert refs[0].community == "EF"

    def test_directive_with_community_suffix(self):
        refs = extract_eu_references("Se direktiv 95/46/EF.")

        assert refs[0].type == "directive"
        assert refs[0].id == "1995/46"
        assert refs[0].community == "EF"
        assert refs[0].reference_type == "implements"

    def test_directive_defaults_to_eu(self):
        refs = extract_eu_references("direktiv 2016/680")
        assert refs[0].community == "EU"

    @pytest.mark.parametrize("text,year", [
        ("direktiv 49/1", 2049),
        ("direktiv 50/1", 1950),
        ("direktiv 2004/38", 2004),
    ])
    def test_two_digit_year_pivot(self, text, year):
        assert extract_eu_references(text)[0].year == year

    def test_issuing_body(self):
        refs = extract_eu_references("Kommisjonens (EU) 2019/947 gjelder.")
        assert refs[0].type == "regulation"
        assert refs[0].issuing_body == "Kommisjonens"
        assert refs[0].community == "EU"

    def test_article_reference(self):
        refs = extract_eu_references("etter artikkel 6 i forordning (EU) 2016/679")
        assert refs[0].article == "6"
        assert refs[0].reference_type == "cites_article"

    def test_regulation_default_reference_type(self):
        refs = extract_eu_references("forordning (EU) 2016/679")
        assert refs[0].reference_type == "applies"
        assert refs[0].implementation_keyword is None

    def test_dedup_on_type_id_community(self):
        text = (
            "forordning (EU) 2016/679 og igjen forordning (EU) 2016/679, "
            "men også direktiv (EU) 2016/679 og forordning (EF) 2016/679."
        )
        refs = extract_eu_references(text)
        keys = [ref.dedup_key for ref in refs]

        assert len(keys) == len(set(keys)) == 3

    def test_directives_before_regulations(self):
        refs = extract_eu_references("forordning (EU) 2016/679 og direktiv (EU) 2016/680")
        assert [ref.type for ref in refs] == ["directive", "regulation"]

    def test_context_window(self):
        text = "a" * 300 + " forordning (EU) 2016/679 " + "b" * 300
        ref = extract_eu_references(text)[0]
        assert "forordning (EU) 2016/679" in ref.context
        assert len(ref.context) <= len(ref.full_text) + 200

    def test_serializes_with_camel_case_aliases(self):
        ref = extract_eu_references("forordning (EU) 2016/679")[0]
        data = ref.model_dump(by_alias=True)
        assert data["fullText"] == "forordning (EU) 2016/679"
        assert data["referenceType"] == "applies"

    def test_no_references(self):
        assert extract_eu_references("Denne loven gjelder for alle.") == []


class TestCommunity:
    """Community marker normalization."""

    @pytest.mark.parametrize("marker,expected", [
        ("EU", "EU"),
        ("EF", "EF"),
        ("EØF", "EØF"),
        ("Euratom", "Euratom"),
        ("EG", "EF"),
        ("EEG", "EØF"),
        ("EU/EF", "EU"),
    ])
    def test_parse_community(self, marker, expected):
        assert parse_community(marker) == expected


class TestEUHelpers:
    """Document ids, display and CELEX numbers."""

    def test_document_id_round_trip(self):
        ref = extract_eu_references("forordning (EU) 2016/679")[0]
        document_id = generate_eu_document_id(ref)
        assert document_id == "regulation:2016/679"
        assert parse_eu_document_id(document_id) == {"type": "regulation", "year": 2016, "number": 679}

    def test_parse_invalid_document_id(self):
        assert parse_eu_document_id("treaty:2016/1") is None

    def test_format(self):
        ref = extract_eu_references("Kommisjonens (EU) 2019/947, artikkel 3")[0]
        assert format_eu_reference(ref) == "forordning (EU) 2019/947"
        assert format_eu_reference(ref, "full") == "Kommisjonens forordning (EU) 2019/947, artikkel 3"

    def test_celex(self):
        directive = extract_eu_references("direktiv 95/46/EF")[0]
        regulation = extract_eu_references("forordning (EU) 2016/679")[0]
        assert generate_celex_number(directive) == "31995L0046"
        assert generate_celex_number(regulation) == "32016R0679"

    def test_celex_for_legacy_number_year_form(self):
        legacy = extract_eu_references("forordning (EF) nr. 765/2008")[0]
        assert legacy.year == 765
        assert generate_celex_number(legacy) == "32008R0765"

    def test_summary(self):
        refs = extract_eu_references("direktiv 95/46/EF og forordning (EU) 2016/679")
        summary = summarize_eu_references(refs)
        assert summary["total"] == 2
        assert summary["by_type"] == {"directive": 1, "regulation": 1}
        assert summary["by_community"] == {"EF": 1, "EU": 1}
