"""Unit tests for Lovdata HTML extraction."""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lovcite.parser.lovdata_html import (
    extract_meta_fields,
    extract_plain_text_provisions,
    extract_provisions,
    extract_title,
    infer_status,
    load_html,
    parse_dotted_date,
)
from lovcite.parser.statute_parser import ParserSettings


LOVDATA_HTML = """
<html>
<head><meta property="og:title" content="Personopplysningsloven - Lovdata"></head>
<body>
<div id="documentMeta">
  <h1>Lov om behandling av personopplysninger (personopplysningsloven)</h1>
  <table>
    <tr><th>Korttittel:</th><td>Personopplysningsloven</td></tr>
    <tr><th>Ikrafttredelse:</th><td>20.07.2018</td></tr>
    <tr><th>Sist endret:</th><td>LOV-2020-05-29-55 fra 01.06.2020</td></tr>
  </table>
</div>
<div class="kapittel" data-id="KAPITTEL_1">
  <div class="morTag_p paragraf" data-id="PARAGRAF_1">
    <span class="paragrafValue">§ 1.</span>
    <span class="paragrafTittel">Gjennomføring av personvernforordningen</span>
    <p class="avsnitt">Forordning (EU) 2016/679 gjelder som norsk lov.</p>
  </div>
  <div class="morTag_p paragraf" data-id="PARAGRAF_2A">
    <p class="avsnitt">Loven gjelder for</p>
    <table class="listeItem"><tr><td>a)</td><td>helt eller delvis automatisert behandling</td></tr></table>
  </div>
</div>
<div class="kapittel" data-id="KAPITTEL_2">
  <div class="morTag_p paragraf" data-id="PARAGRAF_1"><p class="avsnitt">Kort.</p></div>
  <div class="morTag_p paragraf" data-id="PARAGRAF_1"><p class="avsnitt">Lengre innhold i samme paragraf.</p></div>
</div>
</body>
</html>
"""


@pytest.fixture
def soup():
    return load_html(LOVDATA_HTML)


class TestMetadata:
    """Tests for document metadata."""

    def test_meta_fields(self, soup):
        metadata = extract_meta_fields(soup)
        assert metadata["Korttittel"] == "Personopplysningsloven"
        assert metadata["Ikrafttredelse"] == "20.07.2018"
        assert metadata["Sist endret"].startswith("LOV-2020-05-29-55")

    def test_title_from_heading(self, soup):
        assert extract_title(soup) == "Lov om behandling av personopplysninger (personopplysningsloven)"

    def test_title_from_og_meta(self):
        soup = load_html('<html><head><meta property="og:title" content="Lov om test"></head><body></body></html>')
        assert extract_title(soup) == "Lov om test"

    def test_no_title(self):
        assert extract_title(load_html("<html><body><p>x</p></body></html>")) is None

    def test_infer_status(self):
        assert infer_status("Lov om test", {}) == "in_force"
        assert infer_status("Lov om test (opphevet)", {}) == "repealed"
        assert infer_status("Lov om test", {"Status": "Opphevet"}) == "repealed"

    def test_parse_dotted_date(self):
        assert parse_dotted_date("20.07.2018") == "2018-07-20"
        assert parse_dotted_date("snarest") is None
        assert parse_dotted_date(None) is None

    def test_parse_date_variants(self):
        assert parse_dotted_date("1. juli 2018") == "2018-07-01"
        assert parse_dotted_date("01.07.2021, 01.01.2022 iflg. res.") == "2021-07-01"

    def test_meta_values_are_composed(self):
        html = (
            "<html><body><div id='documentMeta'><table>"
            "<tr><th>Departement:</th><td>Justis- og beredskapsdepartementet, Ha\u030aloga</td></tr>"
            "</table></div></body></html>"
        )
        metadata = extract_meta_fields(load_html(html))
        assert metadata["Departement"].endswith("H\u00e5loga")


class TestProvisions:
    """Tests for paragraf extraction."""

    def test_refs_and_order(self, soup):
        provisions = extract_provisions(soup)
        assert [p.provision_ref for p in provisions] == ["1:1", "1:2 a", "2:1"]

    def test_title_and_content(self, soup):
        first = extract_provisions(soup)[0]
        assert first.title == "Gjennomføring av personvernforordningen"
        assert first.content == "Forordning (EU) 2016/679 gjelder som norsk lov."
        assert first.chapter == "1"
        assert first.section == "1"

    def test_list_items(self, soup):
        second = extract_provisions(soup)[1]
        assert second.section == "2 a"
        assert second.content == "Loven gjelder for\na) helt eller delvis automatisert behandling"

    def test_duplicate_keeps_longer_content(self, soup):
        last = extract_provisions(soup)[2]
        assert last.content == "Lengre innhold i samme paragraf."

    def test_page_without_paragraphs(self):
        assert extract_provisions(load_html("<html><body><p>Ingen paragrafer.</p></body></html>")) == []


def test_plain_text_fallback():
    html = "<html><body><pre>1 kap. Innledning\n1 § Denne loven gjelder.\n2 § Neste.</pre></body></html>"
    provisions = extract_plain_text_provisions(load_html(html), ParserSettings())
    assert [p.provision_ref for p in provisions] == ["1:1", "1:2"]
