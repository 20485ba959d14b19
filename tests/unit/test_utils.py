"""Unit tests for text and date helpers."""

import pytest
import sys
from datetime import date
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lovcite.utils.dates import (
    format_date_iso,
    month_number,
    normalize_two_digit_year,
    parse_norwegian_date,
)
from lovcite.utils.text import (
    extract_context,
    normalize_html_section_ref,
    normalize_section_ref,
    normalize_text,
    normalize_whitespace,
    starts_with_lowercase,
)


class TestDates:
    """Tests for Norwegian date handling."""

    @pytest.mark.parametrize("name,expected", [
        ("juni", 6),
        ("Desember", 12),
        ("okt", 10),
        ("jan.", 1),
        ("mai", 5),
        ("smarch", None),
        ("", None),
    ])
    def test_month_number(self, name, expected):
        assert month_number(name) == expected

    @pytest.mark.parametrize("year,expected", [
        (49, 2049),
        (50, 1950),
        (0, 2000),
        (99, 1999),
        (2016, 2016),
    ])
    def test_year_pivot(self, year, expected):
        assert normalize_two_digit_year(year) == expected

    @pytest.mark.parametrize("value,expected", [
        ("20. juni 2014", date(2014, 6, 20)),
        ("20 jun 2014", date(2014, 6, 20)),
        ("20.06.2014", date(2014, 6, 20)),
        ("2014-06-20", date(2014, 6, 20)),
        ("31.02.2014", None),
        ("ukjent", None),
        ("", None),
    ])
    def test_parse_norwegian_date(self, value, expected):
        assert parse_norwegian_date(value) == expected

    def test_format_iso(self):
        assert format_date_iso(date(2018, 6, 5)) == "2018-06-05"


class TestText:
    """Tests for text normalization."""

    def test_normalize_whitespace(self):
        assert normalize_whitespace("  a \n\t b  ") == "a b"
        assert normalize_whitespace(None) == ""

    def test_normalize_text_composes_unicode(self):
        decomposed = "bla\u030a"
        assert normalize_text(decomposed) == "bl\u00e5"

    def test_section_refs(self):
        assert normalize_section_ref("5  A") == "5 a"
        assert normalize_html_section_ref("5A") == "5 a"
        assert normalize_html_section_ref("§ 12.") == "12"

    def test_starts_with_lowercase(self):
        assert starts_with_lowercase("skal anvendes")
        assert starts_with_lowercase("økonomisk")
        assert not starts_with_lowercase("Skal")
        assert not starts_with_lowercase("")

    def test_extract_context(self):
        text = "x" * 50 + "MATCH" + "y" * 50
        assert extract_context(text, 50, 5, radius=10) == "x" * 10 + "MATCH" + "y" * 10
