"""Shared text and date helpers."""

from .text import normalize_whitespace, normalize_section_ref, extract_context
from .dates import month_number, normalize_two_digit_year, parse_norwegian_date

__all__ = [
    "normalize_whitespace",
    "normalize_section_ref",
    "extract_context",
    "month_number",
    "normalize_two_digit_year",
    "parse_norwegian_date",
]
