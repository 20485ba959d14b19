"""Date parsing utilities for Norwegian legal documents."""

import re
from datetime import date
from typing import Optional

from dateutil.parser import parse as dateutil_parse


# Norwegian month names, full and abbreviated
MONTH_MAP = {
    "januar": 1,
    "februar": 2,
    "mars": 3,
    "april": 4,
    "mai": 5,
    "juni": 6,
    "juli": 7,
    "august": 8,
    "september": 9,
    "oktober": 10,
    "november": 11,
    "desember": 12,
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "okt": 10,
    "nov": 11,
    "des": 12,
}

# Two-digit years below the pivot belong to the 2000s
YEAR_PIVOT = 50

_NORWEGIAN_DATE = re.compile(r"(\d{1,2})\s*\.?\s*([a-zæøå]+)\.?\s+(\d{4})", re.IGNORECASE)
_DOTTED_DATE = re.compile(r"\b(\d{1,2})\.(\d{1,2})\.(\d{4})\b")
_ISO_DATE = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b")


def month_number(name: str) -> Optional[int]:
    """Look up a Norwegian month name or abbreviation.

    Unknown tokens return None; callers discard the match rather than
    guessing a month.
    """
    if not name:
        return None
    return MONTH_MAP.get(name.strip().rstrip(".").lower())


def normalize_two_digit_year(year: int, pivot: int = YEAR_PIVOT) -> int:
    """Expand a two-digit year: 49 -> 2049, 50 -> 1950. Four-digit years pass through."""
    if year < 100:
        return 2000 + year if year < pivot else 1900 + year
    return year


def parse_norwegian_date(date_str: str) -> Optional[date]:
    """Parse a date string in Norwegian format.
    
    Handles formats like:
    - "20. juni 2014"
    - "20 jun 2014"
    - "20.06.2014"
    - "2014-06-20"
    
    Args:
        date_str: Date string to parse
        
    Returns:
        Parsed date or None if parsing fails
    """
    if not date_str:
        return None
    
    date_str = date_str.lower().strip()
    
    match = _ISO_DATE.search(date_str)
    if match:
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return None

    match = _DOTTED_DATE.search(date_str)
    if match:
        try:
            return date(int(match.group(3)), int(match.group(2)), int(match.group(1)))
        except ValueError:
            return None
    
    match = _NORWEGIAN_DATE.search(date_str)
    if match:
        month = month_number(match.group(2))
        if month:
            try:
                return date(int(match.group(3)), month, int(match.group(1)))
            except ValueError:
                return None
    
    # Try standard date formats
    try:
        parsed = dateutil_parse(date_str, dayfirst=True)
        return parsed.date()
    except (ValueError, OverflowError):
        pass
    
    return None


def format_date_iso(d: date) -> str:
    """Format a date as ISO string (YYYY-MM-DD)."""
    return d.isoformat()
