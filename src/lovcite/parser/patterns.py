"""Regex patterns for Norwegian statute structure."""

import re
from typing import Optional

# Line-level structure markers.
# Norwegian and Swedish statutes both use "N kap." for chapters and "N §" for sections.
PATTERNS = {
    "chapter": re.compile(r"^(\d+)\s*kap\.\s*(.*)$"),
    "section": re.compile(r"^(\d+\s*[a-z]?)\s*§\s*(.*)$", re.IGNORECASE),
    # Footer lines such as "Lov 20 juni 2014 nr. 49." or "Lag (2018:218)."
    "law_note": re.compile(
        r"^(?:Lov|Lag)\s+(?:\d{1,2}\s+[a-zæøåäö]+\s+\d{4}\s+nr\.?\s*\d+|\(\d{4}:\d+\))\.?$"
    ),
    "structural_prefix": re.compile(r"^\d+\s*(?:kap\.|§)"),
}

_SECTION_NUMBER = re.compile(r"^(\d+)")
_SECTION_ORDINAL = re.compile(r"^(\d+)(?:\s*([a-z]))?$", re.IGNORECASE)
_CAPITALIZED = re.compile(r"^[A-ZÅÄÖÆØ]")

DEFAULT_MAX_TITLE_LENGTH = 100


def section_number(section: str) -> Optional[int]:
    """Leading integer of a section id: "5 a" -> 5."""
    match = _SECTION_NUMBER.match(section)
    if not match:
        return None
    return int(match.group(1))


def section_ordinal(section: str) -> Optional[int]:
    """Sortable value of a section id.

    ordinal = number * 100 + letter offset, so "5" < "5 a" < "5 b" < "6".
    """
    match = _SECTION_ORDINAL.match(section)
    if not match:
        return None
    base = int(match.group(1))
    suffix = (match.group(2) or "").lower()
    if not suffix:
        return base * 100
    return base * 100 + max(ord(suffix) - ord("a") + 1, 0)


def is_likely_title(line: str, max_length: int = DEFAULT_MAX_TITLE_LENGTH) -> bool:
    """Short, capitalized lines that are not structure markers or law footers."""
    return (
        0 < len(line) < max_length
        and bool(_CAPITALIZED.match(line))
        and not PATTERNS["structural_prefix"].match(line)
        and not PATTERNS["law_note"].match(line)
    )


def detect_line_type(line: str) -> tuple[str, str, str] | None:
    """
    Classify a statute line.
    
    Returns:
        Tuple of (line_type, marker, remaining_text) or None for body text.
        line_type is "chapter" or "section".
    """
    text = line.strip()
    
    match = PATTERNS["chapter"].match(text)
    if match:
        return ("chapter", match.group(1), match.group(2).strip())
    
    match = PATTERNS["section"].match(text)
    if match:
        return ("section", match.group(1), match.group(2).strip())
    
    return None
