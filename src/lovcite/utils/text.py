"""Text processing utilities."""

import re
import unicodedata
from typing import Optional


_WHITESPACE = re.compile(r"\s+")
_LOWERCASE_START = re.compile(r"^[a-zæøåäö]")


def normalize_whitespace(text: Optional[str]) -> str:
    """Collapse runs of whitespace to single spaces and trim.
    
    Args:
        text: Text to normalize
        
    Returns:
        Normalized text, empty string for None
    """
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def normalize_text(text: Optional[str]) -> str:
    """Normalize unicode (NFC) and whitespace.

    Lovdata HTML mixes precomposed and decomposed forms of æ, ø and å,
    which breaks exact matching against the month table and keywords.
    """
    if not text:
        return ""
    return normalize_whitespace(unicodedata.normalize("NFC", text))


def normalize_section_ref(section: str) -> str:
    """Normalize a section identifier: "5  A" -> "5 a"."""
    return normalize_whitespace(section).lower()


def normalize_html_section_ref(value: str) -> str:
    """Normalize a section id taken from a Lovdata node id.
    
    Handles formats like:
    - "5"
    - "5a" / "5A"
    - "§ 5 a."
    
    Args:
        value: Raw section marker
        
    Returns:
        Section identifier with the letter suffix separated by a space
    """
    cleaned = re.sub(r"[.§]", "", value).strip()
    match = re.match(r"^(\d+)\s*([A-Za-zÆØÅæøå])$", cleaned)
    if match:
        return f"{match.group(1)} {match.group(2).lower()}"
    return cleaned


def starts_with_lowercase(text: str) -> bool:
    """Return True when text starts with a lower-case Norwegian/Swedish letter."""
    if not text:
        return False
    return bool(_LOWERCASE_START.match(text))


def extract_context(text: str, index: int, match_length: int, radius: int = 100) -> str:
    """Return the whitespace-normalized window around a match.
    
    Args:
        text: Full source text
        index: Start offset of the match
        match_length: Length of the match
        radius: Characters to include on each side
        
    Returns:
        Context window
    """
    start = max(0, index - radius)
    end = min(len(text), index + match_length + radius)
    return normalize_whitespace(text[start:end])
