"""Format parsed citations per Norwegian citation conventions.

Norwegian LOV:
  - full:     "LOV LOV-2018-06-15-38 kapittel 3 § 5"
  - short:    "LOV-2018-06-15-38 3:5"
  - pinpoint: "kapittel 3 § 5"

Legacy SFS:
  - full:     "SFS 2018:218 3 kap. 5 §"
  - short:    "2018:218 3:5"
  - pinpoint: "3 kap. 5 §"
"""

import re
from typing import Optional, Union

from .models import CitationFormat, DocumentType, ParsedCitation


_LOV_ID = re.compile(r"^LOV-\d{4}-\d{2}-\d{2}(?:-[A-Za-z0-9]+)?$", re.IGNORECASE)

# Page/paragraph connector by case-law id prefix; modern docket numbers use "avsnitt".
CASE_LAW_CONNECTORS = (
    ("Rt.", "s."),
    ("NJA", "s."),
    ("HFD", "ref."),
    ("AD ", "nr"),
    ("MD ", "nr"),
    ("MIG ", "nr"),
)
DEFAULT_CASE_LAW_CONNECTOR = "avsnitt"


def is_norwegian_lov(document_id: str) -> bool:
    """Return True for date-based LOV identifiers."""
    return bool(_LOV_ID.match(document_id))


def format_citation(
    citation: ParsedCitation,
    style: Union[CitationFormat, str] = CitationFormat.FULL,
) -> str:
    """Format a parsed citation into a display string.

    Invalid citations are returned as their raw input.
    """
    style = CitationFormat(style)

    if not citation.valid:
        return citation.raw

    if citation.type == DocumentType.STATUTE:
        return _format_statute(citation, style)
    if citation.type == DocumentType.BILL:
        return _format_bill(citation)
    if citation.type == DocumentType.SOU:
        return f"NOU {citation.document_id}"
    if citation.type == DocumentType.DS:
        return f"Ds {citation.document_id}"
    if citation.type == DocumentType.CASE_LAW:
        return _format_case_law(citation)
    return citation.raw


def _format_statute(citation: ParsedCitation, style: CitationFormat) -> str:
    document_id = citation.document_id
    chapter = citation.chapter
    section = citation.section
    is_lov = is_norwegian_lov(document_id)

    if style == CitationFormat.PINPOINT:
        if chapter and section:
            return f"kapittel {chapter} § {section}" if is_lov else f"{chapter} kap. {section} §"
        if section:
            return f"§ {section}" if is_lov else f"{section} §"
        if chapter:
            return f"kapittel {chapter}" if is_lov else f"{chapter} kap."
        # Pinpoints never carry the document id
        return ""

    if style == CitationFormat.SHORT:
        if chapter and section:
            return f"{document_id} {chapter}:{section}"
        if section:
            return f"{document_id} § {section}" if is_lov else f"{document_id} {section} §"
        if chapter:
            return f"{document_id} kapittel {chapter}" if is_lov else f"{document_id} {chapter} kap."
        return document_id

    # Word order follows each era: "kapittel 3 § 5" vs "3 kap. 5 §"
    if is_lov:
        result = f"LOV {document_id}"
        if chapter:
            result += f" kapittel {chapter}"
        if section:
            result += f" § {section}"
    else:
        result = f"SFS {document_id}"
        if chapter:
            result += f" {chapter} kap."
        if section:
            result += f" {section} §"
    return result


def _format_bill(citation: ParsedCitation) -> str:
    # Norwegian ids carry the session in parentheses
    if "(" in citation.document_id:
        return citation.document_id
    return f"Prop. {citation.document_id}"


def case_law_connector(document_id: str) -> str:
    """Pick the page/paragraph connector word from the id prefix."""
    for prefix, connector in CASE_LAW_CONNECTORS:
        if document_id.startswith(prefix):
            return connector
    return DEFAULT_CASE_LAW_CONNECTOR


def _format_case_law(citation: ParsedCitation) -> str:
    if not citation.page:
        return citation.document_id
    return f"{citation.document_id} {case_law_connector(citation.document_id)} {citation.page}"


def format_provision_ref(chapter: Optional[str], section: str) -> str:
    """Build a provision reference: "3:5" for chaptered statutes, "5" for flat ones."""
    if chapter:
        return f"{chapter}:{section}"
    return section
