"""Citation grammar: parsing, formatting and validation of citation strings."""

from .models import DocumentType, CitationFormat, ParsedCitation, CitationValidation, StoredDocument
from .grammar import CITATION_RULES, parse_citation, detect_document_type
from .formatter import format_citation, format_provision_ref, is_norwegian_lov
from .validator import CitationStore, InMemoryCitationStore, validate_citation

__all__ = [
    "DocumentType",
    "CitationFormat",
    "ParsedCitation",
    "CitationValidation",
    "StoredDocument",
    "CITATION_RULES",
    "parse_citation",
    "detect_document_type",
    "format_citation",
    "format_provision_ref",
    "is_norwegian_lov",
    "CitationStore",
    "InMemoryCitationStore",
    "validate_citation",
]
