"""Statute structure parsing and reference extraction."""

from .models import (
    Provision,
    ParseDiagnostics,
    ProvisionParseResult,
    AmendmentReference,
    ProvisionAmendment,
    StatuteMetadataAmendments,
    AmendmentSection,
    ExtractedRef,
    EUReference,
    LegalDefinition,
)
from .statute_parser import (
    ParserSettings,
    StatuteParser,
    SECTION_REJECTION_RULES,
    parse_statute_provisions,
    parse_statute_text,
    is_chaptered_statute,
)
from .amendment_parser import (
    extract_amendment_references,
    extract_metadata_amendments,
    lov_id_from_reference,
    parse_statute_amendments,
    parse_amending_statute,
    is_valid_lov_id,
    normalize_lov_id,
    extract_effective_date,
)
from .cross_references import extract_cross_references
from .eu_references import (
    extract_eu_references,
    generate_eu_document_id,
    parse_eu_document_id,
    format_eu_reference,
    generate_celex_number,
    summarize_eu_references,
)
from .definitions import extract_document_definitions, deduplicate_definitions

__all__ = [
    "Provision",
    "ParseDiagnostics",
    "ProvisionParseResult",
    "AmendmentReference",
    "ProvisionAmendment",
    "StatuteMetadataAmendments",
    "AmendmentSection",
    "ExtractedRef",
    "EUReference",
    "LegalDefinition",
    "ParserSettings",
    "StatuteParser",
    "SECTION_REJECTION_RULES",
    "parse_statute_provisions",
    "parse_statute_text",
    "is_chaptered_statute",
    "extract_amendment_references",
    "extract_metadata_amendments",
    "lov_id_from_reference",
    "parse_statute_amendments",
    "parse_amending_statute",
    "is_valid_lov_id",
    "normalize_lov_id",
    "extract_effective_date",
    "extract_cross_references",
    "extract_eu_references",
    "generate_eu_document_id",
    "parse_eu_document_id",
    "format_eu_reference",
    "generate_celex_number",
    "summarize_eu_references",
    "extract_document_definitions",
    "deduplicate_definitions",
]
