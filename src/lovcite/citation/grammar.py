"""Citation grammar for Norwegian (and legacy Swedish) legal citations.

Current formats:
  - LOV-2018-06-15-38 [kapittel 3] [§ 5]
  - LOV-2018-06-15-38 3:5
  - HR-2020-1234-A, LA-2019-5678, Rt. 2015 s. 1250
  - Prop. 56 L (2017-2018), Ot.prp. nr. 44 (2001-2002)
  - NOU 2009:1

Legacy formats, still accepted for stored data:
  - SFS 2018:218 [3 kap.] [5 §], 2018:218 3:5
  - Prop. 2017/18:105
  - SOU 2023:45, Ds 2022:10
  - NJA 2020 s. 45, HFD 2019 ref. 12, AD 2021 nr 5

Rules are tried top to bottom and the first match wins. The bare
"YYYY:N" statute rules come last so that report series and case law
numbers are never read as statute pinpoints.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from ..utils.text import normalize_whitespace
from .models import DocumentType, ParsedCitation

logger = logging.getLogger(__name__)


# Norwegian LOV: LOV-2018-06-15-38 [kapittel X] [§ Y], or LOV-2018-06-15-38 X:Y
LOV_PATTERN = re.compile(
    r"^(?:LOV\s+)?(LOV-\d{4}-\d{2}-\d{2}(?:-[a-z0-9]+)?)\s*"
    r"(?:"
    r"(?:(?:kapittel|kap\.?)\s+(\d+)\s*)?(?:§\s*(\d+\s*[a-z]?))?"
    r"|(\d+):(\d+\s*[a-z]?)"
    r")\s*$",
    re.IGNORECASE,
)

# Norwegian case law: HR-2020-1234-A, LA-2019-5678, LB-2020-12345
CASE_HR_PATTERN = re.compile(r"^(HR|LA|LB|LE|TING)-(\d{4})-(\d+)(?:-([A-Z]))?$", re.IGNORECASE)

# Historical Norwegian case law: Rt. 2015 s. 1250
CASE_RT_PATTERN = re.compile(r"^(Rt)\.\s*(\d{4})\s+s\.\s*(\d+)", re.IGNORECASE)

# Norwegian bills: Prop. 56 L (2017-2018), Ot.prp. nr. 44 (2001-2002)
PROP_NO_PATTERN = re.compile(
    r"^Prop\.?\s*(\d+)\s*(LS|L|S)?\s*\((\d{4}-\d{4})\)",
    re.IGNORECASE,
)
OT_PRP_PATTERN = re.compile(
    r"^Ot\.\s*prp\.?\s*(?:nr\.?\s*)?(\d+)\s*\((\d{4}-\d{4})\)",
    re.IGNORECASE,
)

# NOU 2009:1
NOU_PATTERN = re.compile(r"^NOU\s+(\d{4}:\d+)", re.IGNORECASE)

# Legacy Swedish bill: Prop. 2017/18:105
PROP_SE_PATTERN = re.compile(r"^Prop\.\s*(\d{4}/\d{2}:\d+)", re.IGNORECASE)

# Legacy report series
SOU_PATTERN = re.compile(r"^SOU\s+(\d{4}:\d+)", re.IGNORECASE)
DS_PATTERN = re.compile(r"^Ds\s+(\d{4}:\d+)", re.IGNORECASE)

# Legacy Swedish case law
CASE_NJA_PATTERN = re.compile(r"^(NJA)\s+(\d{4})\s+s\.\s*(\d+)", re.IGNORECASE)
CASE_HFD_PATTERN = re.compile(r"^(HFD)\s+(\d{4})\s+ref\.\s*(\d+)", re.IGNORECASE)
CASE_GENERIC_PATTERN = re.compile(r"^(AD|MD|MIG)\s+(\d{4})\s+(?:nr|ref\.?)\s*(\d+)", re.IGNORECASE)

# Legacy SFS: short form "2018:218 3:5", long form "SFS 2018:218 3 kap. 5 §"
SFS_SHORT_PATTERN = re.compile(r"^(?:SFS\s+)?(\d{4}:\d+)\s+(\d+):(\d+\s*[a-z]?)\s*$", re.IGNORECASE)
SFS_PATTERN = re.compile(
    r"^(?:SFS\s+)?(\d{4}:\d+)\s*(?:(\d+)\s*kap\.\s*)?(?:(\d+\s*[a-z]?)\s*§)?",
    re.IGNORECASE,
)


def _pinpoint(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return normalize_whitespace(value)


def _build_lov(raw: str, m: re.Match) -> ParsedCitation:
    chapter = m.group(2) or m.group(4)
    section = m.group(3) or m.group(5)
    return ParsedCitation(
        raw=raw,
        type=DocumentType.STATUTE,
        document_id=m.group(1).upper(),
        chapter=_pinpoint(chapter),
        section=_pinpoint(section),
        valid=True,
    )


def _build_case_hr(raw: str, m: re.Match) -> ParsedCitation:
    document_id = f"{m.group(1).upper()}-{m.group(2)}-{m.group(3)}"
    if m.group(4):
        document_id += f"-{m.group(4).upper()}"
    return ParsedCitation(raw=raw, type=DocumentType.CASE_LAW, document_id=document_id, valid=True)


def _build_case_rt(raw: str, m: re.Match) -> ParsedCitation:
    return ParsedCitation(
        raw=raw,
        type=DocumentType.CASE_LAW,
        document_id=f"Rt. {m.group(2)}",
        page=m.group(3),
        valid=True,
    )


def _build_prop_no(raw: str, m: re.Match) -> ParsedCitation:
    kind = f" {m.group(2).upper()}" if m.group(2) else ""
    return ParsedCitation(
        raw=raw,
        type=DocumentType.BILL,
        document_id=f"Prop. {m.group(1)}{kind} ({m.group(3)})",
        valid=True,
    )


def _build_ot_prp(raw: str, m: re.Match) -> ParsedCitation:
    return ParsedCitation(
        raw=raw,
        type=DocumentType.BILL,
        document_id=f"Ot.prp. nr. {m.group(1)} ({m.group(2)})",
        valid=True,
    )


def _single_group(doc_type: DocumentType) -> Callable[[str, re.Match], ParsedCitation]:
    def build(raw: str, m: re.Match) -> ParsedCitation:
        return ParsedCitation(raw=raw, type=doc_type, document_id=m.group(1), valid=True)
    return build


def _build_legacy_case(raw: str, m: re.Match) -> ParsedCitation:
    return ParsedCitation(
        raw=raw,
        type=DocumentType.CASE_LAW,
        document_id=f"{m.group(1).upper()} {m.group(2)}",
        page=m.group(3),
        valid=True,
    )


def _build_sfs(raw: str, m: re.Match) -> ParsedCitation:
    return ParsedCitation(
        raw=raw,
        type=DocumentType.STATUTE,
        document_id=m.group(1),
        chapter=_pinpoint(m.group(2)),
        section=_pinpoint(m.group(3)),
        valid=True,
    )


@dataclass(frozen=True)
class CitationRule:
    """One grammar rule: a pattern and the constructor for its match."""

    name: str
    pattern: re.Pattern
    build: Callable[[str, re.Match], ParsedCitation]


# Evaluated in order, first match wins.
CITATION_RULES = (
    CitationRule("lov", LOV_PATTERN, _build_lov),
    CitationRule("case_hr", CASE_HR_PATTERN, _build_case_hr),
    CitationRule("case_rt", CASE_RT_PATTERN, _build_case_rt),
    CitationRule("prop_no", PROP_NO_PATTERN, _build_prop_no),
    CitationRule("ot_prp", OT_PRP_PATTERN, _build_ot_prp),
    CitationRule("nou", NOU_PATTERN, _single_group(DocumentType.SOU)),
    CitationRule("prop_se", PROP_SE_PATTERN, _single_group(DocumentType.BILL)),
    CitationRule("sou", SOU_PATTERN, _single_group(DocumentType.SOU)),
    CitationRule("ds", DS_PATTERN, _single_group(DocumentType.DS)),
    CitationRule("case_nja", CASE_NJA_PATTERN, _build_legacy_case),
    CitationRule("case_hfd", CASE_HFD_PATTERN, _build_legacy_case),
    CitationRule("case_generic", CASE_GENERIC_PATTERN, _build_legacy_case),
    CitationRule("sfs_short", SFS_SHORT_PATTERN, _build_sfs),
    CitationRule("sfs", SFS_PATTERN, _build_sfs),
)


def parse_citation(citation: str) -> ParsedCitation:
    """Parse a legal citation string.

    Never raises for malformed input: unrecognized or empty strings come
    back with ``valid=False`` and an ``error`` message.
    """
    trimmed = citation.strip()
    if not trimmed:
        return ParsedCitation.invalid(citation, "Empty citation")

    for rule in CITATION_RULES:
        match = rule.pattern.match(trimmed)
        if match:
            logger.debug(f"Citation {trimmed!r} matched rule {rule.name}")
            return rule.build(citation, match)

    return ParsedCitation.invalid(citation, f'Unrecognized citation format: "{trimmed}"')


# Prefix sniffing, in the same order as CITATION_RULES.
_TYPE_SNIFFERS = (
    (re.compile(r"^(?:lov\s+)?lov-\d{4}-\d{2}-\d{2}(?:-[a-z0-9]+)?", re.IGNORECASE), DocumentType.STATUTE),
    (re.compile(r"^(?:hr|la|lb|le|ting)-\d{4}-", re.IGNORECASE), DocumentType.CASE_LAW),
    (re.compile(r"^rt\.\s*\d{4}", re.IGNORECASE), DocumentType.CASE_LAW),
    (re.compile(r"^(?:prop\.?|ot\.\s*prp\.?)", re.IGNORECASE), DocumentType.BILL),
    (re.compile(r"^nou\s", re.IGNORECASE), DocumentType.SOU),
    (re.compile(r"^sou\s", re.IGNORECASE), DocumentType.SOU),
    (re.compile(r"^ds\s", re.IGNORECASE), DocumentType.DS),
    (re.compile(r"^(?:nja|hfd|ad|md|mig)\s", re.IGNORECASE), DocumentType.CASE_LAW),
    (re.compile(r"^(?:sfs\s+)?\d{4}:\d+", re.IGNORECASE), DocumentType.STATUTE),
)


def detect_document_type(citation: str) -> Optional[DocumentType]:
    """Guess the document type from the citation prefix without a full parse.

    For any string that parse_citation accepts, the result equals the
    parsed type.
    """
    trimmed = citation.strip()
    for pattern, doc_type in _TYPE_SNIFFERS:
        if pattern.match(trimmed):
            return doc_type
    return None
