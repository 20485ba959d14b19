"""Extract EU directive and regulation references from Norwegian legal text.

Norwegian statutes cite EU acts in several shapes:
  - "direktiv 2016/680", "direktiv (EU) 2019/1152", "direktiv 95/46/EF"
  - "forordning (EU) 2016/679", "forordning (EF) nr. 765/2008"
  - "Europaparlaments- og rådsdirektiv ...", "Kommisjonens forordning (EU) ..."
"""

import logging
import re
from collections import Counter
from typing import Dict, List, Literal, Optional, Tuple

from ..utils.dates import normalize_two_digit_year
from ..utils.text import extract_context
from .models import EUCommunity, EUDocumentType, EUReference, ReferenceType

logger = logging.getLogger(__name__)


_ISSUING_BODY = r"Europaparlaments-\s*og\s+råds|rådets?|[Kk]ommisjonens?"

PATTERNS: Dict[str, Tuple[re.Pattern, ...]] = {
    "directive": (
        # direktiv (EU) 2016/680
        re.compile(r"direktiv\s+\(([^)]+)\)\s+(\d{2,4})/(\d+)", re.IGNORECASE),
        # direktiv 95/46/EF
        re.compile(r"direktiv\s+(\d{2,4})/(\d+)(?:/([A-ZÆØÅ]+))?", re.IGNORECASE),
        # Europaparlaments- og rådsdirektiv (EU) 2019/1152
        re.compile(
            rf"({_ISSUING_BODY})(?:direktiv|[\s-]+direktiv)\s+(?:\(([^)]+)\)\s+)?"
            r"(\d{2,4})/(\d+)(?:/([A-ZÆØÅ]+))?",
            re.IGNORECASE,
        ),
    ),
    "regulation": (
        # forordning (EU) 2016/679, forordning (EF) nr. 765/2008
        re.compile(r"forordning\s+\(([^)]+)\)\s+(?:nr\.?\s+)?(\d{2,4})/(\d+)", re.IGNORECASE),
        # Kommisjonens gjennomføringsforordning (EU) 2019/947
        re.compile(
            r"(Europaparlaments-\s*og\s+råds|rådets?|[Kk]ommisjonens?"
            r"(?:\s+gjennomføringsforordning|\s+delegerte\s+forordning)?)"
            r"\s+\(([^)]+)\)\s+(?:nr\.?\s+)?(\d{2,4})/(\d+)",
            re.IGNORECASE,
        ),
    ),
}

ARTICLE_PATTERN = re.compile(
    r"artikkel\s+([\d.]+(?:\s*,\s*[\d.]+)*(?:\s+og\s+[\d.]+)?)", re.IGNORECASE
)

# First keyword found in the context decides the reference type
IMPLEMENTATION_KEYWORDS: Tuple[Tuple[str, ReferenceType], ...] = (
    ("gjennomføring", "implements"),
    ("gjennomfører", "implements"),
    ("gjennomføre", "implements"),
    ("utfyller", "supplements"),
    ("utfylling", "supplements"),
    ("utfyllende", "supplements"),
    ("anvendelse", "applies"),
    ("anvendes", "applies"),
    ("i samsvar med", "complies_with"),
    ("i overensstemmelse med", "complies_with"),
    ("med hjemmel i", "cites_article"),
    ("i henhold til", "cites_article"),
    ("i medhold av", "cites_article"),
)

DEFAULT_REFERENCE_TYPE: Dict[str, ReferenceType] = {
    "directive": "implements",
    "regulation": "applies",
}

_ISSUING_BODY_HINT = re.compile(r"råd|kommisjon|Europa", re.IGNORECASE)
_EU_DOCUMENT_ID = re.compile(r"^(directive|regulation):(\d{4})/(\d+)$")


def parse_community(text: str) -> EUCommunity:
    """Normalize a community marker. Swedish EG/EEG map to EF/EØF."""
    normalized = text.upper().strip()
    if "EURATOM" in normalized:
        return "Euratom"
    if "EØF" in normalized:
        return "EØF"
    if "EF" in normalized and "EU" not in normalized:
        return "EF"
    if normalized == "EG":
        return "EF"
    if normalized == "EEG":
        return "EØF"
    return "EU"


def _to_int(value: Optional[str]) -> Optional[int]:
    if value is None or not value.isdigit():
        return None
    return int(value)


def _resolve_groups(
    doc_type: str, groups: Tuple[Optional[str], ...]
) -> Optional[Tuple[Optional[str], Optional[str], Optional[str], Optional[str]]]:
    """Map capture groups to (issuing_body, community, year, number).

    Returns None when no branch of the waterfall applies.
    """
    padded = tuple(groups) + (None,) * (5 - len(groups))
    first, second, third, fourth, fifth = padded[:5]

    if first and _ISSUING_BODY_HINT.search(first):
        community = parse_community(second or fifth or "EU")
        return first, community, third, fourth

    # Regulation patterns only ever capture a parenthesized community first
    if first and (doc_type == "regulation" or not first[0].isdigit()) and second and third:
        return None, parse_community(first), second, third

    if doc_type == "directive" and first and first[0].isdigit() and second:
        community = parse_community(third) if third else "EU"
        return None, community, first, second

    return None


def _build_reference(
    doc_type: EUDocumentType, match: re.Match, text: str
) -> Optional[EUReference]:
    resolved = _resolve_groups(doc_type, match.groups())
    if resolved is None:
        return None

    issuing_body, community, raw_year, raw_number = resolved
    year = _to_int(raw_year)
    number = _to_int(raw_number)
    if year is None or number is None:
        logger.debug(f"Discarding EU reference with non-numeric id: {match.group(0)!r}")
        return None

    year = normalize_two_digit_year(year)

    return EUReference(
        type=doc_type,
        id=f"{year}/{number}",
        year=year,
        number=number,
        community=community,
        issuing_body=issuing_body,
        full_text=match.group(0),
        context=extract_context(text, match.start(), len(match.group(0))),
    )


def enhance_reference(ref: EUReference) -> EUReference:
    """Fill article, implementation keyword and reference type from the context window."""
    updates = {}

    article_match = ARTICLE_PATTERN.search(ref.context)
    if article_match:
        updates["article"] = article_match.group(1).strip()
        updates["reference_type"] = "cites_article"

    lower_context = ref.context.lower()
    for keyword, reference_type in IMPLEMENTATION_KEYWORDS:
        if keyword in lower_context:
            updates["implementation_keyword"] = keyword
            updates.setdefault("reference_type", reference_type)
            break

    updates.setdefault("reference_type", ref.reference_type or DEFAULT_REFERENCE_TYPE[ref.type])
    return ref.model_copy(update=updates)


def extract_eu_references(text: str) -> List[EUReference]:
    """Extract deduplicated, enhanced EU references from text.

    Directive patterns run before regulation patterns; within each type the
    pattern order is fixed. The first reference seen for a
    (type, id, community) key wins.
    """
    references: List[EUReference] = []
    seen = set()

    for doc_type in ("directive", "regulation"):
        for pattern in PATTERNS[doc_type]:
            for match in pattern.finditer(text):
                ref = _build_reference(doc_type, match, text)
                if ref is None or ref.dedup_key in seen:
                    continue
                seen.add(ref.dedup_key)
                references.append(ref)

    return [enhance_reference(ref) for ref in references]


def generate_eu_document_id(ref: EUReference) -> str:
    """Graph id for an EU act: "regulation:2016/679"."""
    return f"{ref.type}:{ref.id}"


def parse_eu_document_id(document_id: str) -> Optional[dict]:
    """Split "directive:2016/680" into type, year and number."""
    match = _EU_DOCUMENT_ID.match(document_id)
    if not match:
        return None
    return {
        "type": match.group(1),
        "year": int(match.group(2)),
        "number": int(match.group(3)),
    }


def format_eu_reference(ref: EUReference, style: Literal["short", "full"] = "short") -> str:
    """Render an EU reference in Norwegian.

    short: "forordning (EU) 2016/679"
    full:  "Europaparlaments- og råds forordning (EU) 2016/679, artikkel 6.1.c"
    """
    label = "direktiv" if ref.type == "directive" else "forordning"
    community = ref.community or "EU"

    if style == "short":
        return f"{label} ({community}) {ref.id}"

    result = f"{ref.issuing_body} " if ref.issuing_body else ""
    result += f"{label} ({community}) {ref.id}"
    if ref.article:
        result += f", artikkel {ref.article}"
    return result


def generate_celex_number(ref: EUReference) -> str:
    """CELEX number, sector 3: 3 + year + L/R + four-digit number.

    Legacy "nr. 765/2008" captures put the act number in ``year``; those
    are read number-first so the CELEX year is always the four-digit one.
    """
    type_code = "L" if ref.type == "directive" else "R"
    year, number = ref.year, ref.number
    if year < 1000 <= number:
        year, number = number, year
    return f"3{year}{type_code}{number:04d}"


def summarize_eu_references(references: List[EUReference]) -> dict:
    """Counts by type, community and reference type, plus the most cited acts."""
    by_act = Counter(generate_eu_document_id(ref) for ref in references)
    return {
        "total": len(references),
        "by_type": dict(Counter(ref.type for ref in references)),
        "by_community": dict(Counter(ref.community or "EU" for ref in references)),
        "by_reference_type": dict(Counter(ref.reference_type for ref in references)),
        "most_cited": by_act.most_common(10),
    }
