"""Parse amendment references from Norwegian statute text.

Norwegian statutes mark amendments with standard phrases:
  - "Endret ved lov 20 juni 2014 nr. 49."
  - "Tilføyd ved lov 20. juni 2014 nr. 49."
  - "Opphevet ved lov LOV-2014-06-20-49."
  - bare LOV-YYYY-MM-DD-NN identifiers

Each reference is resolved to the canonical id of the amending statute,
e.g. "20 juni 2014 nr. 49" -> "LOV-2014-06-20-49".
"""

import logging
import re
from typing import Dict, Iterable, List, Optional, Protocol, Set

from ..utils.dates import month_number
from .models import (
    AmendmentReference,
    AmendmentSection,
    ProvisionAmendment,
    StatuteMetadataAmendments,
)

logger = logging.getLogger(__name__)


LOV_ID_PATTERN = re.compile(r"(LOV-\d{4}-\d{2}-\d{2}-\d+)")
_LOV_ID_EXACT = re.compile(r"^LOV-\d{4}-\d{2}-\d{2}-\d+$")

# "20 juni 2014 nr. 49", "1. jan 2020 nr 3"
_DATE_NR = r"\d{1,2}\s*\.?\s*[a-zæøå]+\.?\s+\d{4}\s+nr\.?\s*\d+"
_DATE_NR_GROUPS = re.compile(
    r"(\d{1,2})\s*\.?\s*([a-zæøå]+)\.?\s+(\d{4})\s+nr\.?\s*(\d+)", re.IGNORECASE
)
_LOV_REF = rf"((?:{_DATE_NR})|(?:LOV-\d{{4}}-\d{{2}}-\d{{2}}-\d+))"

# Explicit phrasing, in priority order
AMENDMENT_PATTERNS = (
    ("endret", re.compile(rf"[Ee]ndret\s+ved\s+lov\s+{_LOV_REF}")),
    ("tilføyd", re.compile(rf"[Tt]ilf[øo]y(?:d|et)\s+ved\s+lov\s+{_LOV_REF}")),
    ("opphevet", re.compile(rf"[Oo]pphevet\s+ved\s+lov\s+{_LOV_REF}")),
)

# Entry into force: "trer i kraft", "ikrafttredelse"
FORCE_PATTERN = re.compile(r"[Tt]rer\s+i\s+kraft|[Ii]krafttredelse")

_AMENDMENT_HEADER = re.compile(
    r"[Ii]\s+lov\s+(.+?)\s*(?:\((LOV-\d{4}-\d{2}-\d{2}-\d+)\))?\s*gjøres\s+følgende\s+endring"
)
_PRECEDING_SECTION = re.compile(r"§\s*(\d+)")
_EFFECTIVE_DATE = re.compile(
    r"trer\s+i\s+kraft\s+(?:den\s+)?(\d{1,2})\s*\.?\s*([a-zæøå]+)\s+(\d{4})", re.IGNORECASE
)
_ISO_DATE = re.compile(r"(\d{4}-\d{2}-\d{2})")


def lov_id_from_reference(ref: str) -> Optional[str]:
    """Resolve a date-and-number phrase (or a LOV id) to a LOV id.

    Returns None when the month token is not a known Norwegian month.
    """
    ref = ref.strip()
    if _LOV_ID_EXACT.match(ref):
        return ref

    match = _DATE_NR_GROUPS.search(ref)
    if not match:
        return None

    month = month_number(match.group(2))
    if month is None:
        logger.debug(f"Discarding reference with unknown month: {ref!r}")
        return None

    day = match.group(1).zfill(2)
    return f"LOV-{match.group(3)}-{month:02d}-{day}-{match.group(4)}"


def extract_amendment_references(content: str) -> List[AmendmentReference]:
    """
    Extract amendment references from provision text.

    Priority:
    1. Explicit phrasing (endret, tilføyd, opphevet), in that order
    2. Only if none matched: bare LOV ids, typed as entry into force when
       the text mentions it, otherwise as amendments
    """
    amendments: List[AmendmentReference] = []
    seen: Set[str] = set()

    for amendment_type, pattern in AMENDMENT_PATTERNS:
        for match in pattern.finditer(content):
            lov_id = lov_id_from_reference(match.group(1))
            if lov_id and lov_id not in seen:
                seen.add(lov_id)
                amendments.append(
                    AmendmentReference(
                        amended_by_lov=lov_id,
                        amendment_type=amendment_type,
                        position="inline",
                        raw_text=match.group(0),
                    )
                )

    if amendments:
        return amendments

    is_transition = bool(FORCE_PATTERN.search(content))
    for match in LOV_ID_PATTERN.finditer(content):
        lov_id = match.group(1)
        if lov_id in seen:
            continue
        seen.add(lov_id)
        amendments.append(
            AmendmentReference(
                amended_by_lov=lov_id,
                amendment_type="ikrafttredelse" if is_transition else "endret",
                position="transition" if is_transition else "suffix",
                raw_text=match.group(0),
            )
        )

    return amendments


class _HasContent(Protocol):
    provision_ref: str
    content: str


def parse_statute_amendments(provisions: Iterable[_HasContent]) -> List[ProvisionAmendment]:
    """Run extract_amendment_references over every provision; skip provisions with none."""
    results = []
    for provision in provisions:
        amendments = extract_amendment_references(provision.content)
        if amendments:
            results.append(
                ProvisionAmendment(provision_ref=provision.provision_ref, amendments=amendments)
            )
    return results


def extract_metadata_amendments(metadata: Dict[str, str]) -> StatuteMetadataAmendments:
    """Extract repeal information from document metadata.

    Lovdata metadata rows look like:
        Opphevet: 2018-05-25
        Opphevet ved lov: LOV-2018-06-15-38
    """
    result = StatuteMetadataAmendments()

    repeal_date = metadata.get("Opphevet")
    if repeal_date:
        date_match = _ISO_DATE.search(repeal_date)
        if date_match:
            result.repealed_date = date_match.group(1)

    repealed_by = metadata.get("Opphevet ved lov") or metadata.get("Opphevet ved")
    if repealed_by:
        lov_match = LOV_ID_PATTERN.search(repealed_by)
        if lov_match:
            result.repealed_by_lov = lov_match.group(1)
            result.referenced_lovs.append(lov_match.group(1))
        result.repeal_description = repealed_by

    for value in metadata.values():
        for match in LOV_ID_PATTERN.finditer(value):
            if match.group(1) not in result.referenced_lovs:
                result.referenced_lovs.append(match.group(1))

    return result


def parse_amending_statute(text: str) -> List[AmendmentSection]:
    """
    Find the amendment blocks of an amending statute.

    Amending statutes are typically structured as:
        § 1
        I lov 15. juni 2018 nr. 38 om behandling av personopplysninger
        gjøres følgende endringer:
        § 5 skal lyde: ...
    """
    sections = []

    for match in _AMENDMENT_HEADER.finditer(text):
        target_name = match.group(1).strip()
        target_id = match.group(2) or lov_id_from_reference(target_name) or "unknown"

        preceding = text[max(0, match.start() - 100):match.start()]
        section_matches = _PRECEDING_SECTION.findall(preceding)

        sections.append(
            AmendmentSection(
                section_ref=f"§ {section_matches[-1]}" if section_matches else "unknown",
                target_statute_id=target_id,
                target_statute_name=target_name,
                change_type="endret",
                description=f"Endringer i {target_name} ({target_id})",
            )
        )

    return sections


def is_valid_lov_id(lov_id: str) -> bool:
    """Return True for LOV-YYYY-MM-DD-NN."""
    return bool(_LOV_ID_EXACT.match(lov_id))


def normalize_lov_id(lov_id: str) -> Optional[str]:
    """Pull the LOV id out of surrounding text or whitespace."""
    match = LOV_ID_PATTERN.search(lov_id)
    return match.group(1) if match else None


def extract_effective_date(text: str) -> Optional[str]:
    """Return the ISO date a statute enters into force, if stated.

    "Denne loven trer i kraft 1. juli 2021" -> "2021-07-01"
    """
    match = _EFFECTIVE_DATE.search(text)
    if match:
        month = month_number(match.group(2))
        if month:
            return f"{match.group(3)}-{month:02d}-{match.group(1).zfill(2)}"

    iso_match = _ISO_DATE.search(text)
    return iso_match.group(1) if iso_match else None
