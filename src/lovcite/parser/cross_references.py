"""Extract domestic cross-references from provision text.

Recognized shapes:
  - "LOV-2018-06-15-38" (another statute)
  - "(2018:218)" (legacy SFS number)
  - "3 kap. 5 §" and "kapittel 3 § 5" (a provision pinpoint)
"""

import re
from typing import List, Set

from ..utils.text import normalize_whitespace
from .models import ExtractedRef


LOV_REF_PATTERN = re.compile(r"(LOV-\d{4}-\d{2}-\d{2}-\d+)")
SFS_REF_PATTERN = re.compile(r"\((\d{4}:\d+)\)")
PROVISION_REF_PATTERNS = (
    re.compile(r"(\d+)\s*kap\.\s*(\d+\s*[a-z]?)\s*§"),
    re.compile(r"kapittel\s+(\d+)\s*§\s*(\d+(?:\s*[a-h]\b)?)"),
)


def extract_cross_references(text: str) -> List[ExtractedRef]:
    """Return one reference per unique target, in first-seen order per shape."""
    refs: List[ExtractedRef] = []
    seen: Set[str] = set()

    def add(key: str, ref: ExtractedRef) -> None:
        if key not in seen:
            seen.add(key)
            refs.append(ref)

    for match in LOV_REF_PATTERN.finditer(text):
        add(f"lov:{match.group(1)}", ExtractedRef(target_law_id=match.group(1), raw_text=match.group(0)))

    for match in SFS_REF_PATTERN.finditer(text):
        add(f"sfs:{match.group(1)}", ExtractedRef(target_law_id=match.group(1), raw_text=match.group(0)))

    for pattern in PROVISION_REF_PATTERNS:
        for match in pattern.finditer(text):
            provision_ref = f"{match.group(1)}:{normalize_whitespace(match.group(2))}"
            add(
                f"prov:{provision_ref}",
                ExtractedRef(target_provision_ref=provision_ref, raw_text=match.group(0)),
            )

    return refs
