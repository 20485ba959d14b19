"""Extract legal term definitions from statute provisions."""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List

from ..utils.text import normalize_whitespace
from .models import LegalDefinition


@dataclass(frozen=True)
class DefinitionPattern:
    """A definition phrasing with the groups holding term and definition."""

    regex: re.Pattern
    term_group: int = 1
    definition_group: int = 2


# Specific phrasings first
DEFINITION_PATTERNS = (
    # Med X menes i denne lov ...
    DefinitionPattern(re.compile(r"Med\s+([^.]+?)\s+menes\s+i\s+denne\s+(?:lov|forskrift)\s+([^.]+?)\.")),
    DefinitionPattern(re.compile(r"Med\s+([^.]+?)\s+menes\s+([^.]+?)\.")),
    DefinitionPattern(
        re.compile(r"Med\s+([^.]+?)\s+forst(?:å|aa)s\s+i\s+denne\s+(?:lov|forskrift)\s+([^.]+?)\.")
    ),
    DefinitionPattern(re.compile(r"Med\s+([^.]+?)\s+forst(?:å|aa)s\s+([^.]+?)\.")),
    # I denne lov menes med X ...
    DefinitionPattern(re.compile(r"I\s+denne\s+(?:lov|forskrift)\s+menes\s+med\s+([^.]+?)\s+([^.]+?)\.")),
    DefinitionPattern(re.compile(r"I\s+loven\s+her\s+menes\s+med\s+([^.]+?)\s+([^.]+?)\.")),
)

_TERM_PREFIX = re.compile(r"^(?:i\s+denne\s+(?:lov|forskrift)\s+)?med\s+", re.IGNORECASE)
_TERM_SCOPE_PREFIX = re.compile(r"^i\s+denne\s+(?:lov|forskrift)\s+", re.IGNORECASE)
_TERM_SUFFIX = re.compile(r"\s+(?:menes|forst(?:å|aa)s)$", re.IGNORECASE)
_DEFINITION_SCOPE_PREFIX = re.compile(r"^i\s+denne\s+(?:lov|forskrift|kapittel)\s+", re.IGNORECASE)
_DEFINITION_LAW_FOOTER = re.compile(r"\s+Lov\s+\([^)]+\)\.?$", re.IGNORECASE)
_BARE_REFERENCE = re.compile(r"^(?:se|jfr|jämför)\s+\d+", re.IGNORECASE)
_BARE_ENUMERATION = re.compile(r"^(?:\d+\.?\s*|[a-z]\)\s*)$")
_INCOMPLETE_SCOPE = re.compile(r"^i\s+(?:dette|denne)\s+(?:kapittel|lov|forskrift)\s+\d+\.?\s*$", re.IGNORECASE)


def clean_term(text: str) -> str:
    term = normalize_whitespace(text)
    term = _TERM_PREFIX.sub("", term)
    term = _TERM_SCOPE_PREFIX.sub("", term)
    term = _TERM_SUFFIX.sub("", term)
    return term[:1].upper() + term[1:]


def clean_definition(text: str) -> str:
    definition = normalize_whitespace(text)
    definition = _DEFINITION_SCOPE_PREFIX.sub("", definition)
    definition = _DEFINITION_LAW_FOOTER.sub("", definition)
    if not definition.endswith((".", "!", "?")):
        definition += "."
    return definition


def is_valid_definition(term: str, definition: str) -> bool:
    """Quality filter: reasonable lengths and more than a bare reference."""
    if not 3 <= len(term) <= 150:
        return False
    if not 10 <= len(definition) <= 5000:
        return False
    if _BARE_REFERENCE.match(definition) or _BARE_ENUMERATION.match(definition):
        return False
    if _INCOMPLETE_SCOPE.match(definition):
        return False
    return len([word for word in definition.split() if len(word) > 2]) >= 3


def is_likely_definition_provision(content: str) -> bool:
    content = content.lower()
    defines = "menes" in content or "forstås" in content or "forstaas" in content
    return (
        ("med " in content and defines)
        or ("i denne" in content and ("menes" in content or "forstås" in content))
        or "definisjoner" in content
    )


def extract_definitions(document_id: str, provision_ref: str, content: str) -> List[LegalDefinition]:
    """Extract every definition in one provision that passes the quality filter."""
    definitions = []
    for pattern in DEFINITION_PATTERNS:
        for match in pattern.regex.finditer(content):
            raw_term = match.group(pattern.term_group)
            raw_definition = match.group(pattern.definition_group)
            if not raw_term or not raw_definition:
                continue

            term = clean_term(raw_term)
            definition = clean_definition(raw_definition)
            if not is_valid_definition(term, definition):
                continue

            definitions.append(
                LegalDefinition(
                    document_id=document_id,
                    term=term,
                    definition=definition,
                    source_provision=provision_ref,
                )
            )
    return definitions


def extract_document_definitions(document_id: str, provisions: Iterable) -> List[LegalDefinition]:
    """Extract definitions from the provisions of one statute.

    Provisions may be Provision models or seed dicts with provision_ref and
    content keys.
    """
    definitions = []
    for provision in provisions:
        if isinstance(provision, dict):
            provision_ref, content = provision["provision_ref"], provision["content"]
        else:
            provision_ref, content = provision.provision_ref, provision.content
        if is_likely_definition_provision(content):
            definitions.extend(extract_definitions(document_id, provision_ref, content))
    return definitions


def deduplicate_definitions(definitions: Iterable[LegalDefinition]) -> List[LegalDefinition]:
    """One definition per (document, term); the longer definition wins."""
    kept: Dict[tuple, LegalDefinition] = {}
    for definition in definitions:
        key = (definition.document_id, definition.term)
        existing = kept.get(key)
        if existing is None or len(definition.definition) > len(existing.definition):
            kept[key] = definition
    return list(kept.values())
