"""Validate citations against a stored dataset of documents and provisions."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Protocol, Set, Tuple

from .formatter import format_citation, format_provision_ref
from .grammar import parse_citation
from .models import CitationFormat, CitationValidation, DocumentType, StoredDocument

logger = logging.getLogger(__name__)


class CitationStore(Protocol):
    """Lookup interface the validator needs from a storage backend."""

    def get_document(self, document_id: str) -> Optional[StoredDocument]:
        ...

    def provision_exists(self, document_id: str, provision_ref: str) -> bool:
        ...


class InMemoryCitationStore:
    """Citation store backed by plain dictionaries.

    Used for seed files on disk and in tests.
    """

    def __init__(
        self,
        documents: Iterable[StoredDocument] = (),
        provisions: Iterable[Tuple[str, str]] = (),
    ):
        self.documents: Dict[str, StoredDocument] = {doc.id: doc for doc in documents}
        self.provisions: Set[Tuple[str, str]] = set(provisions)

    def add_document(self, document: StoredDocument, provision_refs: Iterable[str] = ()) -> None:
        self.documents[document.id] = document
        for ref in provision_refs:
            self.provisions.add((document.id, ref))

    def get_document(self, document_id: str) -> Optional[StoredDocument]:
        return self.documents.get(document_id)

    def provision_exists(self, document_id: str, provision_ref: str) -> bool:
        return (document_id, provision_ref) in self.provisions

    @classmethod
    def from_seed_dir(cls, seed_dir: str | Path) -> "InMemoryCitationStore":
        """Load every ``*.json`` seed document in a directory."""
        store = cls()
        for path in sorted(Path(seed_dir).glob("*.json")):
            with open(path, "r", encoding="utf-8") as f:
                seed = json.load(f)
            if "id" not in seed or "title" not in seed:
                logger.warning(f"Skipping {path.name}: not a seed document")
                continue
            store.add_document(
                StoredDocument(
                    id=seed["id"],
                    type=seed.get("type", "statute"),
                    title=seed["title"],
                    status=seed.get("status", "in_force"),
                ),
                [p["provision_ref"] for p in seed.get("provisions") or []],
            )
        logger.info(f"Loaded {len(store.documents)} documents from {seed_dir}")
        return store


def _provision_ref_for(chapter: Optional[str], section: Optional[str]) -> Optional[str]:
    if not section:
        return None
    return format_provision_ref(chapter, section)


def validate_citation(citation: str, store: CitationStore) -> CitationValidation:
    """Parse a citation and check that what it points at exists.

    Args:
        citation: Citation string supplied by the caller
        store: Backend used for document and provision lookup

    Returns:
        Validation result with warnings for repealed or amended documents

    Raises:
        ValueError: if no citation string is supplied at all
    """
    if citation is None:
        raise ValueError("validate_citation requires a citation string")

    parsed = parse_citation(citation)
    result = CitationValidation(citation=citation, parsed=parsed)

    if not parsed.valid:
        result.warnings.append(parsed.error)
        return result

    document = store.get_document(parsed.document_id)
    if document is None:
        result.warnings.append(f"Document {parsed.document_id} not found in database")
        return result

    result.document_exists = True
    result.document_title = document.title
    result.formatted_citation = format_citation(parsed, CitationFormat.FULL)

    provision_ref = None
    if parsed.type == DocumentType.STATUTE:
        provision_ref = _provision_ref_for(parsed.chapter, parsed.section)

    if provision_ref is not None:
        result.provision_exists = store.provision_exists(parsed.document_id, provision_ref)
        if not result.provision_exists:
            result.warnings.append(
                f"Provision {provision_ref} not found in {parsed.document_id}"
            )
    else:
        result.provision_exists = True

    if document.status == "repealed":
        result.warnings.append(f"{parsed.document_id} has been repealed")
    elif document.status == "amended":
        result.warnings.append(f"{parsed.document_id} has been amended; check the current text")
    elif document.status == "not_yet_in_force":
        result.warnings.append(f"{parsed.document_id} is not yet in force")

    result.valid = result.document_exists and bool(result.provision_exists)
    return result
