"""Fetch a Norwegian statute from Lovdata and build its seed document."""

import json
import re
import logging
from pathlib import Path
from typing import Optional

from ..parser.amendment_parser import extract_amendment_references, extract_metadata_amendments
from ..parser.cross_references import extract_cross_references
from ..parser.eu_references import extract_eu_references
from ..parser.lovdata_html import (
    extract_meta_fields,
    extract_plain_text_provisions,
    extract_provisions,
    extract_title,
    infer_status,
    load_html,
    parse_dotted_date,
)
from ..parser.models import Provision
from ..utils.text import normalize_whitespace
from .models import LovIdentifier, SeedProvision, StatuteDocument
from .scraper import LovdataScraper

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


LOV_IDENTIFIER_PATTERN = re.compile(r"^LOV-(\d{4})-(\d{2})-(\d{2})(?:-([A-Za-z0-9]+))?$", re.IGNORECASE)


def parse_lov_identifier(identifier: str) -> LovIdentifier:
    """Split "LOV-2018-06-15-38" into canonical id, URL slug and issue date.

    Raises:
        ValueError: if the identifier is not LOV-YYYY-MM-DD[-NNN]
    """
    match = LOV_IDENTIFIER_PATTERN.match(identifier.strip())
    if not match:
        raise ValueError(f'Invalid identifier "{identifier}". Expected LOV-YYYY-MM-DD[-NNN].')

    year, month, day, suffix = match.groups()
    issued_date = f"{year}-{month}-{day}"
    slug = f"{issued_date}-{suffix.lower()}" if suffix else issued_date
    return LovIdentifier(canonical_id=f"LOV-{slug}".upper(), slug=slug, issued_date=issued_date)


def enrich_provision(provision: Provision) -> SeedProvision:
    """Attach amendment, cross and EU references found in the provision text."""
    return SeedProvision(
        **provision.model_dump(),
        amendments=extract_amendment_references(provision.content),
        cross_references=extract_cross_references(provision.content),
        eu_references=extract_eu_references(provision.content),
    )


def build_statute_document(
    identifier: LovIdentifier,
    html: str,
    source_url: str,
    full_text: bool = True,
) -> StatuteDocument:
    """Build a seed document from Lovdata HTML.

    Provisions come from the paragraf markup; pages without it go through
    the structural parser on the body text. Only when both find nothing is
    the document stored in metadata-only mode.
    """
    soup = load_html(html)
    metadata = extract_meta_fields(soup)
    title = extract_title(soup) or f"Norwegian statute {identifier.canonical_id}"

    provisions = []
    if full_text:
        provisions = extract_provisions(soup)
        if not provisions:
            logger.info(f"No paragraf markup for {identifier.canonical_id}; parsing body text")
            provisions = extract_plain_text_provisions(soup)
    mode = "full_text" if provisions else "metadata_only"

    description = f"Ingestion mode: {mode}."
    if full_text and not provisions:
        logger.warning(f"No provisions found for {identifier.canonical_id}; storing metadata only")
        description += " Full-text parsing unavailable for this document structure; stored as metadata with deep link."

    return StatuteDocument(
        id=identifier.canonical_id,
        title=title,
        short_name=normalize_whitespace(metadata.get("Korttittel")) or None,
        status=infer_status(title, metadata),
        issued_date=identifier.issued_date,
        in_force_date=parse_dotted_date(metadata.get("Ikrafttredelse")) or identifier.issued_date,
        url=source_url,
        description=description,
        ingestion_mode=mode,
        metadata=metadata,
        metadata_amendments=extract_metadata_amendments(metadata),
        provisions=[enrich_provision(p) for p in provisions],
    )


def write_seed(document: StatuteDocument, output_path: str | Path) -> Path:
    """Write a seed document as indented JSON, creating parent directories."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(document.model_dump(by_alias=True, exclude_none=True), f, ensure_ascii=False, indent=2)
    logger.info(f"Wrote {path} ({len(document.provisions)} provisions)")
    return path


def ingest_statute(
    identifier: str,
    output_path: Optional[str | Path] = None,
    html_file: Optional[str | Path] = None,
    full_text: bool = True,
    scraper: Optional[LovdataScraper] = None,
    save_raw: bool = False,
) -> StatuteDocument:
    """Fetch (or read) one statute and build its seed document.

    Args:
        identifier: LOV id, e.g. "LOV-2018-06-15-38"
        output_path: Where to write the seed JSON (not written if None)
        html_file: Local Lovdata HTML to use instead of fetching
        full_text: Extract provisions; False stores metadata only
        scraper: Scraper to fetch with (a new one if not given)
        save_raw: Keep the fetched HTML under the scraper's output_dir

    Raises:
        ValueError: for a malformed identifier
        FileNotFoundError: if html_file does not exist
        RuntimeError: if no Lovdata candidate URL serves the statute
    """
    parsed = parse_lov_identifier(identifier)
    scraper = scraper or LovdataScraper()
    source_url = f"{scraper.BASE_URL}/NL/lov/{parsed.slug}"

    if html_file:
        html_path = Path(html_file)
        if not html_path.exists():
            raise FileNotFoundError(f"Local HTML file not found: {html_path}")
        html = html_path.read_text(encoding="utf-8")
    else:
        fetched = scraper.fetch_first_available(scraper.candidate_urls(parsed.slug))
        if fetched is None:
            raise RuntimeError(f"Failed to fetch official source for {identifier}")
        url, html = fetched
        source_url = url[:-2] if url.endswith("/*") else url
        if save_raw:
            scraper.save_html(html, f"{parsed.canonical_id}.html", subdir="lovdata")

    document = build_statute_document(parsed, html, source_url, full_text=full_text)
    logger.info(
        f"{document.id}: {document.status}, {len(document.provisions)} provisions "
        f"({document.ingestion_mode})"
    )

    if output_path:
        write_seed(document, output_path)
    return document
