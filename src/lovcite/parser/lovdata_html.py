"""Extract metadata and provisions from Lovdata statute HTML."""

import re
import logging
from typing import Dict, List, Optional

from bs4 import BeautifulSoup, Tag

from ..utils.dates import format_date_iso, parse_norwegian_date
from ..utils.text import normalize_html_section_ref, normalize_text, normalize_whitespace
from .models import Provision
from .statute_parser import ParserSettings, parse_statute_text

logger = logging.getLogger(__name__)


PARAGRAPH_ID = re.compile(r"^PARAGRAF_(\d+[A-Za-zÆØÅæøå]?)$")
CHAPTER_ID = re.compile(r"^KAPITTEL_(\d+[A-Za-zÆØÅæøå]?)$")
CONTENT_BLOCK_SELECTOR = "p.avsnitt, table.avsnitt, table.listeItem, div.tabell"

# A table cell marker like "a)" or "1." is kept in front of its body
MAX_LIST_MARKER_LENGTH = 16


def load_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def _text(node: Optional[Tag]) -> str:
    if node is None:
        return ""
    return normalize_text(node.get_text(" "))


def extract_meta_fields(soup: BeautifulSoup) -> Dict[str, str]:
    """Read the label/value rows of the #documentMeta table."""
    metadata = {}
    for row in soup.select("#documentMeta tr"):
        label = _text(row.find("th")).rstrip(":").strip()
        value = _text(row.find("td"))
        if label and value:
            metadata[label] = value
    return metadata


def extract_title(soup: BeautifulSoup) -> Optional[str]:
    title = _text(soup.select_one("#documentMeta h1"))
    if title:
        return title

    og_title = soup.find("meta", attrs={"property": "og:title"})
    if og_title is not None:
        return normalize_text(og_title.get("content", "")) or None
    return None


def infer_status(title: Optional[str], metadata: Dict[str, str]) -> str:
    """Return "repealed" when the title or status metadata says opphevet."""
    text = " ".join(part for part in (title, metadata.get("Opphevet"), metadata.get("Status")) if part)
    return "repealed" if re.search(r"opphevet", text, re.IGNORECASE) else "in_force"


def parse_dotted_date(value: Optional[str]) -> Optional[str]:
    """Convert a metadata date such as "01.07.2021" to "2021-07-01"."""
    parsed = parse_norwegian_date(value)
    return format_date_iso(parsed) if parsed else None


def _table_text(table: Tag) -> List[str]:
    rows = table.find_all("tr")
    if not rows:
        fallback = _text(table)
        return [fallback] if fallback else []

    parts = []
    for row in rows:
        cells = row.find_all("td")
        if not cells:
            fallback = _text(row)
            if fallback:
                parts.append(fallback)
            continue

        if len(cells) == 1:
            only = _text(cells[0])
            if only:
                parts.append(only)
            continue

        marker = _text(cells[0])
        body = _text(cells[-1])
        if not body:
            if marker:
                parts.append(marker)
        elif not marker or marker == body or len(marker) > MAX_LIST_MARKER_LENGTH:
            parts.append(body)
        else:
            parts.append(f"{marker} {body}")

    return parts


def _is_content_block(node: Tag) -> bool:
    classes = node.get("class") or []
    if node.name == "p":
        return "avsnitt" in classes
    if node.name == "table":
        return "avsnitt" in classes or "listeItem" in classes
    if node.name == "div":
        return "tabell" in classes
    return False


def extract_provision_content(paragraph: Tag) -> str:
    """Join the text blocks of one paragraf node, dropping repeated blocks."""
    blocks = [child for child in paragraph.find_all(True, recursive=False) if _is_content_block(child)]
    if not blocks:
        blocks = paragraph.select(CONTENT_BLOCK_SELECTOR)

    parts = []
    for block in blocks:
        if block.name == "table":
            parts.extend(_table_text(block))
        else:
            text = _text(block)
            if text:
                parts.append(text)

    if not parts:
        return _text(paragraph)

    unique = list(dict.fromkeys(part for part in parts if part))
    return "\n".join(unique).strip()


def extract_provisions(soup: BeautifulSoup) -> List[Provision]:
    """Extract provisions from div.paragraf nodes.

    When a provision ref occurs more than once (historical versions), the
    version with the longer content is kept at the first position.
    """
    by_ref: Dict[str, Provision] = {}

    for node in soup.select("div.paragraf[data-id]"):
        section_match = PARAGRAPH_ID.match(node.get("data-id", ""))
        if not section_match:
            continue
        section = normalize_html_section_ref(section_match.group(1))

        chapter = None
        container = node.find_parent("div", class_="kapittel")
        if container is not None:
            chapter_match = CHAPTER_ID.match(container.get("data-id", ""))
            if chapter_match:
                chapter = normalize_html_section_ref(chapter_match.group(1))

        content = extract_provision_content(node)
        if not content:
            continue

        provision_ref = f"{chapter}:{section}" if chapter else section
        provision = Provision(
            provision_ref=provision_ref,
            chapter=chapter,
            section=section,
            title=_text(node.select_one(".paragrafTittel")) or None,
            content=content,
        )

        existing = by_ref.get(provision_ref)
        if existing is None or len(normalize_whitespace(provision.content)) > len(
            normalize_whitespace(existing.content)
        ):
            by_ref[provision_ref] = provision

    return list(by_ref.values())


def extract_plain_text_provisions(
    soup: BeautifulSoup, settings: Optional[ParserSettings] = None
) -> List[Provision]:
    """Run the structural parser over the document body text.

    Used for documents that carry no paragraf markup.
    """
    body = soup.body or soup
    text = "\n".join(normalize_text(line) for line in body.get_text("\n").splitlines())
    provisions = parse_statute_text(text, settings)
    logger.info(f"Plain-text fallback found {len(provisions)} provisions")
    return provisions
