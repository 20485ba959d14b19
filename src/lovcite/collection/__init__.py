"""Statute collection from Lovdata."""

from .models import LovIdentifier, SeedProvision, StatuteDocument
from .scraper import LovdataScraper
from .fetch_statute import parse_lov_identifier, build_statute_document, ingest_statute, write_seed

__all__ = [
    "LovIdentifier",
    "SeedProvision",
    "StatuteDocument",
    "LovdataScraper",
    "parse_lov_identifier",
    "build_statute_document",
    "ingest_statute",
    "write_seed",
]
