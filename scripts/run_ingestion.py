#!/usr/bin/env python3
"""Ingest a Norwegian statute from Lovdata into a seed JSON file."""

import sys
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

load_dotenv()

from lovcite.collection.fetch_statute import ingest_statute


def main():
    parser = argparse.ArgumentParser(description="Ingest a statute from Lovdata")
    parser.add_argument("identifier", help="LOV id, e.g. LOV-2018-06-15-38")
    parser.add_argument(
        "output",
        nargs="?",
        default=None,
        help="Seed JSON path (default: data/seed/<identifier>.json)"
    )
    parser.add_argument(
        "--html-file",
        default=None,
        help="Parse a saved Lovdata HTML page instead of fetching"
    )
    parser.add_argument(
        "--metadata-only",
        action="store_true",
        help="Store metadata and deep link only, no provisions"
    )
    parser.add_argument(
        "--save-html",
        action="store_true",
        help="Keep the fetched page under data/raw/lovdata"
    )
    args = parser.parse_args()

    output = args.output or f"data/seed/{args.identifier.upper()}.json"

    print(f"\n=== Ingesting {args.identifier} ===\n")
    try:
        document = ingest_statute(
            args.identifier,
            output_path=output,
            html_file=args.html_file,
            full_text=not args.metadata_only,
            save_raw=args.save_html,
        )
    except (ValueError, FileNotFoundError, RuntimeError) as e:
        print(f"Ingestion failed: {e}")
        sys.exit(1)

    print(f"Wrote {output}")
    print(f"  Title: {document.title}")
    print(f"  Status: {document.status}")
    print(f"  Source URL: {document.url}")
    print(f"  Mode: {document.ingestion_mode}")
    print(f"  Provisions: {len(document.provisions)}")


if __name__ == "__main__":
    main()
