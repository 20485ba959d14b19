#!/usr/bin/env python3
"""Validate legal citations against seed files or the Neo4j graph."""

import sys
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

load_dotenv()

from lovcite.citation import InMemoryCitationStore, validate_citation


def main():
    parser = argparse.ArgumentParser(description="Validate legal citations")
    parser.add_argument("citations", nargs="+", help='Citations, e.g. "LOV-2018-06-15-38 § 5"')
    parser.add_argument("--seed-dir", default="data/seed", help="Seed JSON directory")
    parser.add_argument("--graph", action="store_true", help="Look up documents in Neo4j")
    args = parser.parse_args()

    if args.graph:
        from lovcite.graph.store import GraphCitationStore

        store = GraphCitationStore()
    else:
        store = InMemoryCitationStore.from_seed_dir(args.seed_dir)

    all_valid = True
    for citation in args.citations:
        result = validate_citation(citation, store)
        status = "✓" if result.valid else "✗"
        print(f"{status} {citation}")
        if result.formatted_citation:
            print(f"    {result.formatted_citation}")
        if result.document_title:
            print(f"    {result.document_title}")
        for warning in result.warnings:
            print(f"    ! {warning}")
        all_valid = all_valid and result.valid

    sys.exit(0 if all_valid else 1)


if __name__ == "__main__":
    main()
