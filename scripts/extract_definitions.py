#!/usr/bin/env python3
"""Extract legal term definitions from statute seed files."""

import sys
import json
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

load_dotenv()

from lovcite.parser.definitions import extract_document_definitions, deduplicate_definitions


def main():
    parser = argparse.ArgumentParser(description="Extract term definitions from seed files")
    parser.add_argument("--seed-dir", default="data/seed", help="Seed JSON directory")
    parser.add_argument("--output", default=None, help="Write definitions as JSON")
    parser.add_argument("--load", action="store_true", help="Attach definitions in Neo4j")
    args = parser.parse_args()

    definitions = []
    processed = 0
    for path in sorted(Path(args.seed_dir).glob("*.json")):
        with open(path, "r", encoding="utf-8") as f:
            seed = json.load(f)
        if seed.get("type", "statute") != "statute":
            continue

        found = extract_document_definitions(seed["id"], seed.get("provisions") or [])
        if found:
            print(f"  {seed.get('short_name') or seed['id']}: Found {len(found)} definitions")
        definitions.extend(found)
        processed += 1

    unique = deduplicate_definitions(definitions)
    print(f"\nExtracted {len(unique)} unique definitions from {processed} statutes")

    for definition in unique[:5]:
        preview = definition.definition[:80] + ("..." if len(definition.definition) > 80 else "")
        print(f"  - {definition.term}: {preview}")
        print(f"    ({definition.document_id} {definition.source_provision})")

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump([d.model_dump() for d in unique], f, ensure_ascii=False, indent=2)
        print(f"\nWrote {args.output}")

    if args.load:
        from lovcite.graph.loader import StatuteLoader

        loaded = StatuteLoader().load_definitions(unique)
        print(f"\nAttached {loaded} definitions in Neo4j")


if __name__ == "__main__":
    main()
