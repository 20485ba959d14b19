#!/usr/bin/env python3
"""Report EU directive and regulation references across seed documents."""

import sys
import json
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lovcite.parser.eu_references import extract_eu_references, summarize_eu_references


def main():
    parser = argparse.ArgumentParser(description="Analyze EU references in seed files")
    parser.add_argument("--seed-dir", default="data/seed", help="Seed JSON directory")
    parser.add_argument("--output", default=None, help="Write the summary as JSON")
    args = parser.parse_args()

    all_refs = []
    statutes_with_refs = 0

    for path in sorted(Path(args.seed_dir).glob("*.json")):
        with open(path, "r", encoding="utf-8") as f:
            seed = json.load(f)

        refs = []
        for provision in seed.get("provisions") or []:
            refs.extend(extract_eu_references(provision["content"]))

        if refs:
            statutes_with_refs += 1
            print(f"  {seed.get('short_name') or seed['id']}: {len(refs)} EU references")
        all_refs.extend(refs)

    summary = summarize_eu_references(all_refs)
    summary["statutes_with_references"] = statutes_with_refs

    print(f"\nTotal EU references: {summary['total']}")
    print(f"By type: {summary['by_type']}")
    print(f"By community: {summary['by_community']}")
    print(f"By reference type: {summary['by_reference_type']}")
    print("\nMost cited:")
    for eu_id, count in summary["most_cited"]:
        print(f"  {eu_id}: {count}")

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(summary, f, ensure_ascii=False, indent=2)
        print(f"\nWrote {args.output}")


if __name__ == "__main__":
    main()
