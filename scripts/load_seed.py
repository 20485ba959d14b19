#!/usr/bin/env python3
"""Load statute seed JSON files into Neo4j."""

import sys
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

load_dotenv()

from lovcite.graph.schema import SchemaManager
from lovcite.graph.loader import StatuteLoader


def main():
    parser = argparse.ArgumentParser(description="Load seed documents into Neo4j")
    parser.add_argument(
        "paths",
        nargs="*",
        default=["data/seed"],
        help="Seed JSON files or directories (default: data/seed)"
    )
    args = parser.parse_args()

    files = []
    for raw in args.paths:
        path = Path(raw)
        files.extend(sorted(path.glob("*.json")) if path.is_dir() else [path])

    if not files:
        print("No seed files found")
        sys.exit(1)

    manager = SchemaManager()
    try:
        manager.connect()
    except ConnectionError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    manager.setup_all()

    loader = StatuteLoader(manager.connection)
    for path in files:
        loader.load_from_json(path)

    manager.close()

    print("\nLoad Statistics:")
    for key, value in loader.stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
