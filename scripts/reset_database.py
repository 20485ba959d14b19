#!/usr/bin/env python
"""Clear the statute graph and reload it from seed files."""

import sys
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv

load_dotenv()

from lovcite.graph.schema import SchemaManager
from lovcite.graph.loader import load_seed_directory


def clear_database(manager: SchemaManager):
    """Delete statute graph nodes and report what was there."""
    print("\n" + "="*70)
    print("CLEARING DATABASE")
    print("="*70)

    info = manager.get_schema_info()
    print("\n  Current database state:")
    for label, count in info["node_counts"].items():
        print(f"    • {label}: {count:,}")

    manager.clear_database()
    print("  ✅ Database cleared!")


def main():
    parser = argparse.ArgumentParser(description="Reset the statute graph")
    parser.add_argument("--seed-dir", default="data/seed", help="Seed JSON directory")
    parser.add_argument("--no-reload", action="store_true", help="Only clear, do not reload")
    args = parser.parse_args()

    manager = SchemaManager()
    try:
        manager.connect()
    except ConnectionError as e:
        print(f"\n❌ Error: {e}")
        sys.exit(1)

    clear_database(manager)
    manager.close()

    if args.no_reload:
        return

    print("\n" + "="*70)
    print("LOADING SEEDS")
    print("="*70)
    stats = load_seed_directory(args.seed_dir)
    print("\n  Load Statistics:")
    for key, value in stats.items():
        print(f"    • {key}: {value:,}")


if __name__ == "__main__":
    main()
