#!/usr/bin/env python3
"""
Script to remove milk, weight and medical records whose animal was deleted.

Deleting an animal never removes its history, so records pointing at a
missing animal pile up over time. This script:
1. Loads the animals of the owner (or of every owner)
2. Finds the records referencing an animal that no longer exists
3. Deletes them, unless --dry-run is given

Usage:
  python scripts/cleanup_orphans.py [--owner-id OWNER] [--dry-run]
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from herdbook.application.use_cases.maintenance import cleanup_orphans
from herdbook.config.settings import get_settings
from herdbook.infrastructure.db.session import create_engine, create_session_factory
from herdbook.infrastructure.repos.herd_store import DocumentHerdStore
from herdbook.infrastructure.store.sqlalchemy_store import SQLAlchemyRecordStore


async def run_cleanup(owner_id: str | None, dry_run: bool) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    store = DocumentHerdStore(SQLAlchemyRecordStore(create_session_factory(engine)))

    try:
        report = await cleanup_orphans.execute(store, owner_id=owner_id, dry_run=dry_run)
        verb = "Would remove" if dry_run else "Removed"
        print(f"\n{verb} {report.total} orphaned records")
        print(f"   Milk records: {report.milk_records}")
        print(f"   Weight records: {report.weight_records}")
        print(f"   Medical observations: {report.medical_observations}")
        if report.animal_ids:
            print("   Missing animals:")
            for animal_id in report.animal_ids:
                print(f"   - {animal_id}")
    except Exception as exc:
        print(f"\nError cleaning up orphans: {exc}")
        import traceback

        traceback.print_exc()
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Remove records that reference deleted animals",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Preview what would be removed for one farm
  python scripts/cleanup_orphans.py --owner-id farm-1 --dry-run

  # Clean every owner
  python scripts/cleanup_orphans.py
        """,
    )
    parser.add_argument("--owner-id", help="Only clean records of this owner")
    parser.add_argument("--dry-run", action="store_true", help="Count without deleting")

    args = parser.parse_args()

    print("=" * 60)
    print("Orphan cleanup - Herdbook")
    print("=" * 60)

    asyncio.run(run_cleanup(args.owner_id, args.dry_run))

    print("\n" + "=" * 60)
    print("Process completed")
    print("=" * 60)
