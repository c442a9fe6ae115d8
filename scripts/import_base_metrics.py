#!/usr/bin/env python3
"""
Import a base-metrics JSON cache into the SQLite baseline store.

The cache holds one consensus per source document:
    {"version": 1, "generatedAt": "...",
     "metrics": {"jane_doe.pdf": {"consensus": {...}, "confidence": {...},
                                  "providers": [{"provider": "openai", "model": null}],
                                  "timestamp": "..."}}}

Usage:
    python scripts/import_base_metrics.py --json cache/baseMetrics.json --db data/baselines.db
"""

import argparse
import json
from datetime import datetime
from pathlib import Path
import sys

from creditfusion.database import Baseline, init_database, get_session


def parse_timestamp(ts_str):
    """Parse ISO timestamp string, handle missing timestamps."""
    if not ts_str:
        return datetime.now()
    try:
        return datetime.fromisoformat(ts_str.replace("Z", "+00:00")).replace(tzinfo=None)
    except (ValueError, AttributeError):
        return datetime.now()


def provider_label(entry) -> str:
    if isinstance(entry, str):
        return entry
    provider = entry.get("provider", "unknown")
    model = entry.get("model")
    return f"{provider}:{model}" if model else provider


def import_metrics(json_path: Path, db_path: Path, dry_run: bool = False) -> bool:
    """
    Import baselines from a base-metrics cache.

    Args:
        json_path: Path to base-metrics JSON file
        db_path: Path to SQLite database file
        dry_run: If True, don't write to database
    """
    print(f"Loading base metrics from {json_path}...")
    with open(json_path, encoding="utf-8") as f:
        data = json.load(f)

    metrics = data.get("metrics", {})
    print(f"Found {len(metrics)} documents in cache")

    if dry_run:
        print("\n[DRY RUN] Would import the following baselines:")
        for i, (document, entry) in enumerate(list(metrics.items())[:5], 1):
            overall = (entry.get("confidence") or {}).get("overall", 0)
            print(f"  {i}. {document}: {len(entry.get('providers', []))} providers, confidence {overall}")
        if len(metrics) > 5:
            print(f"  ... and {len(metrics) - 5} more")
        return True

    print(f"\nInitializing database at {db_path}...")
    init_database(db_path)
    session = get_session(db_path)

    imported = 0
    skipped = 0

    for document, entry in metrics.items():
        if not entry.get("consensus") or not entry.get("confidence"):
            print(f"Skipping {document}: missing consensus or confidence")
            skipped += 1
            continue

        if session.query(Baseline).filter_by(document=document).first():
            print(f"Baseline {document} already exists, skipping")
            skipped += 1
            continue

        providers = [provider_label(p) for p in entry.get("providers", [])]
        timestamp = parse_timestamp(entry.get("timestamp"))
        session.add(Baseline(
            document=document,
            consensus=entry["consensus"],
            confidence=entry["confidence"],
            providers=providers,
            provider_count=len(providers),
            overall=float(entry["confidence"].get("overall", 0.0)),
            created_at=timestamp,
            updated_at=timestamp,
        ))
        imported += 1

    try:
        session.commit()
        print("\nImport complete!")
        print(f"   Imported: {imported}")
        print(f"   Skipped:  {skipped}")
    except Exception as e:
        session.rollback()
        print(f"Failed to commit: {e}")
        return False
    finally:
        session.close()

    return True


def main():
    parser = argparse.ArgumentParser(description="Import base-metrics JSON into the baseline database")
    parser.add_argument("--json", type=Path, default=Path("cache/baseMetrics.json"),
                        help="Path to base-metrics JSON file")
    parser.add_argument("--db", type=Path, default=Path("data/baselines.db"),
                        help="Path to SQLite database file")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show what would be imported without writing")

    args = parser.parse_args()

    if not args.json.exists():
        print(f"JSON file not found: {args.json}")
        sys.exit(1)

    if not import_metrics(args.json, args.db, dry_run=args.dry_run):
        sys.exit(1)


if __name__ == "__main__":
    main()
