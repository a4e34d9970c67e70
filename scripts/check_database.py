#!/usr/bin/env python3
"""
Run the startup integrity gate against the collection files without starting
the server. Exits with status 1 and prints every violation when data is invalid.

Usage:
  python scripts/check_database.py [--dir database] [--type game]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from catalog.core.config import get_settings
from catalog.domain.schemas import default_registry
from catalog.repositories.json_storage import JsonStorage
from catalog.services.loader import inspect_collection


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Validate collection files")
    ap.add_argument("--dir", help="Database directory (default: DATABASE_DIR or ./database)")
    ap.add_argument("--type", action="append", dest="types", help="Only check this resource type")
    args = ap.parse_args(argv)

    registry = default_registry()
    storage = JsonStorage(Path(args.dir) if args.dir else get_settings().database_dir)
    names = args.types or list(registry)
    unknown = [n for n in names if n not in registry]
    if unknown:
        ap.error(f"unknown resource type(s): {', '.join(unknown)}")

    failed = False
    for name in names:
        if not storage.exists(name):
            print(f"[skip] {storage.path_for(name)} does not exist")
            continue
        check = inspect_collection(registry[name], storage)
        if check.ok:
            print(f"[ok] {name}: {len(check.records)} record(s)")
        else:
            failed = True
            print(check.report, file=sys.stderr)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
