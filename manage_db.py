#!/usr/bin/env python3
"""
Initialise a Course Registry SQLite database.

Applies all pending schema migrations to the given database file and,
with ``--seed``, inserts the demo courses that are not present yet.
Existing people, courses and enrollments are never modified.

Usage:
    python manage_db.py --db ./course_registry_api/course_registry.db --seed
"""

import argparse
import os
import sys

from course_registry_api.app.core.db import DEMO_COURSES, Store, get_database_path, init_db
from course_registry_api.app.core.errors import RegistryError


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Initialise the Course Registry database (SQLite).")
    ap.add_argument("--db", help="Path to SQLite DB file. Defaults to DATABASE_URL.")
    ap.add_argument(
        "--seed",
        action="store_true",
        help="Insert the demo courses (%s)." % ", ".join(DEMO_COURSES),
    )
    args = ap.parse_args(argv)

    db_path = args.db or get_database_path()
    parent = os.path.dirname(os.path.abspath(db_path))
    if not os.path.isdir(parent):
        print(f"[!] Directory not found: {parent}", file=sys.stderr)
        return 1

    try:
        version = init_db(Store(db_path), seed=args.seed)
    except RegistryError as exc:
        print(f"[!] {exc.message}", file=sys.stderr)
        return 2

    print(f"[+] {db_path} is at schema version {version}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
