"""Populate the catalog (genres, directors, actors, movies) and the demo users.

Usage:
  python scripts/seed_db.py            # fill in anything missing
  python scripts/seed_db.py --reset    # wipe users + catalog first

Demo users get SEED_USER_PASSWORD (see config) unless --password is given.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from movie_catalog.catalog.seed import reset_all, seed_catalog, seed_users
from movie_catalog.config import load_config
from movie_catalog.db import connect, init_db


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--reset", action="store_true", help="Delete all users and catalog rows first")
    ap.add_argument("--password", default=None, help="Password for the demo users")
    ap.add_argument("--no-users", action="store_true", help="Seed the catalog only")
    args = ap.parse_args()

    cfg = load_config()
    init_db(cfg.DB_DSN)

    with connect(cfg.DB_DSN) as conn:
        if args.reset:
            reset_all(conn)
        counts = seed_catalog(conn)
        created = []
        if not args.no_users:
            created = seed_users(conn, password=args.password or cfg.SEED_USER_PASSWORD)

    print("--- Verification ---")
    for table, n in counts.items():
        print(f"{table}: {n}")
    print(f"demo users created: {', '.join(created) or '(none)'}")


if __name__ == "__main__":
    main()
