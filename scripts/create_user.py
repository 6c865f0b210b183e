"""Create a user in the configured DB.

Usage:
  python scripts/create_user.py --username alice --password '...' --email alice@example.com

NOTE: This is intended for local/dev.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from movie_catalog.auth.crud import create_user, validate_registration
from movie_catalog.config import load_config
from movie_catalog.db import connect, init_db


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--username", required=True)
    ap.add_argument("--password", required=True)
    ap.add_argument("--email", required=True)
    ap.add_argument("--birthday", type=date.fromisoformat, default=None, help="YYYY-MM-DD")
    args = ap.parse_args()

    errors = validate_registration(args.username, args.password, args.email)
    if errors:
        for e in errors:
            print(f"{e['field']}: {e['msg']}")
        raise SystemExit(2)

    cfg = load_config()
    init_db(cfg.DB_DSN)

    with connect(cfg.DB_DSN) as conn:
        u = create_user(
            conn,
            username=args.username,
            password=args.password,
            email=args.email,
            birthday=args.birthday,
        )

    print("Created user:")
    print(u)


if __name__ == "__main__":
    main()
