"""Print how many movies are in the DB and a few sample titles."""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from movie_catalog.catalog.crud import count_movies, list_movies
from movie_catalog.config import load_config
from movie_catalog.db import StoreUnavailable, connect


def main() -> int:
    cfg = load_config()
    try:
        with connect(cfg.DB_DSN) as conn:
            n = count_movies(conn)
            print(f"Total movies in database: {n}")
            if n == 0:
                print("No movies found - database needs to be seeded (python scripts/seed_db.py)")
                return 0
            print("Sample movies:")
            for m in list_movies(conn)[:3]:
                print(f"- {m['title']}")
    except StoreUnavailable as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
