"""Print the stored-form hash for a password (for hand-editing users rows).

Usage:
  python scripts/hash_password.py 'S3cret!'
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from movie_catalog.auth.security import hash_password


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("password")
    args = ap.parse_args()
    print(hash_password(args.password))


if __name__ == "__main__":
    main()
