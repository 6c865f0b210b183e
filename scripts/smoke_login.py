"""POST /login against a running server and print the outcome.

Usage:
  python scripts/smoke_login.py --base-url http://localhost:8080 --username testus --password password123
"""

import argparse
import json

import requests


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--base-url", default="http://localhost:8080")
    ap.add_argument("--username", default="testus")
    ap.add_argument("--password", default="password123")
    args = ap.parse_args()

    url = f"{args.base_url.rstrip('/')}/login"
    print(f"Testing login endpoint directly: {url}")
    try:
        r = requests.post(url, json={"username": args.username, "password": args.password}, timeout=10)
    except requests.RequestException as e:
        print(f"Login failed: {e}")
        return 1

    if r.status_code != 200:
        print("Login failed:")
        print(f"Status: {r.status_code}")
        print(f"Data: {r.text}")
        return 1

    data = r.json()
    print("Login successful!")
    print(json.dumps(data.get("user"), indent=2))

    token = data.get("token")
    me = requests.get(
        f"{args.base_url.rstrip('/')}/user",
        headers={"Authorization": f"Bearer {token}"},
        timeout=10,
    )
    print(f"GET /user with token -> {me.status_code}")
    return 0 if me.status_code == 200 else 1


if __name__ == "__main__":
    raise SystemExit(main())
