from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from movie_catalog.db import integrity_errors
from movie_catalog.util.time import iso_date, utcnow_iso

from .errors import InvalidCredentials, TokenInvalid
from .security import decode_access_token, hash_password, verify_password


def _debug(msg: str) -> None:
    print(f"[auth] {msg}")


_USERNAME_RE = re.compile(r"^[A-Za-z0-9]+$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# Largest id the store can hold (signed 64-bit INTEGER).
MAX_ROW_ID = 2**63 - 1

USERNAME_MIN_LEN = 5


def validate_registration(username: str, password: str, email: str) -> List[Dict[str, str]]:
    """Field checks for a new account. Returns a list of {field, msg}; empty when valid."""
    errors: List[Dict[str, str]] = []
    if len(username or "") < USERNAME_MIN_LEN:
        errors.append({"field": "username", "msg": "Username is required"})
    if username and not _USERNAME_RE.match(username):
        errors.append(
            {"field": "username", "msg": "Username contains non alphanumeric characters - not allowed."}
        )
    if not password:
        errors.append({"field": "password", "msg": "Password is required"})
    if not _EMAIL_RE.match(email or ""):
        errors.append({"field": "email", "msg": "Email does not appear to be valid"})
    return errors


def favorite_movie_ids(conn: Any, user_id: int) -> List[int]:
    rows = conn.execute(
        "SELECT movie_id FROM user_favorites WHERE user_id=? ORDER BY movie_id",
        (int(user_id),),
    ).fetchall()
    return [int(r["movie_id"]) for r in rows]


def public_user(conn: Any, row: Any) -> Dict[str, Any]:
    """User row -> response dict. Never includes the password hash."""
    d = dict(row)
    d.pop("password_hash", None)
    d["favorite_movies"] = favorite_movie_ids(conn, int(d["user_id"]))
    return d


def get_user_by_username(conn: Any, username: str) -> Optional[Any]:
    # Exact, case-sensitive match.
    if not username:
        return None
    return conn.execute(
        "SELECT * FROM users WHERE username=?",
        (username,),
    ).fetchone()


def get_user_by_id(conn: Any, user_id: int) -> Optional[Any]:
    return conn.execute(
        "SELECT * FROM users WHERE user_id=?",
        (int(user_id),),
    ).fetchone()


def get_user_by_email(conn: Any, email: str) -> Optional[Any]:
    return conn.execute(
        "SELECT * FROM users WHERE email=?",
        ((email or "").strip(),),
    ).fetchone()


def verify_user_credentials(conn: Any, username: str, password: str) -> Dict[str, Any]:
    """Check a username/password pair and return the public identity.

    Raises InvalidCredentials for both an unknown user and a wrong password.
    """
    row = get_user_by_username(conn, username)
    if row is None:
        _debug(f"Login rejected: user not found username={username!r}")
        raise InvalidCredentials("no_such_user")
    if not verify_password(password, str(row["password_hash"])):
        _debug(f"Login rejected: password mismatch username={username!r}")
        raise InvalidCredentials("password_mismatch")
    _debug(f"Login ok username={username!r}")
    return public_user(conn, row)


def validate_access_token(
    conn: Any,
    *,
    token: str,
    secret: str,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Bearer token -> public identity of the user it was issued to."""
    payload = decode_access_token(token=token, secret=secret, now=now)
    row = get_user_by_id(conn, int(payload["sub"]))
    if row is None:
        raise TokenInvalid("user_not_found")
    return public_user(conn, row)


def _duplicate_code(e: Exception) -> str:
    # sqlite: "UNIQUE constraint failed: users.email"; postgres: "users_email_key"
    return "email_exists" if "email" in str(e) else "username_exists"


def create_user(
    conn: Any,
    *,
    username: str,
    password: str,
    email: str,
    birthday: Optional[date] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> Dict[str, Any]:
    if not username:
        raise ValueError("username_blank")
    email = (email or "").strip()
    if not email:
        raise ValueError("email_blank")

    if get_user_by_username(conn, username) is not None:
        raise ValueError("username_exists")
    if get_user_by_email(conn, email) is not None:
        raise ValueError("email_exists")

    now = utcnow_iso()
    try:
        conn.execute(
            """
            INSERT INTO users (username, password_hash, email, birthday, first_name, last_name, created_at, updated_at)
            VALUES (?,?,?,?,?,?,?,?)
            """,
            (username, hash_password(password), email, iso_date(birthday), first_name, last_name, now, now),
        )
    except integrity_errors() as e:
        raise ValueError(_duplicate_code(e)) from e
    row = get_user_by_username(conn, username)
    assert row is not None
    _debug(f"Created user username={username!r} user_id={row['user_id']}")
    return public_user(conn, row)


def update_user(
    conn: Any,
    *,
    user_id: int,
    password: str | None = None,
    email: str | None = None,
    birthday: date | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
) -> Dict[str, Any]:
    """Update profile fields. Only provided (non-None) fields are touched."""
    fields: list[tuple[str, Any]] = []
    if password:
        fields.append(("password_hash", hash_password(password)))
    if email is not None:
        email = email.strip()
        if not _EMAIL_RE.match(email):
            raise ValueError("invalid_email")
        other = get_user_by_email(conn, email)
        if other is not None and int(other["user_id"]) != int(user_id):
            raise ValueError("email_exists")
        fields.append(("email", email))
    if birthday is not None:
        fields.append(("birthday", iso_date(birthday)))
    if first_name is not None:
        fields.append(("first_name", first_name))
    if last_name is not None:
        fields.append(("last_name", last_name))

    if fields:
        fields.append(("updated_at", utcnow_iso()))
        sets = ", ".join([f"{k}=?" for k, _ in fields])
        params = [v for _, v in fields] + [int(user_id)]
        try:
            conn.execute(f"UPDATE users SET {sets} WHERE user_id=?", params)
        except integrity_errors() as e:
            raise ValueError(_duplicate_code(e)) from e

    row = get_user_by_id(conn, user_id)
    if row is None:
        raise ValueError("user_not_found")
    return public_user(conn, row)


def delete_user(conn: Any, user_id: int) -> bool:
    # Favorites go with the user (ON DELETE CASCADE); delete explicitly for
    # stores where foreign keys are not enforced.
    conn.execute("DELETE FROM user_favorites WHERE user_id=?", (int(user_id),))
    cur = conn.execute("DELETE FROM users WHERE user_id=?", (int(user_id),))
    return int(cur.rowcount or 0) > 0


def add_favorite(conn: Any, *, user_id: int, movie_id: int) -> Dict[str, Any]:
    if not 0 < int(movie_id) <= MAX_ROW_ID:
        raise ValueError("movie_not_found")
    movie = conn.execute("SELECT 1 FROM movies WHERE movie_id=?", (int(movie_id),)).fetchone()
    if movie is None:
        raise ValueError("movie_not_found")
    conn.execute(
        """
        INSERT INTO user_favorites (user_id, movie_id, created_at) VALUES (?, ?, ?)
        ON CONFLICT (user_id, movie_id) DO NOTHING
        """,
        (int(user_id), int(movie_id), utcnow_iso()),
    )
    row = get_user_by_id(conn, user_id)
    if row is None:
        raise ValueError("user_not_found")
    return public_user(conn, row)


def remove_favorite(conn: Any, *, user_id: int, movie_id: int) -> Dict[str, Any]:
    if 0 < int(movie_id) <= MAX_ROW_ID:
        conn.execute(
            "DELETE FROM user_favorites WHERE user_id=? AND movie_id=?",
            (int(user_id), int(movie_id)),
        )
    row = get_user_by_id(conn, user_id)
    if row is None:
        raise ValueError("user_not_found")
    return public_user(conn, row)
