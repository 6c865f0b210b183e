from __future__ import annotations

from typing import Any, Dict, List, Optional


def _genre(row: Any) -> Dict[str, Any]:
    return {"genre_id": row["genre_id"], "name": row["name"], "description": row["description"]}


def _director(row: Any) -> Dict[str, Any]:
    return {
        "director_id": row["director_id"],
        "name": row["name"],
        "bio": row["bio"],
        "birth": row["birth"],
        "death": row["death"],
    }


def _actor(row: Any) -> Dict[str, Any]:
    return {
        "actor_id": row["actor_id"],
        "name": row["name"],
        "bio": row["bio"],
        "birth": row["birth"],
        "death": row["death"],
        "picture_url": row["picture_url"],
    }


# -----------------------------
# Genres / directors / actors
# -----------------------------


def list_genres(conn: Any) -> List[Dict[str, Any]]:
    rows = conn.execute("SELECT * FROM genres ORDER BY name").fetchall()
    return [_genre(r) for r in rows]


def get_genre_by_name(conn: Any, name: str) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM genres WHERE name=?", (name,)).fetchone()
    return _genre(row) if row is not None else None


def list_directors(conn: Any) -> List[Dict[str, Any]]:
    rows = conn.execute("SELECT * FROM directors ORDER BY name").fetchall()
    return [_director(r) for r in rows]


def get_director_by_name(conn: Any, name: str) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM directors WHERE name=?", (name,)).fetchone()
    return _director(row) if row is not None else None


def list_actors(conn: Any) -> List[Dict[str, Any]]:
    rows = conn.execute("SELECT * FROM actors ORDER BY name").fetchall()
    return [_actor(r) for r in rows]


def get_actor_by_name(conn: Any, name: str) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM actors WHERE name=?", (name,)).fetchone()
    return _actor(row) if row is not None else None


# -----------------------------
# Movies
# -----------------------------


def _populate_movie(conn: Any, row: Any) -> Dict[str, Any]:
    """Movie row -> dict with genre, director and actors resolved."""
    genre = None
    if row["genre_id"] is not None:
        g = conn.execute("SELECT * FROM genres WHERE genre_id=?", (row["genre_id"],)).fetchone()
        genre = _genre(g) if g is not None else None

    director = None
    if row["director_id"] is not None:
        d = conn.execute(
            "SELECT * FROM directors WHERE director_id=?", (row["director_id"],)
        ).fetchone()
        director = _director(d) if d is not None else None

    actor_rows = conn.execute(
        """
        SELECT a.*
        FROM movie_actors ma
        JOIN actors a ON a.actor_id = ma.actor_id
        WHERE ma.movie_id=?
        ORDER BY a.name
        """,
        (row["movie_id"],),
    ).fetchall()

    return {
        "movie_id": row["movie_id"],
        "title": row["title"],
        "description": row["description"],
        "genre": genre,
        "director": director,
        "actors": [_actor(a) for a in actor_rows],
        "image_path": row["image_path"],
        "featured": bool(row["featured"]),
        "release_year": row["release_year"],
        "rating": row["rating"],
    }


def list_movies(conn: Any) -> List[Dict[str, Any]]:
    rows = conn.execute("SELECT * FROM movies ORDER BY movie_id").fetchall()
    return [_populate_movie(conn, r) for r in rows]


def get_movie_by_title(conn: Any, title: str) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM movies WHERE title=?", (title,)).fetchone()
    return _populate_movie(conn, row) if row is not None else None


def count_movies(conn: Any) -> int:
    row = conn.execute("SELECT COUNT(*) AS n FROM movies").fetchone()
    return int(row["n"])
