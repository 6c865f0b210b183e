"""Demo catalog + demo users.

Idempotent: rows are keyed by their unique name/title and existing rows are
left alone, so re-running the seed only fills in what is missing.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from movie_catalog.auth.crud import add_favorite, create_user, get_user_by_email, get_user_by_username


def _debug(msg: str) -> None:
    print(f"[seed] {msg}")


GENRES: List[Tuple[str, str]] = [
    ("Drama", "Character-driven stories with realistic settings and focus on emotional development."),
    ("Crime", "Focuses on criminal actions, detection, and motives."),
    ("Action", "Characterized by excitement, stunts, chases, and resourcefulness in battling antagonists."),
    ("Thriller", "Evokes excitement, suspense, anticipation, and anxiety."),
    ("Sci-Fi", "Speculative fiction dealing with imaginative concepts such as futuristic science and technology."),
    ("Comedy", "Intended to make an audience laugh."),
    ("Fantasy", "Uses magic and other supernatural phenomena as primary plot elements or themes."),
    ("Animation", "Utilizes animation techniques to tell a story."),
    ("Adventure", "Features exciting journeys, exploration, and often elements of danger."),
    ("Mystery", "Focuses on the solving of a crime or puzzle."),
    ("Western", "Films set in the American Old West, typically featuring cowboys, frontier life, and conflicts."),
]

# (name, bio, birth, death)
DIRECTORS: List[Tuple[str, str, str, Optional[str]]] = [
    ("Frank Darabont", "American director, screenwriter and producer, known for The Shawshank Redemption and The Green Mile.", "1959-01-28", None),
    ("Francis Ford Coppola", "American film director, producer and screenwriter, central figure of the New Hollywood filmmaking movement.", "1939-04-07", None),
    ("Christopher Nolan", "British-American filmmaker known for complex narratives and large-scale productions like Inception and The Dark Knight.", "1970-07-30", None),
    ("Quentin Tarantino", "American filmmaker and actor known for stylized violence, non-linear storylines, and pop culture references.", "1963-03-27", None),
    ("Robert Zemeckis", "American filmmaker known for innovative visual effects in films like Forrest Gump and Back to the Future.", "1952-05-14", None),
    ("Bong Joon-ho", "South Korean film director, producer and screenwriter.", "1969-09-14", None),
    ("Hayao Miyazaki", "Japanese animated film director, producer, screenwriter, animator, author, and manga artist.", "1941-01-05", None),
    ("Lana Wachowski", "American film director, screenwriter and producer, known for The Matrix series.", "1965-06-21", None),
    ("Jonathan Demme", "American director, producer, and screenwriter, best known for directing The Silence of the Lambs.", "1944-02-22", "2017-04-26"),
    ("David Fincher", "American film director known for his dark and stylish psychological thrillers.", "1962-08-28", None),
    ("Denis Villeneuve", "Canadian film director and writer, known for Arrival, Blade Runner 2049, and Dune.", "1967-10-03", None),
    ("George Miller", "Australian film director, producer, screenwriter, and physician. He is best known for his Mad Max franchise.", "1945-03-03", None),
    ("Sergio Leone", "Italian film director, producer and screenwriter, credited as the creator of the Spaghetti Western genre.", "1929-01-03", "1989-04-30"),
]

# (name, bio, birth, death)
ACTORS: List[Tuple[str, str, str, Optional[str]]] = [
    ("Tim Robbins", "American actor, director, screenwriter, producer, activist and musician.", "1958-10-16", None),
    ("Morgan Freeman", "American actor, director and narrator known for his distinctive deep voice.", "1937-06-01", None),
    ("Marlon Brando", "American actor considered one of the most influential actors of the 20th century.", "1924-04-03", "2004-07-01"),
    ("Al Pacino", "American actor and filmmaker with a career spanning over five decades.", "1940-04-25", None),
    ("Christian Bale", "English actor known for his versatility and intense method acting.", "1974-01-30", None),
    ("Heath Ledger", "Australian actor and music video director.", "1979-04-04", "2008-01-22"),
    ("John Travolta", "American actor and singer.", "1954-02-18", None),
    ("Samuel L. Jackson", "American actor and producer. One of the most widely recognized actors of his generation.", "1948-12-21", None),
    ("Uma Thurman", "American actress, writer, producer and model.", "1970-04-29", None),
    ("Tom Hanks", "American actor and filmmaker. Known for both his comedic and dramatic roles.", "1956-07-09", None),
    ("Robin Wright", "American actress and director.", "1966-04-08", None),
    ("Gary Sinise", "American actor, director, musician, producer and philanthropist.", "1955-03-17", None),
    ("Leonardo DiCaprio", "American actor and film producer known for his work in biopics and period films.", "1974-11-11", None),
    ("Joseph Gordon-Levitt", "American actor, filmmaker, singer, and entrepreneur.", "1981-02-17", None),
    ("Elliot Page", "Canadian actor and producer.", "1987-02-21", None),
    ("Song Kang-ho", "South Korean actor, prominent figure in the country's film industry.", "1967-01-17", None),
    ("Rumi Hiiragi", "Japanese actress (voice actress for Chihiro in Spirited Away).", "1987-08-01", None),
    ("Miyu Irino", "Japanese actor and voice actor (voice of Haku in Spirited Away).", "1988-02-19", None),
    ("Tom Hardy", "English actor and producer. He made his film debut in Ridley Scott's Black Hawk Down.", "1977-09-15", None),
    ("Charlize Theron", "South African and American actress and producer.", "1975-08-07", None),
    ("Jodie Foster", "American actress, director, and producer.", "1962-11-19", None),
    ("Anthony Hopkins", "Welsh actor, director, and producer.", "1937-12-31", None),
    ("Brad Pitt", "American actor and film producer.", "1963-12-18", None),
    ("Gwyneth Paltrow", "American actress and businesswoman.", "1972-09-27", None),
    ("Amy Adams", "American actress known for both her comedic and dramatic performances.", "1974-08-20", None),
    ("Jeremy Renner", "American actor known for his roles in The Hurt Locker and The Avengers.", "1971-01-07", None),
    ("Forest Whitaker", "American actor, producer, director, and activist.", "1961-07-15", None),
    ("Clint Eastwood", "American actor, film director, composer, and producer.", "1930-05-31", None),
]

MOVIES: List[Dict[str, Any]] = [
    {
        "title": "The Shawshank Redemption",
        "description": "Two imprisoned men bond over a number of years, finding solace and eventual redemption through acts of common decency.",
        "genre": "Drama",
        "director": "Frank Darabont",
        "actors": ["Tim Robbins", "Morgan Freeman"],
        "image_path": "https://upload.wikimedia.org/wikipedia/en/8/81/ShawshankRedemptionMoviePoster.jpg",
        "featured": True,
        "release_year": 1994,
        "rating": 9.3,
    },
    {
        "title": "The Godfather",
        "description": "The aging patriarch of an organized crime dynasty transfers control of his clandestine empire to his reluctant son.",
        "genre": "Crime",
        "director": "Francis Ford Coppola",
        "actors": ["Marlon Brando", "Al Pacino"],
        "image_path": "https://upload.wikimedia.org/wikipedia/en/1/1c/Godfather_ver1.jpg",
        "featured": True,
        "release_year": 1972,
        "rating": 9.2,
    },
    {
        "title": "The Dark Knight",
        "description": "When the menace known as the Joker wreaks havoc and chaos on the people of Gotham, Batman must accept one of the greatest psychological and physical tests of his ability to fight injustice.",
        "genre": "Action",
        "director": "Christopher Nolan",
        "actors": ["Christian Bale", "Heath Ledger"],
        "image_path": "https://m.media-amazon.com/images/M/MV5BMTMxNTMwODM0NF5BMl5BanBnXkFtZTcwODAyMTk2Mw@@._V1_SX300.jpg",
        "featured": True,
        "release_year": 2008,
        "rating": 9.0,
    },
    {
        "title": "Pulp Fiction",
        "description": "The lives of two mob hitmen, a boxer, a gangster and his wife, and a pair of diner bandits intertwine in four tales of violence and redemption.",
        "genre": "Crime",
        "director": "Quentin Tarantino",
        "actors": ["John Travolta", "Samuel L. Jackson", "Uma Thurman"],
        "image_path": "https://upload.wikimedia.org/wikipedia/en/3/3b/Pulp_Fiction_%281994%29_poster.jpg",
        "featured": False,
        "release_year": 1994,
        "rating": 8.9,
    },
    {
        "title": "Forrest Gump",
        "description": "The presidencies of Kennedy and Johnson, the Vietnam War, and other historical events unfold from the perspective of an Alabama man with an IQ of 75.",
        "genre": "Comedy",
        "director": "Robert Zemeckis",
        "actors": ["Tom Hanks", "Robin Wright", "Gary Sinise"],
        "image_path": "https://upload.wikimedia.org/wikipedia/en/6/67/Forrest_Gump_poster.jpg",
        "featured": True,
        "release_year": 1994,
        "rating": 8.8,
    },
    {
        "title": "Inception",
        "description": "A thief who steals corporate secrets through the use of dream-sharing technology is given the inverse task of planting an idea into the mind of a C.E.O.",
        "genre": "Sci-Fi",
        "director": "Christopher Nolan",
        "actors": ["Leonardo DiCaprio", "Joseph Gordon-Levitt", "Elliot Page"],
        "image_path": "https://m.media-amazon.com/images/M/MV5BMjAxMzY3NjcxNF5BMl5BanBnXkFtZTcwNTI5OTM0Mw@@._V1_SX300.jpg",
        "featured": True,
        "release_year": 2010,
        "rating": 8.8,
    },
    {
        "title": "Mad Max: Fury Road",
        "description": "In a post-apocalyptic wasteland, a woman rebels against a tyrannical ruler in search for her homeland with the help of a group of female prisoners, a psychotic worshiper, and a drifter named Max.",
        "genre": "Action",
        "director": "George Miller",
        "actors": ["Tom Hardy", "Charlize Theron"],
        "image_path": "https://m.media-amazon.com/images/M/MV5BN2EwM2I5OWMtMGQyMi00Zjg1LWJkNTctZTdjYTA4OGUwZjMyXkEyXkFqcGdeQXVyMTMxODk2OTU@._V1_SX300.jpg",
        "featured": False,
        "release_year": 2015,
        "rating": 8.1,
    },
    {
        "title": "Spirited Away",
        "description": "During her family's move to the suburbs, a sullen 10-year-old girl wanders into a world ruled by gods, witches, and spirits, and where humans are changed into beasts.",
        "genre": "Animation",
        "director": "Hayao Miyazaki",
        "actors": ["Rumi Hiiragi", "Miyu Irino"],
        "image_path": "https://m.media-amazon.com/images/M/MV5BMjlmZmI5MDctNDE2YS00YWE0LWE5ZWItZDBhYWQ0NTcxNWRhXkEyXkFqcGdeQXVyMTMxODk2OTU@._V1_SX300.jpg",
        "featured": False,
        "release_year": 2001,
        "rating": 8.6,
    },
    {
        "title": "Parasite",
        "description": "Greed and class discrimination threaten the newly formed symbiotic relationship between the wealthy Park family and the destitute Kim clan.",
        "genre": "Thriller",
        "director": "Bong Joon-ho",
        "actors": ["Song Kang-ho"],
        "image_path": "https://m.media-amazon.com/images/M/MV5BYWZjMjk3ZTItODQ2ZC00NTY5LWE0ZDYtZTI3MjcwN2Q5NTVkXkEyXkFqcGdeQXVyODk4OTc3MTY@._V1_SX300.jpg",
        "featured": True,
        "release_year": 2019,
        "rating": 8.6,
    },
    {
        "title": "The Silence of the Lambs",
        "description": "A young F.B.I. cadet must receive the help of an incarcerated and manipulative cannibal killer to help catch another serial killer.",
        "genre": "Thriller",
        "director": "Jonathan Demme",
        "actors": ["Jodie Foster", "Anthony Hopkins"],
        "image_path": "https://upload.wikimedia.org/wikipedia/en/8/86/The_Silence_of_the_Lambs_poster.jpg",
        "featured": True,
        "release_year": 1991,
        "rating": 8.6,
    },
    {
        "title": "Se7en",
        "description": "Two detectives, a rookie and a veteran, hunt a serial killer who uses the seven deadly sins as his motives.",
        "genre": "Mystery",
        "director": "David Fincher",
        "actors": ["Brad Pitt", "Morgan Freeman", "Gwyneth Paltrow"],
        "image_path": "https://upload.wikimedia.org/wikipedia/en/6/68/Seven_%28movie%29_poster.jpg",
        "featured": False,
        "release_year": 1995,
        "rating": 8.6,
    },
    {
        "title": "The Good, the Bad and the Ugly",
        "description": "A bounty hunting scam joins two men in an uneasy alliance against a third in a race to find a fortune in gold buried in a remote cemetery.",
        "genre": "Western",
        "director": "Sergio Leone",
        "actors": ["Clint Eastwood"],
        "image_path": "https://m.media-amazon.com/images/M/MV5BOTQ5NDI3MTI4MF5BMl5BanBnXkFtZTgwNDQ4ODE5MDE@._V1_SX300.jpg",
        "featured": False,
        "release_year": 1966,
        "rating": 8.8,
    },
]

# (username, email, birthday, favorite titles)
DEMO_USERS: List[Tuple[str, str, Optional[date], List[str]]] = [
    ("testus", "testing@testing.com", None, ["The Shawshank Redemption"]),
    ("moviefan", "moviefan@example.com", date(1988, 5, 10), ["The Shawshank Redemption", "The Godfather"]),
    ("IVANUSHKA", "ivanushka@test.com", None, ["The Dark Knight"]),
]


def _id_by_name(conn: Any, table: str, id_col: str, name: str) -> int:
    row = conn.execute(f"SELECT {id_col} FROM {table} WHERE name=?", (name,)).fetchone()
    if row is None:
        raise ValueError(f"{table}_missing: {name}")
    return int(row[id_col])


def reset_all(conn: Any) -> None:
    """Drop every user and catalog row (tables are kept)."""
    for table in ("user_favorites", "movie_actors", "movies", "actors", "directors", "genres", "users"):
        conn.execute(f"DELETE FROM {table}")
    _debug("Cleared users + catalog tables")


def seed_catalog(conn: Any) -> Dict[str, int]:
    conn.executemany(
        "INSERT INTO genres (name, description) VALUES (?, ?) ON CONFLICT (name) DO NOTHING",
        GENRES,
    )
    conn.executemany(
        "INSERT INTO directors (name, bio, birth, death) VALUES (?, ?, ?, ?) ON CONFLICT (name) DO NOTHING",
        DIRECTORS,
    )
    conn.executemany(
        "INSERT INTO actors (name, bio, birth, death) VALUES (?, ?, ?, ?) ON CONFLICT (name) DO NOTHING",
        ACTORS,
    )

    for m in MOVIES:
        conn.execute(
            """
            INSERT INTO movies (title, description, genre_id, director_id, image_path, featured, release_year, rating)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (title) DO NOTHING
            """,
            (
                m["title"],
                m["description"],
                _id_by_name(conn, "genres", "genre_id", m["genre"]),
                _id_by_name(conn, "directors", "director_id", m["director"]),
                m["image_path"],
                1 if m["featured"] else 0,
                m["release_year"],
                m["rating"],
            ),
        )
        movie_id = int(
            conn.execute("SELECT movie_id FROM movies WHERE title=?", (m["title"],)).fetchone()["movie_id"]
        )
        for actor in m["actors"]:
            conn.execute(
                "INSERT INTO movie_actors (movie_id, actor_id) VALUES (?, ?) ON CONFLICT (movie_id, actor_id) DO NOTHING",
                (movie_id, _id_by_name(conn, "actors", "actor_id", actor)),
            )

    counts = {
        table: int(conn.execute(f"SELECT COUNT(*) AS n FROM {table}").fetchone()["n"])
        for table in ("genres", "directors", "actors", "movies")
    }
    _debug(f"Catalog seeded: {counts}")
    return counts


def seed_users(conn: Any, *, password: str) -> List[str]:
    """Create the demo users (skipping any that exist). Returns the usernames created."""
    created: List[str] = []
    for username, email, birthday, favorites in DEMO_USERS:
        if get_user_by_username(conn, username) is not None:
            continue
        if get_user_by_email(conn, email) is not None:
            _debug(f"Skipping demo user {username!r}: email {email!r} already registered")
            continue
        u = create_user(conn, username=username, password=password, email=email, birthday=birthday)
        for title in favorites:
            row = conn.execute("SELECT movie_id FROM movies WHERE title=?", (title,)).fetchone()
            if row is not None:
                add_favorite(conn, user_id=int(u["user_id"]), movie_id=int(row["movie_id"]))
        created.append(username)
    _debug(f"Demo users created: {created}")
    return created
