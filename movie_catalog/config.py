import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load a local .env file if present (no-op otherwise).
load_dotenv()


def _env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    """Parse a boolean environment variable.

    Returns:
      - True/False if the env var is set to a recognizable value
      - default if unset or unrecognized

    Accepted truthy: 1, true, yes, y, on
    Accepted falsy:  0, false, no, n, off
    """

    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in ("1", "true", "yes", "y", "on"):
        return True
    if v in ("0", "false", "no", "n", "off"):
        return False
    return default


@dataclass(frozen=True)
class Config:
    """Runtime configuration.

    IMPORTANT: Provide the JWT secret via environment variables or a .env file.
    Do not hardcode secrets in source code.
    """

    # -----------------
    # Core
    # -----------------
    # Preferred: set MOVIE_CATALOG_DATABASE_URL (or DATABASE_URL) to use Postgres.
    # CONNECTION_URI is accepted for deployments carried over from the old stack.
    # Fallback: MOVIE_CATALOG_DB_PATH for SQLite.
    DB_DSN: str = (
        os.environ.get("MOVIE_CATALOG_DATABASE_URL")
        or os.environ.get("DATABASE_URL")
        or os.environ.get("CONNECTION_URI")
        or os.environ.get("MOVIE_CATALOG_DB_PATH", "./movie_catalog.sqlite")
    )

    # Log one line per HTTP request (method, path, status, duration).
    REQUEST_LOG: bool = _env_bool("REQUEST_LOG", True) is True

    # -----------------
    # Auth (JWT)
    # -----------------
    # NOTE: In dev, this defaults to a fixed string so you can get started.
    # In production, you MUST set JWT_SECRET to a strong random value.
    AUTH_JWT_SECRET: str = (
        os.environ.get("JWT_SECRET")
        or os.environ.get("AUTH_JWT_SECRET", "dev_change_me")
    )
    AUTH_TOKEN_EXPIRE_MINUTES: int = int(os.environ.get("AUTH_TOKEN_EXPIRE_MINUTES", "10080"))  # 7 days

    # -----------------
    # CORS
    # -----------------
    # Local dev frontends + the hosted client.
    CORS_ALLOW_ORIGINS: str = os.environ.get(
        "CORS_ALLOW_ORIGINS",
        "http://localhost:8080,http://localhost:4200,https://ivencomur.github.io",
    )

    # -----------------
    # Static files
    # -----------------
    # Served from the site root when the directory exists (docs page, images).
    STATIC_DIR: str = os.environ.get("STATIC_DIR", "./public")

    # -----------------
    # Seeding
    # -----------------
    # Password given to the demo users created by scripts/seed_db.py.
    SEED_USER_PASSWORD: str = os.environ.get("SEED_USER_PASSWORD", "password123")


def load_config() -> Config:
    return Config()
