"""
Shared pytest fixtures for the movie catalog tests.

- cfg: a Config pointing at a fresh SQLite file per test
- conn: an open connection to that DB (schema created)
- client: a TestClient over create_app(cfg)
- seeded: catalog rows loaded via catalog.seed
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from movie_catalog.api.server import create_app
from movie_catalog.auth.crud import create_user
from movie_catalog.catalog.seed import seed_catalog
from movie_catalog.config import Config
from movie_catalog.db import connect, init_db


TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


@pytest.fixture
def cfg(tmp_path):
    c = Config(
        DB_DSN=str(tmp_path / "catalog.sqlite"),
        AUTH_JWT_SECRET=TEST_SECRET,
        AUTH_TOKEN_EXPIRE_MINUTES=10080,
        REQUEST_LOG=False,
        STATIC_DIR=str(tmp_path / "public"),
    )
    init_db(c.DB_DSN)
    return c


@pytest.fixture
def conn(cfg):
    with connect(cfg.DB_DSN) as c:
        yield c


@pytest.fixture
def seeded(cfg):
    with connect(cfg.DB_DSN) as c:
        return seed_catalog(c)


@pytest.fixture
def client(cfg):
    with TestClient(create_app(cfg)) as c:
        yield c


@pytest.fixture
def alice(cfg):
    """Registered user alice / Secret123!"""
    with connect(cfg.DB_DSN) as c:
        return create_user(c, username="alice", password="Secret123!", email="alice@example.com")


def login(client, username, password):
    return client.post("/login", json={"username": username, "password": password})


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
