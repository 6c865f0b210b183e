"""Movie catalog REST API - Backend.

Read-only catalog of movies, genres, directors and actors, plus self-service
user accounts with favorites.

Core concepts:
- Username/password login issues a stateless JWT (7 day lifetime).
- Every catalog and account endpoint requires `Authorization: Bearer <token>`.

See README for setup and usage.
"""

__all__ = ["__version__"]

__version__ = "1.0.0"
