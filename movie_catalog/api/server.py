from __future__ import annotations

import os
import time
from contextlib import asynccontextmanager
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from movie_catalog.auth import InvalidCredentials, get_current_user, verify_user_credentials
from movie_catalog.auth.crud import (
    add_favorite,
    create_user,
    delete_user,
    remove_favorite,
    update_user,
    validate_registration,
)
from movie_catalog.auth.deps import get_config, unauthorized
from movie_catalog.auth.security import create_access_token
from movie_catalog.catalog.crud import (
    get_actor_by_name,
    get_director_by_name,
    get_genre_by_name,
    get_movie_by_title,
    list_actors,
    list_directors,
    list_genres,
    list_movies,
)
from movie_catalog.config import Config, load_config
from movie_catalog.db import StoreUnavailable, connect, init_db


def _debug(msg: str) -> None:
    print(f"[api] {msg}")


router = APIRouter()


def _conflict_or_bad_request(e: ValueError) -> HTTPException:
    detail = str(e)
    if detail in ("username_exists", "email_exists"):
        return HTTPException(status_code=409, detail=detail)
    if detail in ("movie_not_found", "user_not_found"):
        return HTTPException(status_code=404, detail=detail)
    return HTTPException(status_code=400, detail=detail)


# -----------------------------
# Health
# -----------------------------


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Welcome to the movie catalog API!"


@router.get("/health")
def health() -> Dict[str, Any]:
    return {"status": "ok"}


# -----------------------------
# Auth
# -----------------------------


class LoginRequest(BaseModel):
    username: str
    password: str


class RegisterRequest(BaseModel):
    username: str
    password: str
    email: str
    birthday: Optional[date] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UpdateUserRequest(BaseModel):
    """Profile update. `username` must match the caller; it cannot be changed."""

    username: str
    password: Optional[str] = None
    email: Optional[str] = None
    birthday: Optional[date] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


@router.post("/login")
def login(payload: LoginRequest, cfg: Config = Depends(get_config)) -> Dict[str, Any]:
    _debug(f"Login attempt username={payload.username!r}")
    with connect(cfg.DB_DSN) as conn:
        try:
            user = verify_user_credentials(conn, payload.username, payload.password)
        except InvalidCredentials as e:
            raise unauthorized(e.detail)

    try:
        token = create_access_token(
            secret=cfg.AUTH_JWT_SECRET,
            user_id=int(user["user_id"]),
            username=str(user["username"]),
            expires_minutes=int(cfg.AUTH_TOKEN_EXPIRE_MINUTES),
        )
    except ValueError as e:
        _debug(f"Token generation failed: {e}")
        raise HTTPException(status_code=500, detail="token_generation_failed")

    return {"user": user, "token": token, "token_type": "bearer"}


@router.post("/users", status_code=201)
def register(payload: RegisterRequest, cfg: Config = Depends(get_config)) -> Any:
    errors = validate_registration(payload.username, payload.password, payload.email)
    if errors:
        return JSONResponse(status_code=422, content={"errors": errors})

    with connect(cfg.DB_DSN) as conn:
        try:
            u = create_user(
                conn,
                username=payload.username,
                password=payload.password,
                email=payload.email,
                birthday=payload.birthday,
                first_name=payload.first_name,
                last_name=payload.last_name,
            )
        except ValueError as e:
            raise _conflict_or_bad_request(e)
    return {"user": u}


# -----------------------------
# Current user
# -----------------------------


@router.get("/user")
def get_user(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return {"user": user}


@router.put("/user")
def put_user(
    payload: UpdateUserRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    if payload.username != user["username"]:
        raise HTTPException(status_code=403, detail="permission_denied")

    with connect(cfg.DB_DSN) as conn:
        try:
            u = update_user(
                conn,
                user_id=int(user["user_id"]),
                password=payload.password,
                email=payload.email,
                birthday=payload.birthday,
                first_name=payload.first_name,
                last_name=payload.last_name,
            )
        except ValueError as e:
            raise _conflict_or_bad_request(e)
    return {"user": u}


@router.delete("/user")
def delete_current_user(
    user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    username = user["username"]
    with connect(cfg.DB_DSN) as conn:
        if not delete_user(conn, int(user["user_id"])):
            raise HTTPException(status_code=404, detail="user_not_found")
    _debug(f"Deleted user username={username!r}")
    return {"ok": True, "message": f"{username} was deleted."}


@router.post("/user/favorites/{movie_id}")
def add_user_favorite(
    movie_id: int,
    user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        try:
            u = add_favorite(conn, user_id=int(user["user_id"]), movie_id=movie_id)
        except ValueError as e:
            raise _conflict_or_bad_request(e)
    return {"user": u}


@router.delete("/user/favorites/{movie_id}")
def remove_user_favorite(
    movie_id: int,
    user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        try:
            u = remove_favorite(conn, user_id=int(user["user_id"]), movie_id=movie_id)
        except ValueError as e:
            raise _conflict_or_bad_request(e)
    return {"user": u}


# -----------------------------
# Catalog
# -----------------------------


@router.get("/movies")
def movies(
    _user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> List[Dict[str, Any]]:
    with connect(cfg.DB_DSN) as conn:
        return list_movies(conn)


@router.get("/movies/{title}")
def movie(
    title: str,
    _user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        m = get_movie_by_title(conn, title)
    if m is None:
        raise HTTPException(status_code=404, detail="movie_not_found")
    return m


@router.get("/genres")
def genres(
    _user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> List[Dict[str, Any]]:
    with connect(cfg.DB_DSN) as conn:
        return list_genres(conn)


@router.get("/genres/{name}")
def genre(
    name: str,
    _user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        g = get_genre_by_name(conn, name)
    if g is None:
        raise HTTPException(status_code=404, detail="genre_not_found")
    return g


@router.get("/directors")
def directors(
    _user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> List[Dict[str, Any]]:
    with connect(cfg.DB_DSN) as conn:
        return list_directors(conn)


@router.get("/directors/{name}")
def director(
    name: str,
    _user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        d = get_director_by_name(conn, name)
    if d is None:
        raise HTTPException(status_code=404, detail="director_not_found")
    return d


@router.get("/actors")
def actors(
    _user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> List[Dict[str, Any]]:
    with connect(cfg.DB_DSN) as conn:
        return list_actors(conn)


@router.get("/actors/{name}")
def actor(
    name: str,
    _user: Dict[str, Any] = Depends(get_current_user),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    with connect(cfg.DB_DSN) as conn:
        a = get_actor_by_name(conn, name)
    if a is None:
        raise HTTPException(status_code=404, detail="actor_not_found")
    return a


# -----------------------------
# App factory
# -----------------------------


def create_app(cfg: Optional[Config] = None) -> FastAPI:
    cfg = cfg or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Ensure schema exists.
        init_db(cfg.DB_DSN)
        yield

    app = FastAPI(title="Movie Catalog API", version="1.0.0", lifespan=lifespan)
    # Make config available to route deps.
    app.state.cfg = cfg

    _cors_origins = [o.strip() for o in (cfg.CORS_ALLOW_ORIGINS or "").split(",") if o.strip()]
    if _cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=_cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    if cfg.REQUEST_LOG:

        @app.middleware("http")
        async def _log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            ms = (time.perf_counter() - started) * 1000.0
            client = request.client.host if request.client else "-"
            _debug(f'{client} "{request.method} {request.url.path}" {response.status_code} {ms:.1f}ms')
            return response

    @app.exception_handler(StoreUnavailable)
    async def _store_unavailable(request: Request, exc: StoreUnavailable) -> JSONResponse:
        _debug(f"Store unavailable during {request.method} {request.url.path}")
        return JSONResponse(status_code=503, content={"detail": "store_unavailable"})

    app.include_router(router)

    # Mounted last so API routes take precedence.
    if cfg.STATIC_DIR and os.path.isdir(cfg.STATIC_DIR):
        _debug(f"Serving static files from {cfg.STATIC_DIR}")
        app.mount("/", StaticFiles(directory=cfg.STATIC_DIR), name="static")
    return app


app = create_app()
