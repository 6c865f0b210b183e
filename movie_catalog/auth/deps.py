from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from movie_catalog.config import Config
from movie_catalog.db import connect

from .crud import validate_access_token
from .errors import TokenInvalid


_bearer = HTTPBearer(auto_error=False)


def _debug(msg: str) -> None:
    print(f"[auth] {msg}")


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def get_config(request: Request) -> Config:
    cfg = getattr(request.app.state, "cfg", None)
    if cfg is None:
        raise HTTPException(status_code=500, detail="server_config_missing")
    return cfg


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    cfg: Config = Depends(get_config),
) -> Dict[str, Any]:
    """Authenticate a request from its `Authorization: Bearer <jwt>` header.

    Malformed, expired and badly signed tokens (and tokens for deleted users)
    all collapse into the same 401 "unauthorized"; the specific reason is
    only logged.
    """

    token = credentials.credentials if credentials is not None else None
    if not token:
        raise unauthorized("missing_token")

    with connect(cfg.DB_DSN) as conn:
        try:
            return validate_access_token(conn, token=token, secret=cfg.AUTH_JWT_SECRET)
        except TokenInvalid as e:
            _debug(f"Token rejected: {e.reason}")
            raise unauthorized("unauthorized")
