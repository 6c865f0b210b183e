from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from movie_catalog.util.time import utcnow

from .errors import TokenExpired, TokenMalformed, TokenSignatureInvalid


_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
_JWT_ALG = "HS256"
_REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def hash_password(password: str) -> str:
    if not password:
        raise ValueError("password_blank")
    return _pwd.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return _pwd.verify(password, password_hash)
    except ValueError:
        # Unrecognized / corrupt hash format.
        return False


def create_access_token(
    *,
    secret: str,
    user_id: int,
    username: str,
    expires_minutes: int,
    now: Optional[datetime] = None,
) -> str:
    if not secret:
        raise ValueError("jwt_secret_blank")

    issued = now or utcnow()
    exp = issued + timedelta(minutes=max(1, int(expires_minutes)))

    payload: Dict[str, Any] = {
        # The subject is the internal id; validation resolves users by id.
        "sub": str(user_id),
        "username": username,
        "iat": int(issued.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=_JWT_ALG)


def _signed_part_parses(token: str) -> bool:
    """True when the header and claims segments of `token` decode on their own."""
    parts = token.split(".")
    if len(parts) != 3:
        return False
    try:
        jwt.decode(f"{parts[0]}.{parts[1]}.", options={"verify_signature": False})
    except jwt.InvalidTokenError:
        return False
    return True


def decode_access_token(
    *,
    token: str,
    secret: str,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Verify signature + expiry and return the claims.

    Raises TokenMalformed, TokenSignatureInvalid or TokenExpired (all TokenInvalid).
    Expiry is checked here against `now` so callers can pin the clock.
    """
    if not token:
        raise TokenMalformed("token_blank")
    if not secret:
        raise ValueError("jwt_secret_blank")

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[_JWT_ALG],
            options={"verify_exp": False, "verify_iat": False, "require": _REQUIRED_CLAIMS},
        )
    except jwt.InvalidSignatureError:
        raise TokenSignatureInvalid()
    except jwt.DecodeError as e:
        if _signed_part_parses(token):
            # Header and claims are fine; only the signature segment is garbage.
            raise TokenSignatureInvalid()
        raise TokenMalformed(f"token_malformed: {e}")
    except jwt.InvalidTokenError as e:
        raise TokenMalformed(f"token_malformed: {e}")

    try:
        int(payload["sub"])
        exp = int(payload["exp"])
    except (TypeError, ValueError):
        raise TokenMalformed("token_claims_not_int")

    current = now or utcnow()
    if current.timestamp() >= exp:
        raise TokenExpired()
    return payload
