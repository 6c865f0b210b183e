"""Authentication helpers.

Auth is deliberately small:

- Users table (username + salted password hash)
- Stateless JWT access tokens (HS256, 7 day lifetime, no refresh/revocation)

Login checks a username/password pair and mints a token whose subject is the
user's internal id. Every protected endpoint reads `Authorization: Bearer <token>`,
verifies signature + expiry, and resolves the id back to a user.
"""

from .crud import create_user, validate_access_token, verify_user_credentials
from .deps import get_current_user
from .errors import InvalidCredentials, TokenExpired, TokenInvalid, TokenMalformed, TokenSignatureInvalid

__all__ = [
    "create_user",
    "get_current_user",
    "validate_access_token",
    "verify_user_credentials",
    "InvalidCredentials",
    "TokenExpired",
    "TokenInvalid",
    "TokenMalformed",
    "TokenSignatureInvalid",
]
