from __future__ import annotations


class InvalidCredentials(Exception):
    """Login rejected.

    `reason` is for server-side logs only ("no_such_user" or "password_mismatch").
    The message is identical for both so callers cannot probe which usernames exist.
    """

    detail = "invalid_credentials"

    def __init__(self, reason: str):
        super().__init__(self.detail)
        self.reason = reason


class TokenInvalid(Exception):
    """Base class for every way a bearer token can be refused."""

    def __init__(self, reason: str = "token_invalid"):
        super().__init__(reason)
        self.reason = reason


class TokenMalformed(TokenInvalid):
    def __init__(self, reason: str = "token_malformed"):
        super().__init__(reason)


class TokenSignatureInvalid(TokenInvalid):
    def __init__(self, reason: str = "token_signature_invalid"):
        super().__init__(reason)


class TokenExpired(TokenInvalid):
    def __init__(self, reason: str = "token_expired"):
        super().__init__(reason)
