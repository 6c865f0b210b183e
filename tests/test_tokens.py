"""Token issuance + validation."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from movie_catalog.auth.crud import delete_user, validate_access_token
from movie_catalog.auth.errors import TokenExpired, TokenInvalid, TokenMalformed, TokenSignatureInvalid
from movie_catalog.auth.security import create_access_token, decode_access_token

from conftest import TEST_SECRET

SEVEN_DAYS = 7 * 24 * 60


def _issue(user, now=None, minutes=SEVEN_DAYS, secret=TEST_SECRET):
    return create_access_token(
        secret=secret,
        user_id=int(user["user_id"]),
        username=user["username"],
        expires_minutes=minutes,
        now=now,
    )


def _flip_signature_char(token):
    header, payload, sig = token.split(".")
    i = len(sig) // 2
    ch = "A" if sig[i] != "A" else "B"
    return ".".join([header, payload, sig[:i] + ch + sig[i + 1 :]])


def test_claims_carry_internal_id_and_seven_day_expiry(alice):
    now = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    token = _issue(alice, now=now)

    claims = jwt.decode(token, TEST_SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert claims["sub"] == str(alice["user_id"])
    assert claims["username"] == "alice"
    assert claims["iat"] == int(now.timestamp())
    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600
    assert jwt.get_unverified_header(token)["alg"] == "HS256"


def test_validate_issued_token_resolves_same_user(conn, alice):
    token = _issue(alice)

    user = validate_access_token(conn, token=token, secret=TEST_SECRET)

    assert user["user_id"] == alice["user_id"]
    assert user["username"] == "alice"
    assert "password_hash" not in user


def test_tokens_differ_only_by_issue_time(alice):
    t0 = datetime(2025, 3, 1, tzinfo=timezone.utc)
    assert _issue(alice, now=t0) == _issue(alice, now=t0)
    assert _issue(alice, now=t0) != _issue(alice, now=t0 + timedelta(seconds=1))


def test_expired_at_and_after_seven_days(alice):
    issued = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    token = _issue(alice, now=issued)

    decode_access_token(token=token, secret=TEST_SECRET, now=issued + timedelta(days=7, seconds=-1))
    with pytest.raises(TokenExpired):
        decode_access_token(token=token, secret=TEST_SECRET, now=issued + timedelta(days=7))
    with pytest.raises(TokenExpired):
        decode_access_token(token=token, secret=TEST_SECRET, now=issued + timedelta(days=30))


def test_altered_signature_rejected(alice):
    token = _issue(alice)

    with pytest.raises(TokenSignatureInvalid):
        decode_access_token(token=_flip_signature_char(token), secret=TEST_SECRET)


@pytest.mark.parametrize("ch", ["*", "!", "~"])
def test_non_base64_signature_char_is_bad_signature(alice, ch):
    header, payload, sig = _issue(alice).split(".")
    i = len(sig) // 2
    tampered = ".".join([header, payload, sig[:i] + ch + sig[i + 1 :]])

    with pytest.raises(TokenSignatureInvalid):
        decode_access_token(token=tampered, secret=TEST_SECRET)


def test_garbage_header_with_bad_signature_is_malformed(alice):
    _, payload, sig = _issue(alice).split(".")

    with pytest.raises(TokenMalformed):
        decode_access_token(token=".".join(["%%%", payload, sig[:-1] + "*"]), secret=TEST_SECRET)


def test_wrong_secret_rejected(alice):
    token = _issue(alice, secret="some-other-secret-that-is-long-enough-32b")

    with pytest.raises(TokenSignatureInvalid):
        decode_access_token(token=token, secret=TEST_SECRET)


@pytest.mark.parametrize("token", ["", "garbage", "a.b", "a.b.c", "x.y.z.w"])
def test_malformed_tokens(token):
    with pytest.raises(TokenMalformed):
        decode_access_token(token=token, secret=TEST_SECRET)


def test_missing_subject_is_malformed():
    now = int(datetime.now(timezone.utc).timestamp())
    token = jwt.encode({"iat": now, "exp": now + 3600}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(TokenMalformed):
        decode_access_token(token=token, secret=TEST_SECRET)


def test_non_integer_subject_is_malformed():
    now = int(datetime.now(timezone.utc).timestamp())
    token = jwt.encode({"sub": "alice", "iat": now, "exp": now + 3600}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(TokenMalformed):
        decode_access_token(token=token, secret=TEST_SECRET)


def test_unsigned_token_rejected():
    now = int(datetime.now(timezone.utc).timestamp())
    token = jwt.encode({"sub": "1", "iat": now, "exp": now + 3600}, None, algorithm="none")

    with pytest.raises(TokenInvalid):
        decode_access_token(token=token, secret=TEST_SECRET)


def test_all_token_errors_share_base():
    for cls in (TokenMalformed, TokenSignatureInvalid, TokenExpired):
        assert issubclass(cls, TokenInvalid)


def test_token_for_deleted_user_is_invalid(conn, alice):
    token = _issue(alice)
    delete_user(conn, int(alice["user_id"]))

    with pytest.raises(TokenInvalid, match="user_not_found"):
        validate_access_token(conn, token=token, secret=TEST_SECRET)


def test_blank_secret_refuses_to_sign(alice):
    with pytest.raises(ValueError, match="jwt_secret_blank"):
        _issue(alice, secret="")
