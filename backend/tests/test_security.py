"""
Tests for password hashing and token issuance.
"""

from datetime import datetime, timezone, timedelta

import pytest
from jose import JWTError, jwt

from eventhub.core.security import (
    create_access_token, decode_access_token, hash_password, issue_token_for, verify_password,
)


def test_password_hash_round_trip():
    hashed = hash_password("secret1")
    assert hashed != "secret1"
    assert verify_password("secret1", hashed)
    assert not verify_password("secret2", hashed)


def test_token_carries_user_id_and_seven_day_expiry():
    payload = decode_access_token(issue_token_for(42))
    assert payload["sub"] == "42"

    expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    remaining = expires_at - datetime.now(timezone.utc)
    assert timedelta(days=6, hours=23) < remaining <= timedelta(days=7)


def test_tokens_for_same_user_differ():
    assert issue_token_for(1) != issue_token_for(1)


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-1))
    with pytest.raises(JWTError):
        decode_access_token(token)


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"sub": "1"}, "some-other-secret", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_access_token(token)
