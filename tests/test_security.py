"""Unit tests for tokens, password hashing and object ids."""

from datetime import datetime, timezone

import pytest
from jose import JWTError, jwt

from app.core.object_id import new_object_id, is_object_id
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


class TestTokens:
    def test_round_trip(self, test_settings):
        token = create_access_token("5f1d7f0e9b1e8a3c2d4e6f70", test_settings)

        assert decode_access_token(token, test_settings) == "5f1d7f0e9b1e8a3c2d4e6f70"

    def test_five_day_expiry(self, test_settings):
        token = create_access_token("5f1d7f0e9b1e8a3c2d4e6f70", test_settings)

        claims = jwt.get_unverified_claims(token)
        remaining = claims["exp"] - datetime.now(timezone.utc).timestamp()
        assert 5 * 86400 - 60 < remaining <= 5 * 86400

    def test_expired_token_rejected(self, test_settings):
        token = create_access_token("5f1d7f0e9b1e8a3c2d4e6f70", test_settings, expires_minutes=-1)

        with pytest.raises(JWTError):
            decode_access_token(token, test_settings)

    def test_wrong_secret_rejected(self, test_settings):
        token = create_access_token("5f1d7f0e9b1e8a3c2d4e6f70", test_settings)
        other = test_settings.model_copy(update={"SECRET_KEY": "other"})

        with pytest.raises(JWTError):
            decode_access_token(token, other)

    def test_missing_user_claim_rejected(self, test_settings):
        token = jwt.encode({"sub": "x"}, test_settings.SECRET_KEY, algorithm="HS256")

        with pytest.raises(JWTError):
            decode_access_token(token, test_settings)


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)


class TestObjectIds:
    def test_new_ids_are_valid_and_unique(self):
        ids = {new_object_id() for _ in range(100)}

        assert len(ids) == 100
        assert all(is_object_id(i) for i in ids)

    @pytest.mark.parametrize("value", ["", None, "123", "z" * 24, "0" * 25])
    def test_malformed(self, value):
        assert not is_object_id(value)
