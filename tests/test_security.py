from datetime import timedelta

import pytest
from jose import JWTError, jwt

from ridsport.core.config import settings
from ridsport.core.security import create_identity_token, decode_identity_token


def test_round_trip_claims():
    token = create_identity_token("firebase-123", "Alva@Example.se")

    claims = decode_identity_token(token)

    assert claims.external_identity_id == "firebase-123"
    assert claims.email == "alva@example.se"


def test_expired_token_rejected():
    token = create_identity_token("firebase-123", "a@example.se", timedelta(seconds=-10))

    with pytest.raises(JWTError):
        decode_identity_token(token)


def test_wrong_signature_rejected():
    token = jwt.encode({"sub": "x", "email": "a@example.se"}, "other-secret", algorithm="HS256")

    with pytest.raises(JWTError):
        decode_identity_token(token)


def test_missing_email_claim_rejected():
    token = jwt.encode(
        {"sub": "x"}, settings.IDENTITY_TOKEN_SECRET, algorithm=settings.IDENTITY_TOKEN_ALGORITHM
    )

    with pytest.raises(JWTError):
        decode_identity_token(token)
