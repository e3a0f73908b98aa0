"""
core/security.py
----------------
Identity-token utilities.

Credentials are verified by the external identity provider, never here.
The provider hands the client a signed JWT whose claims are:

  sub    external identity id (stable per login account)
  email  verified e-mail address

We only check the signature / expiry and extract those two claims.
create_identity_token mints compatible tokens for local development and tests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from ridsport.core.config import settings


@dataclass(frozen=True)
class IdentityClaims:
    external_identity_id: str
    email: str


def create_identity_token(
    external_identity_id: str,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Mint an identity token the way the provider would.

    Args:
        external_identity_id: Provider account id (stored in 'sub' claim).
        email: Verified e-mail address of the account.
        expires_delta: Optional custom expiry; defaults to settings value.

    Returns:
        Signed JWT string.
    """
    now = datetime.now(timezone.utc)
    expire = now + (
        expires_delta or timedelta(minutes=settings.IDENTITY_TOKEN_EXPIRE_MINUTES)
    )
    payload: Dict[str, Any] = {
        "sub": external_identity_id,
        "email": email,
        "exp": expire,
        "iat": now,
    }
    if settings.IDENTITY_TOKEN_AUDIENCE:
        payload["aud"] = settings.IDENTITY_TOKEN_AUDIENCE
    return jwt.encode(
        payload,
        settings.IDENTITY_TOKEN_SECRET,
        algorithm=settings.IDENTITY_TOKEN_ALGORITHM,
    )


def decode_identity_token(token: str) -> IdentityClaims:
    """
    Decode and validate an identity token.

    Raises:
        JWTError: If the token is invalid, expired, tampered with, or
                  lacks the sub / email claims.
    """
    payload = jwt.decode(
        token,
        settings.IDENTITY_TOKEN_SECRET,
        algorithms=[settings.IDENTITY_TOKEN_ALGORITHM],
        audience=settings.IDENTITY_TOKEN_AUDIENCE,
        options={"verify_aud": settings.IDENTITY_TOKEN_AUDIENCE is not None},
    )
    subject = payload.get("sub")
    email = payload.get("email")
    if not subject or not email:
        raise JWTError("Identity token is missing required claims")
    return IdentityClaims(external_identity_id=subject, email=email.lower())
