"""Verification of bearer tokens issued by the external identity provider."""

from typing import Any

from jose import JWTError, jwt

from tuitionboard.core.config import settings


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a provider JWT."""
    options = {"verify_aud": settings.AUTH_AUDIENCE is not None}
    try:
        payload = jwt.decode(
            token,
            settings.AUTH_JWT_KEY,
            algorithms=settings.AUTH_JWT_ALGORITHMS,
            audience=settings.AUTH_AUDIENCE,
            issuer=settings.AUTH_ISSUER,
            options=options,
        )
        return payload
    except JWTError:
        return None


def verify_session_token(token: str) -> dict[str, Any] | None:
    """Verify a session token and return its payload if it names a subject."""
    payload = decode_token(token)
    if payload and payload.get("sub"):
        return payload
    return None


def display_name(claims: dict[str, Any]) -> str:
    """Build a tutor display name from provider claims."""
    name = claims.get("name")
    if not name:
        parts = [claims.get("first_name") or "", claims.get("last_name") or ""]
        name = " ".join(p for p in parts if p).strip()
    return name or "User"
