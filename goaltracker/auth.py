"""API key guard for the /goals routes."""

import secrets

from fastapi import HTTPException, Header

from goaltracker.config import settings


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


async def verify_api_key(
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
    authorization: str | None = Header(default=None),
) -> str:
    """Accept the key from X-API-Key, falling back to Authorization: Bearer.

    Open when API_KEY is unset; otherwise a mismatch is a 401.
    """
    if settings.api_key is None:
        return ""

    key = x_api_key if x_api_key is not None else _bearer_token(authorization)
    if key is None or not secrets.compare_digest(key, settings.api_key):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")

    return key
