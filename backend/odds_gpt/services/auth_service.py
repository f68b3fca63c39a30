"""
backend/odds_gpt/services/auth_service.py

Purpose:
    Shared-secret gate for local callers of the /api routes. With no secret
    configured the gate is open; otherwise the candidate key is taken from the
    x-api-key header, then a bearer token, then the api_key query parameter.

Dependencies:
    - fastapi
    - secrets
"""

import logging
import secrets

from fastapi import HTTPException, Request, status

from odds_gpt.config import Settings

logger = logging.getLogger("odds_gpt.auth")

API_KEY_HEADER = "x-api-key"
API_KEY_QUERY = "api_key"


def extract_candidate(request: Request) -> str | None:
    """Return the first non-empty key presented by the caller, or None."""
    header_key = request.headers.get(API_KEY_HEADER)
    if header_key:
        return header_key

    authorization = request.headers.get("authorization") or ""
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()

    query_key = request.query_params.get(API_KEY_QUERY)
    if query_key:
        return query_key

    return None


def is_authorized(settings: Settings, candidate: str | None) -> bool:
    if not settings.auth_enabled:
        return True
    if candidate is None:
        return False
    return secrets.compare_digest(
        candidate.encode("utf-8"), settings.BACKEND_API_KEY.encode("utf-8")
    )


async def require_local_key(request: Request) -> None:
    """FastAPI dependency guarding the /api routes."""
    settings: Settings = request.app.state.settings
    if request.method == "OPTIONS":
        return
    if not is_authorized(settings, extract_candidate(request)):
        logger.warning("Rejected unauthenticated request to %s", request.url.path)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
