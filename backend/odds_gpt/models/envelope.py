"""
backend/odds_gpt/models/envelope.py

Purpose:
    Response envelope shared by every route, plus the normalized odds query.
    Envelopes are serialized with ``exclude_unset`` so that only the fields a
    route actually sets reach the wire; an explicit ``data=None`` (upstream
    returned JSON ``null``) is still emitted.

Dependencies:
    - pydantic
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class Envelope(BaseModel):
    ok: bool
    status: int | None = None
    error: str | None = None
    data: Any = None
    count: int | None = None
    sport: str | None = None
    region: str | None = None
    markets: str | None = None
    raw: str | None = None
    service: str | None = None

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


def success(data: Any, **fields: Any) -> dict[str, Any]:
    """Success envelope; ``count`` is added when the payload is a JSON array."""
    if isinstance(data, list):
        fields["count"] = len(data)
    return Envelope(ok=True, data=data, **fields).to_json()


def failure(error: str, **fields: Any) -> dict[str, Any]:
    return Envelope(ok=False, error=error, **fields).to_json()


class OddsQuery(BaseModel):
    """Normalized inputs for the odds route."""

    model_config = ConfigDict(frozen=True)

    sport: str = "upcoming"
    region: str = "us"
    markets: str = "h2h"
    bookmakers: str | None = None
    date_format: str = "iso"
