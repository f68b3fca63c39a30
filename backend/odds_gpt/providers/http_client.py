import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import urlparse

import httpx

logger = logging.getLogger("odds_gpt.http_client")


@dataclass(frozen=True)
class ParsedPayload:
    data: Any


@dataclass(frozen=True)
class InvalidPayload:
    raw: str


DecodeResult = Union[ParsedPayload, InvalidPayload]


def _reject_constant(name: str):
    # NaN/Infinity are not JSON; the envelope renderer rejects them.
    raise ValueError(f"non-standard JSON constant {name}")


def decode_json(text: str) -> DecodeResult:
    """Decode a provider body into a parsed payload or an invalid-payload marker."""
    try:
        return ParsedPayload(json.loads(text, parse_constant=_reject_constant))
    except ValueError:
        return InvalidPayload(text)


def _safe_url(url: str) -> str:
    """Strip query params (may contain API keys) for safe logging."""
    parsed = urlparse(str(url))
    return f"{parsed.scheme}://{parsed.netloc}{parsed.path}"


class UpstreamClient:
    """One-shot httpx wrapper: a fresh AsyncClient per call, no retries."""

    def __init__(
        self,
        name: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._name = name
        self._timeout = timeout
        self._transport = transport

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            try:
                resp = await client.request(method, url, **kwargs)
            except httpx.HTTPError as exc:
                logger.error(
                    "[%s] Network error on %s %s: %s",
                    self._name, method, _safe_url(url), exc,
                )
                raise

        level = logging.WARNING if resp.status_code >= 400 else logging.DEBUG
        logger.log(
            level, "[%s] %s %s -> %d",
            self._name, method, _safe_url(url), resp.status_code,
        )
        return resp

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)
