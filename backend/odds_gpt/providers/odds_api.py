import logging
import re
from dataclasses import dataclass, field
from typing import Any

from odds_gpt.config import Settings
from odds_gpt.models.envelope import OddsQuery, failure, success
from odds_gpt.providers.http_client import InvalidPayload, UpstreamClient, decode_json

logger = logging.getLogger("odds_gpt.odds_api")

# Odds are always served in American format; callers cannot override it.
ODDS_FORMAT = "american"

# Provider sport keys ("basketball_nba", "upcoming") are word characters only.
_SPORT_KEY_RE = re.compile(r"[A-Za-z0-9_]+")

# Provider quota headers relayed to the caller on success.
USAGE_HEADERS = ("x-requests-remaining", "x-requests-used", "x-requests-last")


@dataclass
class ProxyResult:
    status_code: int
    body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)


def is_valid_sport_key(sport: str) -> bool:
    return _SPORT_KEY_RE.fullmatch(sport) is not None


class TheOddsAPIForwarder:
    """Forwards catalog and odds lookups to TheOddsAPI, one call per request."""

    def __init__(self, settings: Settings, client: UpstreamClient | None = None):
        self._settings = settings
        self._base_url = settings.ODDS_API_BASE_URL.rstrip("/")
        self._client = client or UpstreamClient(
            "odds_api", timeout=settings.UPSTREAM_TIMEOUT_SECONDS
        )

    def _missing_key(self) -> ProxyResult | None:
        if self._settings.ODDS_API_KEY:
            return None
        logger.error("ODDS_API_KEY is not configured")
        return ProxyResult(500, failure("Missing ODDS_API_KEY"))

    async def list_sports(self, all_sports: str = "true") -> ProxyResult:
        missing = self._missing_key()
        if missing:
            return missing

        params = {"apiKey": self._settings.ODDS_API_KEY, "all": all_sports}
        return await self._forward(f"{self._base_url}/sports", params)

    async def get_odds(self, query: OddsQuery) -> ProxyResult:
        missing = self._missing_key()
        if missing:
            return missing

        if not is_valid_sport_key(query.sport):
            logger.warning("Rejected sport key %r", query.sport)
            return ProxyResult(400, failure("Invalid sport key"))

        params = {
            "apiKey": self._settings.ODDS_API_KEY,
            "regions": query.region,
            "markets": query.markets,
            "oddsFormat": ODDS_FORMAT,
            "dateFormat": query.date_format,
        }
        if query.bookmakers:
            params["bookmakers"] = query.bookmakers

        return await self._forward(
            f"{self._base_url}/sports/{query.sport}/odds",
            params,
            echo={"sport": query.sport, "region": query.region, "markets": query.markets},
        )

    async def _forward(
        self, url: str, params: dict[str, str], echo: dict[str, str] | None = None
    ) -> ProxyResult:
        resp = await self._client.get(url, params=params)

        if not resp.is_success:
            return ProxyResult(
                resp.status_code,
                failure(resp.text or f"Upstream error {resp.status_code}", status=resp.status_code),
            )

        decoded = decode_json(resp.text)
        if isinstance(decoded, InvalidPayload):
            logger.warning("Provider returned non-JSON body for %s", url)
            return ProxyResult(502, failure("Invalid JSON from provider", raw=decoded.raw))

        headers = {h: resp.headers[h] for h in USAGE_HEADERS if h in resp.headers}
        return ProxyResult(200, success(decoded.data, **(echo or {})), headers)
