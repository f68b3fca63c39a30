"""
backend/odds_gpt/services/openapi_service.py

Purpose:
    Builds the machine-readable description served at /openapi.json. The
    document covers the two proxy routes and the accepted API key schemes so
    an agent can discover the API before it holds a key.

Dependencies:
    - odds_gpt.config
    - odds_gpt.providers.odds_api
"""

from typing import Any

from odds_gpt.config import SERVICE_NAME, Settings
from odds_gpt.providers.odds_api import ODDS_FORMAT
from odds_gpt.services.auth_service import API_KEY_HEADER, API_KEY_QUERY

API_VERSION = "1.0.0"


def _query_param(
    name: str, description: str, default: str | None = None, example: str | None = None
) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "string"}
    if default is not None:
        schema["default"] = default
    param: dict[str, Any] = {
        "name": name,
        "in": "query",
        "required": False,
        "description": description,
        "schema": schema,
    }
    if example is not None:
        param["example"] = example
    return param


def _envelope_schema() -> dict[str, Any]:
    return {
        "type": "object",
        "required": ["ok"],
        "properties": {
            "ok": {"type": "boolean"},
            "status": {"type": "integer", "description": "Provider status on upstream errors."},
            "error": {"type": "string"},
            "count": {"type": "integer", "description": "Number of items when data is a list."},
            "data": {"description": "Provider payload, passed through unchanged."},
            "sport": {"type": "string"},
            "region": {"type": "string"},
            "markets": {"type": "string"},
            "raw": {"type": "string", "description": "Raw provider body when it was not JSON."},
        },
    }


def _responses(success_description: str) -> dict[str, Any]:
    envelope_ref = {"application/json": {"schema": {"$ref": "#/components/schemas/Envelope"}}}
    return {
        "200": {"description": success_description, "content": envelope_ref},
        "401": {"description": "Missing or invalid API key.", "content": envelope_ref},
        "502": {"description": "Provider returned a non-JSON body.", "content": envelope_ref},
        "default": {"description": "Provider or proxy error.", "content": envelope_ref},
    }


def build_openapi_document(settings: Settings) -> dict[str, Any]:
    security = [{"ApiKeyHeader": []}, {"BearerAuth": []}, {"ApiKeyQuery": []}]

    document: dict[str, Any] = {
        "openapi": "3.1.0",
        "info": {
            "title": SERVICE_NAME,
            "version": API_VERSION,
            "description": (
                "Proxy for TheOddsAPI. Lists sports and fetches current odds "
                f"in {ODDS_FORMAT} format. Responses are wrapped in an envelope "
                "with an `ok` flag."
            ),
        },
        "paths": {
            "/api/sports": {
                "get": {
                    "operationId": "listSports",
                    "summary": "List available sports",
                    "parameters": [
                        _query_param(
                            "all",
                            "Include out-of-season sports.",
                            default="true",
                            example="true",
                        ),
                    ],
                    "security": security,
                    "responses": _responses("Sports catalog."),
                }
            },
            "/api/odds": {
                "get": {
                    "operationId": "getOdds",
                    "summary": "Get current odds for a sport",
                    "parameters": [
                        _query_param(
                            "sport",
                            "Sport key, or `upcoming` for the next games across all sports.",
                            default="upcoming",
                            example="basketball_nba",
                        ),
                        _query_param(
                            "region",
                            "Bookmaker region(s), comma separated.",
                            default="us",
                            example="us,uk",
                        ),
                        _query_param(
                            "markets",
                            "Markets, comma separated.",
                            default="h2h",
                            example="h2h,spreads,totals",
                        ),
                        _query_param(
                            "bookmakers",
                            "Bookmaker keys, comma separated. Omitted when empty.",
                            example="draftkings,fanduel",
                        ),
                        _query_param(
                            "dateFormat",
                            "Timestamp format, `iso` or `unix`.",
                            default="iso",
                            example="iso",
                        ),
                    ],
                    "security": security,
                    "responses": _responses(
                        "Odds listing with the requested sport, region and markets echoed."
                    ),
                }
            },
        },
        "components": {
            "schemas": {"Envelope": _envelope_schema()},
            "securitySchemes": {
                "ApiKeyHeader": {"type": "apiKey", "in": "header", "name": API_KEY_HEADER},
                "BearerAuth": {"type": "http", "scheme": "bearer"},
                "ApiKeyQuery": {"type": "apiKey", "in": "query", "name": API_KEY_QUERY},
            },
        },
    }
    if settings.PUBLIC_BASE_URL:
        document["servers"] = [{"url": settings.PUBLIC_BASE_URL.rstrip("/")}]
    return document
