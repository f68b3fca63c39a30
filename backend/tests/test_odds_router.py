"""
backend/tests/test_odds_router.py

Purpose:
    Contract tests for /api/sports and /api/odds: defaults, forced odds
    format, upstream error passthrough and the envelope on every outcome.
"""

from __future__ import annotations

import json
import logging

import httpx

from odds_gpt.main import create_app


FIVE_SPORTS = [{"key": f"sport_{i}", "active": True} for i in range(5)]


def test_odds_defaults_and_forced_format(build_client, upstream):
    client = build_client()
    response = client.get("/api/odds")

    assert response.status_code == 200
    sent = upstream.last
    assert sent.method == "GET"
    assert sent.url.path == "/v4/sports/upcoming/odds"
    assert dict(sent.url.params) == {
        "apiKey": "upstream-key",
        "regions": "us",
        "markets": "h2h",
        "oddsFormat": "american",
        "dateFormat": "iso",
    }


def test_odds_format_cannot_be_overridden(build_client, upstream):
    client = build_client()
    client.get("/api/odds", params={"oddsFormat": "decimal"})
    assert upstream.last.url.params["oddsFormat"] == "american"


def test_odds_passes_through_caller_parameters(build_client, upstream):
    client = build_client()
    client.get(
        "/api/odds",
        params={
            "sport": "basketball_nba",
            "region": "uk",
            "markets": "h2h,spreads",
            "bookmakers": "draftkings,fanduel",
            "dateFormat": "unix",
        },
    )
    sent = upstream.last
    assert sent.url.path == "/v4/sports/basketball_nba/odds"
    assert sent.url.params["regions"] == "uk"
    assert sent.url.params["markets"] == "h2h,spreads"
    assert sent.url.params["bookmakers"] == "draftkings,fanduel"
    assert sent.url.params["dateFormat"] == "unix"


def test_odds_repeated_parameter_uses_first_value(build_client, upstream):
    client = build_client()
    client.get("/api/odds?sport=soccer_epl&sport=basketball_nba&bookmakers=")
    assert upstream.last.url.path == "/v4/sports/soccer_epl/odds"
    assert "bookmakers" not in upstream.last.url.params


def test_odds_success_echoes_inputs(build_client, upstream):
    upstream.body = json.dumps(FIVE_SPORTS)
    client = build_client()
    response = client.get("/api/odds", params={"sport": "soccer_epl", "markets": "totals"})

    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "data": FIVE_SPORTS,
        "count": 5,
        "sport": "soccer_epl",
        "region": "us",
        "markets": "totals",
    }


def test_odds_rejects_unsafe_sport_key(build_client, upstream):
    client = build_client()
    response = client.get("/api/odds", params={"sport": "../scores"})
    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "Invalid sport key"}
    assert upstream.requests == []


def test_sports_defaults_all_true(build_client, upstream):
    client = build_client()
    client.get("/api/sports")
    assert upstream.last.url.path == "/v4/sports"
    assert dict(upstream.last.url.params) == {"apiKey": "upstream-key", "all": "true"}


def test_sports_success_counts_list(build_client, upstream):
    upstream.body = json.dumps(FIVE_SPORTS)
    client = build_client()
    response = client.get("/api/sports", params={"all": "false"})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "count": 5, "data": FIVE_SPORTS}
    assert upstream.last.url.params["all"] == "false"


def test_sports_object_payload_has_no_count(build_client, upstream):
    upstream.body = '{"message": "hello"}'
    client = build_client()
    response = client.get("/api/sports")
    assert response.json() == {"ok": True, "data": {"message": "hello"}}


def test_upstream_status_is_propagated(build_client, upstream):
    upstream.status_code = 403
    upstream.body = "bad key"
    client = build_client()

    for path in ("/api/sports", "/api/odds"):
        response = client.get(path)
        assert response.status_code == 403
        assert response.json() == {"ok": False, "status": 403, "error": "bad key"}


def test_upstream_invalid_json_is_bad_gateway(build_client, upstream):
    upstream.body = "not-json"
    client = build_client()

    for path in ("/api/sports", "/api/odds"):
        response = client.get(path)
        assert response.status_code == 502
        assert response.json() == {
            "ok": False,
            "error": "Invalid JSON from provider",
            "raw": "not-json",
        }


def test_missing_upstream_key_skips_outbound_call(build_client, upstream):
    client = build_client(ODDS_API_KEY="")
    response = client.get("/api/sports")
    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Missing ODDS_API_KEY"}
    assert upstream.requests == []


def test_usage_headers_are_relayed(build_client, upstream):
    upstream.headers = {"x-requests-remaining": "480", "x-requests-used": "20"}
    client = build_client()
    response = client.get("/api/sports")
    assert response.headers["x-requests-remaining"] == "480"
    assert response.headers["x-requests-used"] == "20"
    assert "x-request-id" in response.headers


def test_network_failure_returns_generic_envelope(settings_factory):
    from fastapi.testclient import TestClient

    from odds_gpt.providers.http_client import UpstreamClient
    from odds_gpt.providers.odds_api import TheOddsAPIForwarder

    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    cfg = settings_factory()
    forwarder = TheOddsAPIForwarder(
        cfg, client=UpstreamClient("odds_api", transport=httpx.MockTransport(_refuse))
    )
    client = TestClient(create_app(cfg, forwarder=forwarder))

    response = client.get("/api/odds")
    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Internal server error"}


def test_unknown_route_keeps_envelope(build_client):
    client = build_client()
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json()["ok"] is False


def test_unknown_route_is_not_method_not_allowed(build_client):
    client = build_client()
    response = client.get("/api/nope")
    assert response.status_code != 405
    assert response.json() == {"ok": False, "error": "Not Found"}


def test_upstream_nan_body_is_bad_gateway(build_client, upstream):
    upstream.body = "NaN"
    client = build_client()

    for path in ("/api/sports", "/api/odds"):
        response = client.get(path)
        assert response.status_code == 502
        assert response.json() == {
            "ok": False,
            "error": "Invalid JSON from provider",
            "raw": "NaN",
        }


def test_upstream_error_with_empty_body_still_has_error_text(build_client, upstream):
    upstream.status_code = 429
    upstream.body = ""
    client = build_client()

    response = client.get("/api/sports")
    assert response.status_code == 429
    assert response.json() == {"ok": False, "status": 429, "error": "Upstream error 429"}


def test_route_failure_log_carries_request_id(settings_factory, caplog):
    from fastapi.testclient import TestClient

    from odds_gpt.providers.http_client import UpstreamClient
    from odds_gpt.providers.odds_api import TheOddsAPIForwarder

    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    cfg = settings_factory()
    forwarder = TheOddsAPIForwarder(
        cfg, client=UpstreamClient("odds_api", transport=httpx.MockTransport(_refuse))
    )
    client = TestClient(create_app(cfg, forwarder=forwarder))

    with caplog.at_level(logging.ERROR, logger="odds_gpt.odds"):
        response = client.get("/api/sports", headers={"X-Request-ID": "trace-42"})

    assert response.status_code == 500
    assert response.headers["x-request-id"] == "trace-42"
    failures = [r for r in caplog.records if r.name == "odds_gpt.odds"]
    assert failures and "trace-42" in failures[0].getMessage()
