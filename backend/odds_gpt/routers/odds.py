"""
backend/odds_gpt/routers/odds.py

Purpose:
    Gated proxy routes for the sports catalog and odds listings, plus their
    preflight responders.

Dependencies:
    - odds_gpt.providers.odds_api
    - odds_gpt.services.auth_service
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from odds_gpt.models.envelope import OddsQuery, failure
from odds_gpt.providers.odds_api import ProxyResult, TheOddsAPIForwarder
from odds_gpt.services.auth_service import require_local_key
from odds_gpt.utils import query_value

logger = logging.getLogger("odds_gpt.odds")
router = APIRouter(prefix="/api", tags=["odds"], dependencies=[Depends(require_local_key)])


def _forwarder(request: Request) -> TheOddsAPIForwarder:
    return request.app.state.forwarder


def _to_response(result: ProxyResult) -> JSONResponse:
    return JSONResponse(
        status_code=result.status_code, content=result.body, headers=result.headers
    )


def _internal_error() -> JSONResponse:
    return JSONResponse(status_code=500, content=failure("Internal server error"))


def odds_query(request: Request) -> OddsQuery:
    return OddsQuery(
        sport=query_value(request, "sport", "upcoming"),
        region=query_value(request, "region", "us"),
        markets=query_value(request, "markets", "h2h"),
        bookmakers=query_value(request, "bookmakers"),
        date_format=query_value(request, "dateFormat", "iso"),
    )


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "-")


@router.get("/sports")
async def list_sports(request: Request):
    try:
        result = await _forwarder(request).list_sports(query_value(request, "all", "true"))
        return _to_response(result)
    except Exception:
        logger.exception("[%s] Sports proxy failed", _request_id(request))
        return _internal_error()


@router.get("/odds")
async def get_odds(request: Request):
    try:
        result = await _forwarder(request).get_odds(odds_query(request))
        return _to_response(result)
    except Exception:
        logger.exception("[%s] Odds proxy failed", _request_id(request))
        return _internal_error()


@router.options("/sports", include_in_schema=False)
@router.options("/odds", include_in_schema=False)
async def preflight():
    return Response(status_code=204)
