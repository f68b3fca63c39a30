from fastapi import APIRouter, Request

from odds_gpt.config import SERVICE_NAME
from odds_gpt.models.envelope import Envelope
from odds_gpt.services.openapi_service import build_openapi_document

router = APIRouter(tags=["meta"])


@router.get("/health")
async def health():
    return Envelope(ok=True, service=SERVICE_NAME).to_json()


@router.get("/openapi.json", include_in_schema=False)
async def openapi_document(request: Request):
    """API description; never gated so callers can discover it before holding a key."""
    return build_openapi_document(request.app.state.settings)
