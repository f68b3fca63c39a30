"""
backend/odds_gpt/config.py

Purpose:
    Central settings loading for the proxy. Read once at startup and passed
    explicitly into the app factory, the auth gate and the forwarder.

Dependencies:
    - pydantic-settings
    - pathlib
"""

from pathlib import Path

from pydantic_settings import BaseSettings

# Prefer backend/.env, fallback to project-root .env.
_BACKEND_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
_ROOT_ENV_FILE = Path(__file__).resolve().parent.parent.parent / ".env"

SERVICE_NAME = "odds-gpt-backend"


class Settings(BaseSettings):
    # Process
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"
    CORS_ORIGIN: str = "*"

    # Upstream provider (empty key -> every proxy call fails with a config error)
    ODDS_API_KEY: str = ""
    ODDS_API_BASE_URL: str = "https://api.the-odds-api.com/v4"
    UPSTREAM_TIMEOUT_SECONDS: float = 15.0

    # Shared secret for local callers; empty disables the gate (open mode)
    BACKEND_API_KEY: str = ""

    # Advertised in /openapi.json when set
    PUBLIC_BASE_URL: str = ""

    model_config = {
        "env_file": (str(_BACKEND_ENV_FILE), str(_ROOT_ENV_FILE)),
        "extra": "ignore",
        "frozen": True,
    }

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGIN.split(",") if o.strip()]

    @property
    def auth_enabled(self) -> bool:
        return bool(self.BACKEND_API_KEY)


settings = Settings()
