"""
Runtime configuration from environment variables.

  OPENAI_API_KEY            required for the live oracle
  OPENAI_MODEL              chat model (default gpt-4o)
  BUILDLAB_DATA_BASE_URL    prefix for the four reference datasets
  BUILDLAB_BUILDS_URL       list of existing builds (build finder)
  BUILDLAB_HTTP_TIMEOUT     seconds per dataset GET (default 30)
  BUILDLAB_OPENAI_TIMEOUT   seconds per oracle call (default 60)
"""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MODEL = "gpt-4o"
DEFAULT_DATA_BASE_URL = "https://www.nba2klab.com/_next/data/K36eXiGRM86lm6X-5b3mg/en"
DEFAULT_BUILDS_URL = "https://www.nba2klab.com/.netlify/functions/builds"


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    openai_api_key: str = ""
    openai_model: str = DEFAULT_MODEL
    data_base_url: str = DEFAULT_DATA_BASE_URL
    builds_url: str = DEFAULT_BUILDS_URL
    http_timeout: float = 30.0
    openai_timeout: float = 60.0


def get_settings() -> Settings:
    """Read settings from the environment. Called per request so tests can monkeypatch env."""
    return Settings(
        openai_api_key=os.environ.get("OPENAI_API_KEY", "").strip(),
        openai_model=os.environ.get("OPENAI_MODEL", "").strip() or DEFAULT_MODEL,
        data_base_url=(os.environ.get("BUILDLAB_DATA_BASE_URL", "").strip() or DEFAULT_DATA_BASE_URL).rstrip("/"),
        builds_url=os.environ.get("BUILDLAB_BUILDS_URL", "").strip() or DEFAULT_BUILDS_URL,
        http_timeout=_float_env("BUILDLAB_HTTP_TIMEOUT", 30.0),
        openai_timeout=_float_env("BUILDLAB_OPENAI_TIMEOUT", 60.0),
    )
