from __future__ import annotations
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


DEFAULT_API_BASE_URL = "http://localhost:3001"
DEFAULT_API_TIMEOUT = 10.0


@dataclass
class AppConfig:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: str = ""
    api_timeout: float = DEFAULT_API_TIMEOUT
    organization_id: Optional[int] = None


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def _read_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    # Charge .env si présent
    load_dotenv()

    base_url = os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL).strip() or DEFAULT_API_BASE_URL

    return AppConfig(
        api_base_url=base_url.rstrip("/"),
        api_token=os.getenv("API_TOKEN", "").strip(),
        api_timeout=_read_float("API_TIMEOUT", DEFAULT_API_TIMEOUT),
        organization_id=_read_int("ORGANIZATION_ID"),
    )
