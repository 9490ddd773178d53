from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int) -> int:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_bool(*keys: str, default: bool) -> bool:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return v.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_level: str
    host: str
    port: int
    order_date: str | None
    seed_catalog: bool


def load_settings() -> Settings:
    return Settings(
        log_level=_get_env("LOG_LEVEL", default="INFO") or "INFO",
        host=_get_env("RETAIL_HOST", default="127.0.0.1") or "127.0.0.1",
        port=_get_int("RETAIL_PORT", default=8000),
        order_date=_get_env("RETAIL_ORDER_DATE", default=None),
        seed_catalog=_get_bool("RETAIL_SEED_CATALOG", default=True),
    )


settings = load_settings()
