from __future__ import annotations

from fastapi import FastAPI

from retail_core.adapters.inbound.web.fastapi_app import create_app
from retail_core.bootstrap import build_service
from retail_core.config import settings
from retail_core.logging import configure_logging


def create_asgi_app() -> FastAPI:
    configure_logging(settings.log_level)
    return create_app(build_service(settings))
