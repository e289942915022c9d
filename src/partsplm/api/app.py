from __future__ import annotations

import logging

from fastapi import FastAPI

from partsplm import __version__
from partsplm.api.routers.health import router as health_router
from partsplm.bom_engine.web.parts_router import parts_router
from partsplm.config import get_settings
from partsplm.database import init_db


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or "info").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app() -> FastAPI:
    app = FastAPI(title="PartsPLM", version=__version__)
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(parts_router, prefix="/api/v1")

    @app.on_event("startup")
    def _startup() -> None:  # pragma: no cover
        settings = get_settings()
        configure_logging(settings.LOG_LEVEL)
        # Dev convenience: auto-create the purchasing tables.
        if settings.ENVIRONMENT == "dev":
            init_db(create_tables=True)

    return app


app = create_app()
