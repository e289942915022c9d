from __future__ import annotations

import os
from pathlib import Path

from fastapi import APIRouter, Depends
from sqlalchemy import text

from partsplm import __version__
from partsplm.config import Settings, get_settings
from partsplm.database import get_db_session

router = APIRouter(tags=["system"])


@router.get("/health")
def health(settings: Settings = Depends(get_settings)) -> dict:
    parts_dir = Path(settings.PARTS_DIR).resolve()
    return {
        "ok": True,
        "service": "partsplm",
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "parts_dir": str(parts_dir),
        "parts_dir_readable": parts_dir.is_dir() and os.access(parts_dir, os.R_OK),
        "bom_max_depth": settings.BOM_MAX_DEPTH,
        "assembly_prefixes": list(settings.assembly_prefixes()),
    }


@router.get("/health/deps")
def health_deps(settings: Settings = Depends(get_settings)) -> dict:
    deps: dict = {}
    overall_ok = True

    try:
        with get_db_session() as db:
            db.execute(text("SELECT 1"))
        deps["db"] = {"ok": True}
    except Exception as exc:
        deps["db"] = {"ok": False, "error": str(exc)}
        overall_ok = False

    parts_dir = Path(settings.PARTS_DIR).resolve()
    readable = parts_dir.is_dir() and os.access(parts_dir, os.R_OK)
    deps["catalog"] = {"ok": readable, "path": str(parts_dir)}
    if not readable:
        overall_ok = False

    return {
        "ok": overall_ok,
        "service": "partsplm",
        "version": __version__,
        "deps": deps,
    }
