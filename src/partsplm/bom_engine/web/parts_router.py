from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from partsplm.bom_engine.schemas.bom import (
    BOMNode,
    CategoryResponse,
    CheckIPNResponse,
    CostResult,
    PartListResponse,
    PartResponse,
)
from partsplm.bom_engine.services.bom_rollup_service import BOMRollupService
from partsplm.bom_engine.services.bom_service import BOMService
from partsplm.bom_engine.services.catalog_service import CatalogService
from partsplm.config import Settings, get_settings
from partsplm.database import get_db
from partsplm.exceptions import PLMException

parts_router = APIRouter(prefix="/parts", tags=["Parts"])


@parts_router.get("", response_model=PartListResponse)
def list_parts(
    category: Optional[str] = Query(None, description="Category id"),
    q: Optional[str] = Query(None, description="Case-insensitive search text"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, description="Page size"),
    settings: Settings = Depends(get_settings),
):
    service = CatalogService(settings=settings)
    try:
        return service.list_parts(category=category, q=q, page=page, limit=limit)
    except PLMException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.to_dict()) from exc


@parts_router.get("/categories", response_model=List[CategoryResponse])
def list_categories(settings: Settings = Depends(get_settings)):
    service = CatalogService(settings=settings)
    try:
        return service.list_categories()
    except PLMException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.to_dict()) from exc


@parts_router.get("/check-ipn", response_model=CheckIPNResponse)
def check_ipn(
    ipn: Optional[str] = Query(None, description="Identifier to look up"),
    settings: Settings = Depends(get_settings),
):
    if not ipn:
        raise HTTPException(status_code=400, detail="ipn query parameter required")
    service = CatalogService(settings=settings)
    try:
        return {"exists": service.check_identifier(ipn)}
    except PLMException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.to_dict()) from exc


@parts_router.get("/{ipn}", response_model=PartResponse)
def get_part(ipn: str, settings: Settings = Depends(get_settings)):
    service = CatalogService(settings=settings)
    try:
        return service.get_part(ipn).to_dict()
    except PLMException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.to_dict()) from exc


@parts_router.get(
    "/{ipn}/bom",
    response_model=BOMNode,
    response_model_exclude_none=True,
)
def get_part_bom(ipn: str, settings: Settings = Depends(get_settings)):
    """
    Resolve the component tree of an assembly.

    Only identifiers carrying an assembly prefix are accepted; others are
    rejected with 400 before the catalog is touched.
    """
    service = BOMService(settings=settings)
    try:
        return service.get_bom(ipn)
    except PLMException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.to_dict()) from exc


@parts_router.get(
    "/{ipn}/cost",
    response_model=CostResult,
    response_model_exclude_none=True,
)
def get_part_cost(
    ipn: str,
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
):
    """
    Last purchase price for any part, plus the rolled-up BOM cost for assemblies.
    """
    service = BOMRollupService(db, settings=settings)
    try:
        return service.get_cost(ipn)
    except PLMException as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.to_dict()) from exc
