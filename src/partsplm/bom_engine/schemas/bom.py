from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

DEPTH_LIMIT_DESCRIPTION = "(max depth reached)"


class BOMNode(BaseModel):
    """One node of a resolved BOM tree."""

    ipn: str
    description: str = ""
    qty: Optional[float] = Field(None, ge=0, description="Quantity as seen from the parent")
    ref: Optional[str] = Field(None, description="Reference designator(s)")
    depth_limited: bool = Field(
        False, description="Not expanded further because the depth bound was reached"
    )
    children: List["BOMNode"] = Field(default_factory=list)
    issues: Optional[List[str]] = Field(
        None, description="Partial-data findings; only set on the root node"
    )


BOMNode.model_rebuild()


class CostResult(BaseModel):
    """Cost answer for one identifier; unit price and BOM cost are never merged."""

    ipn: str
    last_unit_price: Optional[float] = None
    po_id: Optional[str] = None
    last_ordered: Optional[datetime] = None
    bom_cost: Optional[float] = None
    missing_prices: List[str] = Field(default_factory=list)
    truncated: bool = False
    is_partial: bool = False
    issues: List[str] = Field(default_factory=list)


class PartResponse(BaseModel):
    ipn: str
    category: str
    fields: Dict[str, str] = Field(default_factory=dict)


class PartListResponse(BaseModel):
    items: List[PartResponse] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 50


class CategoryResponse(BaseModel):
    id: str
    name: str
    count: int = 0
    columns: List[str] = Field(default_factory=list)


class CheckIPNResponse(BaseModel):
    exists: bool
