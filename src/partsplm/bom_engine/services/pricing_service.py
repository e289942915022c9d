from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from partsplm.bom_engine.models.purchasing import POLine, PurchaseOrder
from partsplm.exceptions import PricingStoreError


@dataclass(frozen=True)
class PriceQuote:
    ipn: str
    unit_price: Decimal
    po_id: str
    ordered_at: Optional[datetime]


class PricingService:
    """Latest purchase price per identifier, read from purchase order lines."""

    def __init__(self, session: Session):
        self.session = session

    def latest_price(self, ipn: str) -> Optional[PriceQuote]:
        try:
            row = (
                self.session.query(POLine.unit_price, POLine.po_id, PurchaseOrder.created_at)
                .join(PurchaseOrder, PurchaseOrder.id == POLine.po_id)
                .filter(POLine.ipn == ipn, POLine.unit_price > 0)
                .order_by(PurchaseOrder.created_at.desc(), POLine.id.desc())
                .first()
            )
        except SQLAlchemyError as exc:
            raise PricingStoreError(str(getattr(exc, "orig", None) or exc)) from exc
        if row is None:
            return None
        unit_price, po_id, created_at = row
        return PriceQuote(
            ipn=ipn,
            unit_price=Decimal(str(unit_price)),
            po_id=po_id,
            ordered_at=created_at,
        )

    def unit_price(self, ipn: str) -> Optional[Decimal]:
        quote = self.latest_price(ipn)
        return quote.unit_price if quote else None
