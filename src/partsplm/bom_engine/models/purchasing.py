"""
Purchasing Models
Purchase orders and their lines; the pricing store read by cost rollups.
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text

from partsplm.models.base import Base


class PurchaseOrder(Base):
    __tablename__ = "purchase_orders"
    __table_args__ = {"extend_existing": True}

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    supplier = Column(String(200), nullable=False, default="")
    status = Column(String(32), nullable=False, default="draft")

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class POLine(Base):
    __tablename__ = "po_lines"
    __table_args__ = {"extend_existing": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    po_id = Column(
        String(36),
        ForeignKey("purchase_orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    line_num = Column(Integer, nullable=False, default=1)
    ipn = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=True)
    qty = Column(Float, nullable=False, default=1.0)
    unit_price = Column(Float, nullable=False, default=0.0)
