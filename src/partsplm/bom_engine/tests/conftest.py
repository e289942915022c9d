from __future__ import annotations

import csv
import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional, Sequence

import pytest
from sqlalchemy.orm import sessionmaker

from partsplm.bom_engine.models.purchasing import POLine, PurchaseOrder
from partsplm.config import Settings
from partsplm.database import create_db_engine, init_db


@pytest.fixture
def parts_dir(tmp_path: Path) -> Path:
    root = tmp_path / "parts"
    root.mkdir()
    return root


@pytest.fixture
def settings(parts_dir: Path) -> Settings:
    return Settings(PARTS_DIR=str(parts_dir), DATABASE_URL="sqlite:///:memory:")


@pytest.fixture
def write_csv():
    def _write(
        directory: Path,
        name: str,
        rows: Iterable[Sequence[str]],
        *,
        title: Optional[str] = None,
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{name}.csv"
        with path.open("w", encoding="utf-8", newline="") as fh:
            if title:
                fh.write(f"# TITLE: {title}\n")
            csv.writer(fh).writerows(rows)
        return path

    return _write


@pytest.fixture
def db_session():
    engine = create_db_engine("sqlite:///:memory:")
    init_db(create_tables=True, bind_engine=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    session = factory()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def add_price(db_session):
    base = datetime(2024, 1, 1, 12, 0, 0)
    counter = {"n": 0}

    def _add(
        ipn: str,
        unit_price: float,
        *,
        po_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> str:
        counter["n"] += 1
        po_id = po_id or f"PO-{uuid.uuid4().hex[:8]}"
        po = db_session.get(PurchaseOrder, po_id)
        if po is None:
            po = PurchaseOrder(
                id=po_id,
                supplier="Test Supplier",
                created_at=created_at or base + timedelta(minutes=counter["n"]),
            )
            db_session.add(po)
            db_session.flush()
        db_session.add(
            POLine(po_id=po_id, line_num=counter["n"], ipn=ipn, qty=1, unit_price=unit_price)
        )
        db_session.commit()
        return po_id

    return _add
