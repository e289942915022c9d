from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import List, Optional

from partsplm.bom_engine.catalog.records import (
    DESCRIPTION_COLUMNS,
    IDENTIFIER_COLUMNS,
    QUANTITY_COLUMNS,
    REF_COLUMNS,
    cell,
    find_column,
    parse_quantity,
    read_record_file,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructureLine:
    child: str
    quantity: Decimal = Decimal(1)
    ref: str = ""
    description: str = ""


@dataclass
class ResolutionReport:
    """Partial-data findings collected while walking one request's structure."""

    issues: List[str] = field(default_factory=list)
    missing_prices: List[str] = field(default_factory=list)
    truncated: bool = False

    def add_issue(self, message: str) -> None:
        self.issues.append(message)

    def add_missing_price(self, identifier: str) -> None:
        if identifier not in self.missing_prices:
            self.missing_prices.append(identifier)

    @property
    def is_partial(self) -> bool:
        return bool(self.issues or self.missing_prices or self.truncated)


def read_structure(path: Path, report: Optional[ResolutionReport] = None) -> List[StructureLine]:
    """
    Parse a structure file into its ordered component lines.

    Rows without a child identifier are skipped. Rows with a negative
    quantity are rejected and recorded on `report`. Raises RecordFileError
    when the file itself is unreadable.
    """
    record_file = read_record_file(path)
    headers = record_file.headers

    child_idx = find_column(headers, IDENTIFIER_COLUMNS)
    if child_idx is None:
        child_idx = 0
    qty_idx = find_column(headers, QUANTITY_COLUMNS)
    ref_idx = find_column(headers, REF_COLUMNS)
    desc_idx = find_column(headers, DESCRIPTION_COLUMNS)

    lines: List[StructureLine] = []
    for row_number, row in enumerate(record_file.rows, start=1):
        child = cell(row, child_idx)
        if not child:
            continue
        raw_qty = cell(row, qty_idx)
        quantity = parse_quantity(raw_qty)
        if quantity is None:
            message = f"{Path(path).name} row {row_number}: negative quantity {raw_qty!r} for {child} rejected"
            logger.warning(message)
            if report is not None:
                report.add_issue(message)
            continue
        lines.append(
            StructureLine(
                child=child,
                quantity=quantity,
                ref=cell(row, ref_idx),
                description=cell(row, desc_idx),
            )
        )
    return lines
