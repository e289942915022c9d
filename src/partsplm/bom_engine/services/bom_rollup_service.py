from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from sqlalchemy.orm import Session

from partsplm.bom_engine.catalog import (
    CatalogLoader,
    RecordFileError,
    ResolutionReport,
    StructureLocator,
    is_assembly,
    read_structure,
)
from partsplm.bom_engine.schemas.bom import CostResult
from partsplm.bom_engine.services.pricing_service import PricingService
from partsplm.config import Settings, get_settings
from partsplm.exceptions import PartNotFoundError

logger = logging.getLogger(__name__)


class BOMRollupService:
    """Compute cost rollups for assemblies (structure files x purchase prices)."""

    def __init__(
        self,
        session: Session,
        parts_dir: Optional[Union[str, Path]] = None,
        *,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.session = session
        self.pricing = PricingService(session)
        self.parts_dir = Path(parts_dir or settings.PARTS_DIR)
        self.max_depth = settings.BOM_MAX_DEPTH
        self.prefixes = settings.assembly_prefixes()
        self.loader = CatalogLoader(self.parts_dir, extension=settings.STRUCTURE_FILE_EXT)
        self.locator = StructureLocator(self.parts_dir, extension=settings.STRUCTURE_FILE_EXT)

    def get_cost(self, ipn: str, max_depth: Optional[int] = None) -> CostResult:
        catalog = self.loader.load_catalog()
        quote = self.pricing.latest_price(ipn)
        assembly = is_assembly(ipn, self.prefixes)

        if (
            quote is None
            and catalog.get(ipn) is None
            and self.locator.find_structure_file(ipn) is None
        ):
            raise PartNotFoundError(ipn)

        result = CostResult(ipn=ipn)
        if quote is not None:
            result.last_unit_price = float(quote.unit_price)
            result.po_id = quote.po_id
            result.last_ordered = quote.ordered_at

        if assembly:
            report = ResolutionReport()
            result.bom_cost = self.rollup_cost(ipn, 0, max_depth, report=report)
            result.missing_prices = list(report.missing_prices)
            result.truncated = report.truncated
            result.issues = list(report.issues)
            result.is_partial = report.is_partial

        return result

    def rollup_cost(
        self,
        ipn: str,
        depth: int = 0,
        max_depth: Optional[int] = None,
        *,
        report: Optional[ResolutionReport] = None,
    ) -> float:
        if max_depth is None:
            max_depth = self.max_depth
        return float(self._rollup(ipn, depth, max_depth, report))

    def _rollup(
        self,
        ipn: str,
        depth: int,
        max_depth: int,
        report: Optional[ResolutionReport],
    ) -> Decimal:
        if depth > max_depth:
            if report is not None:
                report.truncated = True
            return Decimal(0)

        structure_path = self.locator.find_structure_file(ipn)
        if structure_path is None:
            return Decimal(0)

        try:
            lines = read_structure(structure_path, report)
        except RecordFileError as exc:
            logger.warning("Unreadable structure file %s: %s", structure_path, exc.reason)
            if report is not None:
                report.add_issue(f"{structure_path.name}: {exc.reason}")
            return Decimal(0)

        total = Decimal(0)
        for line in lines:
            if is_assembly(line.child, self.prefixes):
                total += line.quantity * self._rollup(line.child, depth + 1, max_depth, report)
                continue

            price = self.pricing.unit_price(line.child)
            if price is None:
                if report is not None:
                    report.add_missing_price(line.child)
                continue
            total += line.quantity * price
        return total
