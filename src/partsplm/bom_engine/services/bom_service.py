from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from partsplm.bom_engine.catalog import (
    Catalog,
    CatalogLoader,
    RecordFileError,
    ResolutionReport,
    StructureLocator,
    is_assembly,
    read_structure,
)
from partsplm.bom_engine.schemas.bom import DEPTH_LIMIT_DESCRIPTION, BOMNode
from partsplm.config import Settings, get_settings
from partsplm.exceptions import NotAnAssemblyError, PartNotFoundError

logger = logging.getLogger(__name__)


class BOMService:
    """
    Resolves a part identifier into its component tree.

    Cycles are bounded by depth only: every recursive call carries its depth
    and anything past `max_depth` becomes a depth-limited sentinel. Shared
    sub-assemblies on sibling branches are expanded each time they appear.
    """

    def __init__(
        self,
        parts_dir: Optional[Union[str, Path]] = None,
        *,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.parts_dir = Path(parts_dir or settings.PARTS_DIR)
        self.max_depth = settings.BOM_MAX_DEPTH
        self.prefixes = settings.assembly_prefixes()
        self.loader = CatalogLoader(self.parts_dir, extension=settings.STRUCTURE_FILE_EXT)
        self.locator = StructureLocator(self.parts_dir, extension=settings.STRUCTURE_FILE_EXT)

    def get_bom(self, ipn: str, max_depth: Optional[int] = None) -> BOMNode:
        if not is_assembly(ipn, self.prefixes):
            raise NotAnAssemblyError(ipn, self.prefixes)

        catalog = self.loader.load_catalog()
        if catalog.get(ipn) is None and self.locator.find_structure_file(ipn) is None:
            raise PartNotFoundError(ipn)

        report = ResolutionReport()
        root = self.resolve(ipn, 0, max_depth, catalog=catalog, report=report)
        if report.issues:
            root.issues = list(report.issues)
        return root

    def resolve(
        self,
        ipn: str,
        depth: int = 0,
        max_depth: Optional[int] = None,
        *,
        catalog: Optional[Catalog] = None,
        report: Optional[ResolutionReport] = None,
    ) -> BOMNode:
        if max_depth is None:
            max_depth = self.max_depth
        if depth > max_depth:
            logger.debug("BOM depth limit reached at %s (depth %s)", ipn, depth)
            if report is not None:
                report.truncated = True
            return BOMNode(ipn=ipn, description=DEPTH_LIMIT_DESCRIPTION, depth_limited=True)

        if catalog is None:
            catalog = self.loader.load_catalog()

        node = BOMNode(ipn=ipn, description=self._describe(catalog, ipn))

        structure_path = self.locator.find_structure_file(ipn)
        if structure_path is None:
            return node

        try:
            lines = read_structure(structure_path, report)
        except RecordFileError as exc:
            logger.warning("Unreadable structure file %s: %s", structure_path, exc.reason)
            if report is not None:
                report.add_issue(f"{structure_path.name}: {exc.reason}")
            return node

        for line in lines:
            qty = float(line.quantity)
            ref = line.ref or None
            if is_assembly(line.child, self.prefixes):
                child = self.resolve(
                    line.child, depth + 1, max_depth, catalog=catalog, report=report
                )
                child.qty = qty
                child.ref = ref
                if line.description and not child.depth_limited:
                    child.description = line.description
            else:
                child = BOMNode(
                    ipn=line.child,
                    description=line.description or self._describe(catalog, line.child),
                    qty=qty,
                    ref=ref,
                )
            node.children.append(child)

        return node

    def _describe(self, catalog: Catalog, ipn: str) -> str:
        return catalog.describe(ipn, self.prefixes)
