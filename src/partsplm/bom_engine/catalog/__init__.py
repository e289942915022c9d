from partsplm.bom_engine.catalog.loader import Catalog, CatalogLoader, PartRecord
from partsplm.bom_engine.catalog.locator import StructureLocator
from partsplm.bom_engine.catalog.naming import DEFAULT_ASSEMBLY_PREFIXES, is_assembly
from partsplm.bom_engine.catalog.records import RecordFile, RecordFileError, read_record_file
from partsplm.bom_engine.catalog.structure import (
    ResolutionReport,
    StructureLine,
    read_structure,
)

__all__ = [
    "Catalog",
    "CatalogLoader",
    "PartRecord",
    "StructureLocator",
    "DEFAULT_ASSEMBLY_PREFIXES",
    "is_assembly",
    "RecordFile",
    "RecordFileError",
    "read_record_file",
    "ResolutionReport",
    "StructureLine",
    "read_structure",
]
