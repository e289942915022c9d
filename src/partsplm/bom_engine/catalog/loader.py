from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from partsplm.bom_engine.catalog.naming import DEFAULT_ASSEMBLY_PREFIXES, is_assembly
from partsplm.bom_engine.catalog.records import (
    IDENTIFIER_COLUMNS,
    RecordFile,
    RecordFileError,
    cell,
    description_of,
    find_column,
    read_record_file,
)
from partsplm.exceptions import CatalogUnavailableError

logger = logging.getLogger(__name__)

CATEGORY_FIELD = "_category"


@dataclass(frozen=True)
class PartRecord:
    identifier: str
    fields: Dict[str, str]
    category: str
    source: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {"ipn": self.identifier, "category": self.category, "fields": dict(self.fields)}


@dataclass
class Catalog:
    """One read of the catalog directory."""

    categories: Dict[str, List[PartRecord]] = field(default_factory=dict)
    schemas: Dict[str, List[str]] = field(default_factory=dict)
    titles: Dict[str, str] = field(default_factory=dict)
    _index: Optional[Dict[str, PartRecord]] = field(default=None, init=False, repr=False)
    _descriptions: Dict[Tuple[str, ...], Dict[str, str]] = field(
        default_factory=dict, init=False, repr=False
    )

    def all_parts(self) -> List[PartRecord]:
        parts: List[PartRecord] = []
        for name in sorted(self.categories):
            parts.extend(self.categories[name])
        return parts

    def index(self) -> Dict[str, PartRecord]:
        # first occurrence wins
        if self._index is None:
            index: Dict[str, PartRecord] = {}
            for part in self.all_parts():
                index.setdefault(part.identifier, part)
            self._index = index
        return self._index

    def get(self, identifier: str) -> Optional[PartRecord]:
        return self.index().get(identifier)

    def describe(
        self,
        identifier: str,
        prefixes: Sequence[str] = DEFAULT_ASSEMBLY_PREFIXES,
    ) -> str:
        """
        Catalog description of `identifier`.

        Structure files share the record format and are loaded as catalog
        records too, so their rows can precede the real part record in the
        index. Rows read from a file named after an assembly are only used
        when no other file describes the part.
        """
        key = tuple(prefixes)
        if key not in self._descriptions:
            primary: Dict[str, str] = {}
            fallback: Dict[str, str] = {}
            for part in self.all_parts():
                text = description_of(part.fields)
                if not text:
                    continue
                target = fallback if is_assembly(part.source, key) else primary
                target.setdefault(part.identifier, text)
            self._descriptions[key] = {**fallback, **primary}
        return self._descriptions[key].get(identifier, "")

    def __len__(self) -> int:
        return sum(len(parts) for parts in self.categories.values())


class CatalogLoader:
    """
    Reads the parts catalog from disk.

    Layout:
    - each sub-directory of the root is a category made of its record files
    - each record file directly under the root is its own category

    Nothing is cached; every load re-reads the filesystem so edits made
    directly to the files are visible on the next request.
    """

    def __init__(self, parts_dir: Union[str, Path], *, extension: str = ".csv"):
        self.parts_dir = Path(parts_dir)
        self.extension = extension

    def load_catalog(self) -> Catalog:
        catalog = Catalog()
        try:
            entries = sorted(self.parts_dir.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise CatalogUnavailableError(
                str(self.parts_dir), reason=str(exc), catalog=catalog
            ) from exc

        for entry in entries:
            if entry.is_dir():
                category = entry.name.lower()
                for record_path in sorted(entry.glob(f"*{self.extension}")):
                    if record_path.is_file():
                        self._merge_file(catalog, record_path, category)
            elif entry.is_file() and entry.name.endswith(self.extension):
                category = entry.name[: -len(self.extension)].lower()
                self._merge_file(catalog, entry, category)

        return catalog

    def _merge_file(self, catalog: Catalog, path: Path, category: str) -> None:
        try:
            record_file = read_record_file(path)
        except RecordFileError as exc:
            logger.warning("Skipping unreadable record file %s: %s", path, exc.reason)
            return

        parts = read_part_records(record_file, category)
        catalog.categories.setdefault(category, []).extend(parts)
        if len(record_file.headers) > len(catalog.schemas.get(category, [])):
            catalog.schemas[category] = list(record_file.headers)
        if record_file.title:
            catalog.titles[category] = record_file.title


def read_part_records(record_file: RecordFile, category: str) -> List[PartRecord]:
    headers = record_file.headers
    id_idx = find_column(headers, IDENTIFIER_COLUMNS)
    if id_idx is None:
        id_idx = 0

    parts: List[PartRecord] = []
    for row in record_file.rows:
        identifier = cell(row, id_idx)
        if not identifier:
            continue
        fields = {h: row[i] for i, h in enumerate(headers) if i < len(row)}
        fields[CATEGORY_FIELD] = category
        parts.append(
            PartRecord(
                identifier=identifier,
                fields=fields,
                category=category,
                source=record_file.path.stem,
            )
        )
    return parts
