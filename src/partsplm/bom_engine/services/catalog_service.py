from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from partsplm.bom_engine.catalog import CatalogLoader, PartRecord
from partsplm.config import Settings, get_settings
from partsplm.exceptions import PartNotFoundError, ValidationError


class CatalogService:
    """Read-only browsing over the parts catalog."""

    def __init__(
        self,
        parts_dir: Optional[Union[str, Path]] = None,
        *,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.parts_dir = Path(parts_dir or settings.PARTS_DIR)
        self.default_limit = settings.PARTS_PAGE_LIMIT
        self.loader = CatalogLoader(self.parts_dir, extension=settings.STRUCTURE_FILE_EXT)

    def list_parts(
        self,
        *,
        category: Optional[str] = None,
        q: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        if page < 1:
            raise ValidationError("page must be >= 1", field="page")
        if limit is not None and limit < 1:
            raise ValidationError("limit must be >= 1", field="limit")
        limit = limit or self.default_limit

        catalog = self.loader.load_catalog()
        if category:
            parts = list(catalog.categories.get(category.lower(), []))
        else:
            parts = catalog.all_parts()

        needle = (q or "").strip().lower()
        if needle:
            parts = [p for p in parts if _matches(p, needle)]

        seen = set()
        deduped: List[PartRecord] = []
        for part in parts:
            if part.identifier in seen:
                continue
            seen.add(part.identifier)
            deduped.append(part)
        deduped.sort(key=lambda p: p.identifier)

        total = len(deduped)
        start = min((page - 1) * limit, total)
        end = min(start + limit, total)
        return {
            "items": [p.to_dict() for p in deduped[start:end]],
            "total": total,
            "page": page,
            "limit": limit,
        }

    def get_part(self, ipn: str) -> PartRecord:
        record = self.loader.load_catalog().get(ipn)
        if record is None:
            raise PartNotFoundError(ipn)
        return record

    def check_identifier(self, ipn: str) -> bool:
        return self.loader.load_catalog().get(ipn) is not None

    def list_categories(self) -> List[Dict[str, Any]]:
        catalog = self.loader.load_catalog()
        result = [
            {
                "id": name,
                "name": catalog.titles.get(name) or name,
                "count": len(parts),
                "columns": list(catalog.schemas.get(name, [])),
            }
            for name, parts in catalog.categories.items()
        ]
        result.sort(key=lambda c: (c["name"], c["id"]))
        return result


def _matches(part: PartRecord, needle: str) -> bool:
    if needle in part.identifier.lower():
        return True
    return any(needle in (value or "").lower() for value in part.fields.values())
