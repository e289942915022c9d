from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class StructureLocator:
    """
    Finds the structure file listing an identifier's direct components.

    Checks `<root>/<ipn><ext>` and then the same name inside each immediate
    sub-directory (sorted by name). Deeper levels are never searched.
    """

    def __init__(self, parts_dir: Union[str, Path], *, extension: str = ".csv"):
        self.parts_dir = Path(parts_dir)
        self.extension = extension

    def find_structure_file(self, identifier: str) -> Optional[Path]:
        if not _is_plain_name(identifier):
            return None

        filename = f"{identifier}{self.extension}"
        candidate = self.parts_dir / filename
        if candidate.is_file():
            return candidate

        try:
            subdirs = sorted(
                (p for p in self.parts_dir.iterdir() if p.is_dir()), key=lambda p: p.name
            )
        except OSError:
            return None

        for subdir in subdirs:
            candidate = subdir / filename
            if candidate.is_file():
                return candidate
        return None


def _is_plain_name(identifier: str) -> bool:
    if not identifier or identifier in {".", ".."}:
        return False
    return "/" not in identifier and "\\" not in identifier and "\x00" not in identifier
