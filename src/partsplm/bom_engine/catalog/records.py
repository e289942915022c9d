"""
Flat record files: optional `# TITLE:` line, header row, data rows.

Shared by the catalog loader and the structure reader.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, List, Optional, Sequence

TITLE_DIRECTIVE = "# TITLE:"

IDENTIFIER_COLUMNS = ("ipn", "identifier", "part_number", "part number", "pn")
QUANTITY_COLUMNS = ("qty", "quantity")
REF_COLUMNS = ("ref", "reference", "designator", "ref_des")
DESCRIPTION_COLUMNS = ("description", "desc")


class RecordFileError(Exception):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


@dataclass(frozen=True)
class RecordFile:
    path: Path
    headers: List[str]
    rows: List[List[str]] = field(default_factory=list)
    title: str = ""


def read_record_file(path: Path) -> RecordFile:
    """
    Parse a comma-delimited record file.

    Quoting is lenient: a quote inside an unquoted field is kept as a literal
    character and blank lines are ignored. Raises RecordFileError when the
    file cannot be read or has no header row.
    """
    try:
        content = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise RecordFileError(path, str(exc)) from exc

    title = ""
    first_line, _, remainder = content.partition("\n")
    if first_line.startswith(TITLE_DIRECTIVE):
        title = first_line[len(TITLE_DIRECTIVE):].strip()
        content = remainder

    try:
        records = [
            row
            for row in csv.reader(io.StringIO(content), skipinitialspace=True)
            if any(cell.strip() for cell in row)
        ]
    except csv.Error as exc:
        raise RecordFileError(path, str(exc)) from exc

    if not records:
        raise RecordFileError(path, "missing header row")

    headers = [h.strip() for h in records[0]]
    return RecordFile(path=Path(path), headers=headers, rows=records[1:], title=title)


def find_column(headers: Sequence[str], names: Sequence[str]) -> Optional[int]:
    wanted = {n.lower() for n in names}
    for idx, header in enumerate(headers):
        if header.strip().lower() in wanted:
            return idx
    return None


def cell(row: Sequence[str], idx: Optional[int]) -> str:
    if idx is None or idx >= len(row):
        return ""
    return row[idx].strip()


def parse_quantity(raw: Optional[str]) -> Optional[Decimal]:
    """
    Blank or unparseable quantities mean one unit.

    Returns None for negative values; callers treat those rows as malformed.
    """
    text = (raw or "").strip()
    if not text:
        return Decimal(1)
    try:
        value = Decimal(text)
    except InvalidOperation:
        return Decimal(1)
    if not value.is_finite():
        return Decimal(1)
    if value < 0:
        return None
    return value


def description_of(fields: Optional[Dict[str, str]]) -> str:
    if not fields:
        return ""
    for key, value in fields.items():
        if key.strip().lower() in DESCRIPTION_COLUMNS:
            return (value or "").strip()
    return ""
