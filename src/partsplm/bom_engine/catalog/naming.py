from __future__ import annotations

from typing import Sequence

DEFAULT_ASSEMBLY_PREFIXES = ("PCA-", "ASY-")


def is_assembly(identifier: str, prefixes: Sequence[str] = DEFAULT_ASSEMBLY_PREFIXES) -> bool:
    """Assemblies are recognised by identifier prefix alone, never by catalog data."""
    upper = (identifier or "").upper()
    return any(upper.startswith(prefix.upper()) for prefix in prefixes if prefix)
