"""
BOM engine bootstrap helpers.

SQLAlchemy only creates tables for models that have been imported (registered) in the
metadata, so `create_all()` needs an explicit import surface shared by API + CLI.
"""

from __future__ import annotations


def import_all_models() -> None:
    from partsplm.bom_engine.models import purchasing as _purchasing  # noqa: F401
