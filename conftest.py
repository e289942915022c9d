from __future__ import annotations

import os

import pytest

# Settings and the module-level engine are created at import time; point them
# at throwaway locations before any test module imports the package.
os.environ.setdefault("PARTSPLM_ENVIRONMENT", "test")
os.environ.setdefault("PARTSPLM_DATABASE_URL", "sqlite:///:memory:")


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "catalog: tests that build a parts catalog on disk under tmp_path",
    )
