import pytest
from sqlalchemy import inspect

from partsplm import database
from partsplm.config import Settings
from partsplm.exceptions import ConfigurationError


@pytest.fixture
def engine():
    engine = database.create_db_engine("sqlite:///:memory:")
    yield engine
    engine.dispose()


def _use_schema_mode(monkeypatch, mode):
    monkeypatch.setattr(
        database,
        "get_settings",
        lambda: Settings(SCHEMA_MODE=mode, DATABASE_URL="sqlite:///:memory:"),
    )


def test_init_db_creates_purchasing_tables(monkeypatch, engine):
    _use_schema_mode(monkeypatch, "create_all")

    database.init_db(create_tables=True, bind_engine=engine)

    assert {"purchase_orders", "po_lines"} <= set(inspect(engine).get_table_names())


def test_init_db_without_create_tables_is_a_noop(monkeypatch, engine):
    _use_schema_mode(monkeypatch, "create_all")

    database.init_db(bind_engine=engine)

    assert inspect(engine).get_table_names() == []


def test_init_db_refuses_empty_database_in_migrations_mode(monkeypatch, engine):
    _use_schema_mode(monkeypatch, "migrations")

    with pytest.raises(ConfigurationError) as excinfo:
        database.init_db(create_tables=True, bind_engine=engine)

    assert excinfo.value.details == {"config_key": "SCHEMA_MODE"}
