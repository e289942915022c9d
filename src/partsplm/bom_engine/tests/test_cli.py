import json
from contextlib import contextmanager

import pytest
from sqlalchemy.orm import sessionmaker
from typer.testing import CliRunner

from partsplm import __version__, database
from partsplm.cli import app

runner = CliRunner()


@pytest.fixture
def use_session(monkeypatch):
    def _use(session):
        @contextmanager
        def _session_scope():
            yield session

        monkeypatch.setattr(database, "get_db_session", _session_scope)

    return _use


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_bom_command_prints_tree(parts_dir, write_csv):
    write_csv(parts_dir, "PCA-CLI", [["IPN", "qty"], ["RES-001", "3"]])

    result = runner.invoke(app, ["bom", "PCA-CLI", "--parts-dir", str(parts_dir)])

    assert result.exit_code == 0
    tree = json.loads(result.stdout)
    assert tree["ipn"] == "PCA-CLI"
    assert tree["children"][0]["qty"] == 3.0


def test_bom_command_max_depth(parts_dir, write_csv):
    write_csv(parts_dir, "PCA-LOOP", [["IPN", "qty"], ["PCA-LOOP", "1"]])

    result = runner.invoke(
        app, ["bom", "PCA-LOOP", "--parts-dir", str(parts_dir), "--max-depth", "0"]
    )

    assert result.exit_code == 0
    child = json.loads(result.stdout)["children"][0]
    assert child["depth_limited"] is True
    assert child["description"] == "(max depth reached)"


def test_bom_command_rejects_negative_max_depth(parts_dir):
    result = runner.invoke(
        app, ["bom", "PCA-LOOP", "--parts-dir", str(parts_dir), "--max-depth", "-1"]
    )

    assert result.exit_code != 0


def test_bom_command_rejects_component(parts_dir):
    result = runner.invoke(app, ["bom", "RES-001", "--parts-dir", str(parts_dir)])

    assert result.exit_code == 1
    assert "NOT_AN_ASSEMBLY" in result.output


def test_cost_command_prints_rollup(parts_dir, write_csv, db_session, add_price, use_session):
    add_price("RES-001", 0.25)
    write_csv(parts_dir, "PCA-CLI", [["IPN", "qty"], ["RES-001", "4"], ["CAP-404", "1"]])
    use_session(db_session)

    result = runner.invoke(app, ["cost", "PCA-CLI", "--parts-dir", str(parts_dir)])

    assert result.exit_code == 0
    body = json.loads(result.stdout)
    assert body["bom_cost"] == pytest.approx(1.0)
    assert body["missing_prices"] == ["CAP-404"]
    assert "last_unit_price" not in body


def test_cost_command_on_uninitialised_database(parts_dir, write_csv, use_session):
    write_csv(parts_dir, "parts", [["IPN", "description"], ["RES-001", "100R"]])
    engine = database.create_db_engine("sqlite:///:memory:")
    session = sessionmaker(bind=engine)()
    use_session(session)

    try:
        result = runner.invoke(app, ["cost", "RES-001", "--parts-dir", str(parts_dir)])
    finally:
        session.close()
        engine.dispose()

    assert result.exit_code == 1
    assert "PRICING_STORE_UNAVAILABLE" in result.output
    assert "Traceback" not in result.output
