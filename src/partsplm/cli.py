from __future__ import annotations

import json
from typing import Optional

import typer
import uvicorn

from partsplm import __version__
from partsplm.config import get_settings

app = typer.Typer(add_completion=False, help="PartsPLM CLI")


def _configure_logging() -> None:
    from partsplm.api.app import configure_logging

    configure_logging(get_settings().LOG_LEVEL)


@app.command()
def start(
    host: Optional[str] = typer.Option(None, help="Bind host"),
    port: Optional[int] = typer.Option(None, help="Bind port"),
    reload: bool = typer.Option(False, help="Auto-reload on changes (dev)"),
) -> None:
    settings = get_settings()
    uvicorn.run(
        "partsplm.api.app:app",
        host=host or settings.HOST,
        port=port or settings.PORT,
        reload=reload,
    )


@app.command()
def version() -> None:
    typer.echo(__version__)


@app.command("init-db")
def init_db_command() -> None:
    """Create the purchasing tables (SCHEMA_MODE=create_all)."""
    from partsplm.database import init_db

    init_db(create_tables=True)
    typer.echo("Database initialized.")


@app.command()
def bom(
    ipn: str = typer.Argument(..., help="Assembly identifier"),
    parts_dir: Optional[str] = typer.Option(None, help="Catalog root (defaults to PARTS_DIR)"),
    max_depth: Optional[int] = typer.Option(
        None, min=0, help="Levels expanded below the root (defaults to BOM_MAX_DEPTH)"
    ),
) -> None:
    """Print the resolved BOM tree of an assembly as JSON."""
    from partsplm.bom_engine.services.bom_service import BOMService
    from partsplm.exceptions import PLMException

    _configure_logging()
    service = BOMService(parts_dir)
    try:
        node = service.get_bom(ipn, max_depth=max_depth)
    except PLMException as exc:
        typer.echo(json.dumps(exc.to_dict(), indent=2), err=True)
        raise typer.Exit(code=1)
    typer.echo(node.model_dump_json(indent=2, exclude_none=True))


@app.command()
def cost(
    ipn: str = typer.Argument(..., help="Part identifier"),
    parts_dir: Optional[str] = typer.Option(None, help="Catalog root (defaults to PARTS_DIR)"),
    max_depth: Optional[int] = typer.Option(
        None, min=0, help="Levels rolled up below the root (defaults to BOM_MAX_DEPTH)"
    ),
) -> None:
    """Print the last unit price and, for assemblies, the rolled-up BOM cost."""
    from partsplm.bom_engine.services.bom_rollup_service import BOMRollupService
    from partsplm.database import get_db_session
    from partsplm.exceptions import PLMException

    _configure_logging()
    with get_db_session() as db:
        service = BOMRollupService(db, parts_dir)
        try:
            result = service.get_cost(ipn, max_depth=max_depth)
        except PLMException as exc:
            typer.echo(json.dumps(exc.to_dict(), indent=2), err=True)
            raise typer.Exit(code=1)
    typer.echo(result.model_dump_json(indent=2, exclude_none=True))


if __name__ == "__main__":  # pragma: no cover
    app()
