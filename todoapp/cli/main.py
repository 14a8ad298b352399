#!/usr/bin/env python3
"""Main CLI module

Installed as the `todoapp` command.  It can prepare the database, run the
API server, and write out the effective config file.

"""
from typing import Optional
from pathlib import Path
from todoapp.config import config
from todoapp.errors import TodoAppException
from todoapp.sqla_adapter import SQLAAdapter
from sqlalchemy.exc import SQLAlchemyError
import todoapp.logging
import typer
import uvicorn

app = typer.Typer()

DRIVER_EXTRAS = dict(psycopg2="postgres", MySQLdb="mysql")
"""Map DBAPI driver modules onto the package extras which install them"""


@app.command()
def init_db():
    """Create the todo and label tables in the configured database

    Existing tables are left alone, so this is safe to run against a
    database which is already set up.

    """
    try:
        SQLAAdapter().initialize_tables()
    except ImportError as e:
        extra = DRIVER_EXTRAS.get(e.name)
        hint = f"; install todoapp[{extra}]" if extra else ""
        typer.echo(
            f"Unable to initialize database: the database driver "
            f"{e.name or e} is not installed{hint}",
            err=True,
        )
        raise typer.Exit(code=1)
    except (TodoAppException, SQLAlchemyError) as e:
        typer.echo(f"Unable to initialize database: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo("Database tables are in place.")


@app.command()
def serve(
    host: Optional[str] = typer.Option(
        None, help="address to listen on; overrides listen_address"
    ),
    port: Optional[int] = typer.Option(
        None, help="port to listen on; overrides listen_port"
    ),
):
    """Run the REST API under uvicorn"""
    todoapp.logging.configure_logging(
        config.todoapp.log_level, config.todoapp.syslog
    )
    uvicorn.run(
        "todoapp.rest.api:default_app",
        factory=True,
        host=host or str(config.todoapp.listen_address),
        port=port or int(config.todoapp.listen_port),
        log_level=str(config.todoapp.log_level).lower(),
    )


@app.command()
def write_config(
    location: Optional[Path] = typer.Argument(
        None, help="where to write; defaults to the file in use"
    )
):
    """Write the effective configuration to disk"""
    try:
        written = config.write(location)
    except OSError as e:
        typer.echo(f"Unable to write config: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Config written to {written}")


if __name__ == "__main__":
    app()
