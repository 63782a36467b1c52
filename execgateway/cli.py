# -*- coding: utf-8 -*-
"""execgateway CLI ─ run the gateway as a long-running listener

Copyright 2025
SPDX-License-Identifier: Apache-2.0

This module is exposed as a **console-script** via:

    [project.scripts]
    execgateway = "execgateway.cli:main"

Commands
─────────
* serve: Binds the listening socket once and keeps the pipeline resident
* check-db: Connects to the backing store once and reports the outcome

Typical usage
─────────────
```console
$ execgateway serve --port 8001
$ execgateway check-db
```
"""

# Standard
import asyncio
from typing import Optional

# Third-Party
import typer
from typing_extensions import Annotated
import uvicorn

# First-Party
from execgateway.config import settings
from execgateway.errors import BackingStoreConnectionError
from execgateway.main import create_app
from execgateway.services.connection_manager import ConnectionManager

app = typer.Typer(help="Execution Gateway command line tools.", add_completion=False)


@app.command(help="Serve the gateway as a long-running listener.")
def serve(
    host: Annotated[str, typer.Option("--host", "-h", help="Interface to bind.")] = settings.host,
    port: Annotated[int, typer.Option("--port", "-p", help="Port to bind.")] = settings.port,
    log_level: Annotated[Optional[str], typer.Option("--log-level", "-l", help="Uvicorn log level.")] = None,
):
    gateway = create_app(settings, connect_on_startup=True)
    uvicorn.run(gateway, host=host, port=port, log_level=(log_level or settings.log_level).lower())


@app.command("check-db", help="Connect to the backing store once and report the outcome.")
def check_db(
    database_url: Annotated[Optional[str], typer.Option("--database-url", "-d", help="Overrides DATABASE_URL.")] = None,
):
    manager = ConnectionManager(database_url or settings.database_url)

    async def _probe() -> None:
        try:
            await manager.ensure_ready()
        finally:
            await manager.close()

    try:
        asyncio.run(_probe())
    except BackingStoreConnectionError as exc:
        typer.echo(f"Backing store unreachable: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo("Backing store ready")


def main() -> None:  # noqa: D401 - imperative mood is fine here
    app()


if __name__ == "__main__":  # pragma: no cover - executed only when run directly
    main()
