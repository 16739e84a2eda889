# SPDX-License-Identifier: MIT
# Copyright (c) 2025 HERA Team
"""HERA tool CLI - serve, call and list the hera.* tools.

Usage:
    ```bash
    # Serve the tools over HTTP (GET /health, GET /tools, POST /tools/{name})
    hera-tools serve --port 8090

    # Call one tool and print its envelope
    hera-tools call hera.select --params '{"table": "core_entities", "limit": 5}'

    # List the registered tools
    hera-tools tools
    ```

Configuration comes from the environment: ``DATABASE_URL`` (required),
``HERA_ORG_ID`` or ``DEFAULT_ORGANIZATION_ID`` (required per call),
``HERA_STATEMENT_TIMEOUT_MS`` and ``HERA_DB_POOL_SIZE``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import signal
import sys
from typing import Any

import click
import uvicorn
from rich.console import Console
from rich.table import Table
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from hera_infra.errors import ProtocolConfigurationError, RuntimeHostError
from hera_infra.handlers import DbHandler, HeraToolDispatcher
from hera_infra.runtime import ModelToolRuntimeConfig

logger = logging.getLogger(__name__)
console = Console()


def create_app(dispatcher: HeraToolDispatcher, db_handler: DbHandler) -> Starlette:
    """Build the HTTP surface around a dispatcher.

    ``POST /tools/{tool_name}`` always answers 200 with the dispatcher
    envelope; failures are signalled by ``error`` / ``exit_code`` in the body.
    """

    async def health(_request: Request) -> JSONResponse:
        status = await db_handler.health_check()
        return JSONResponse(status, status_code=200 if status["healthy"] else 503)

    async def tools_list(_request: Request) -> JSONResponse:
        return JSONResponse({"tools": dispatcher.list_tools()})

    async def tools_call(request: Request) -> JSONResponse:
        tool_name = request.path_params["tool_name"]
        try:
            body = await request.json()
        except ValueError:
            return JSONResponse(
                {"exit_code": 1, "error": "Request body must be a JSON object"},
                status_code=400,
            )
        params = body if isinstance(body, dict) else {}
        envelope = await dispatcher.dispatch(tool_name, params)
        return JSONResponse(envelope)

    return Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Route("/tools", tools_list, methods=["GET"]),
            Route("/tools/{tool_name}", tools_call, methods=["POST"]),
        ],
    )


def _load_config() -> ModelToolRuntimeConfig:
    try:
        return ModelToolRuntimeConfig.from_environment()
    except ProtocolConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        sys.exit(2)


@click.group(name="hera-tools")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Logging level (default: INFO)",
)
def cli(log_level: str) -> None:
    """HERA organization-scoped data tools."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="serve")
@click.option(
    "--host",
    type=str,
    default="0.0.0.0",  # noqa: S104 - Intentional bind-all for server CLI
    help="HTTP server host (default: 0.0.0.0)",
)
@click.option("--port", type=int, default=8090, help="HTTP server port (default: 8090)")
def serve(host: str, port: int) -> None:
    """Serve the hera.* tools over HTTP."""
    config = _load_config()

    console.print("[bold blue]Starting HERA tool server[/bold blue]")
    console.print(f"  Host: {host}:{port}")
    console.print(f"  Statement timeout: {config.statement_timeout_ms}ms")
    console.print(f"  Pool size: {config.pool_size}")
    console.print()

    try:
        asyncio.run(_run_server(config, host=host, port=port))
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")
        sys.exit(0)
    except RuntimeHostError as e:
        console.print(f"[red]Server error: {e}[/red]")
        logger.exception("Server error")
        sys.exit(1)


async def _run_server(config: ModelToolRuntimeConfig, host: str, port: int) -> None:
    """Initialize the pool, run uvicorn until a shutdown signal, then clean up."""
    db_handler = DbHandler()
    await db_handler.initialize(config.as_handler_config())
    dispatcher = HeraToolDispatcher(db_handler)

    server = uvicorn.Server(
        uvicorn.Config(
            app=create_app(dispatcher, db_handler),
            host=host,
            port=port,
            log_level="info",
        )
    )

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, shutdown_event.set)
    except NotImplementedError:
        # Signal handlers not supported on Windows
        pass

    console.print(f"[green]Listening on http://{host}:{port}/tools[/green]")
    server_task = asyncio.create_task(server.serve())
    try:
        await asyncio.wait(
            [server_task, asyncio.create_task(shutdown_event.wait())],
            return_when=asyncio.FIRST_COMPLETED,
        )
        server.should_exit = True
        await server_task
    finally:
        console.print("\n[yellow]Shutting down...[/yellow]")
        await db_handler.shutdown()
        console.print("[green]Shutdown complete[/green]")


@cli.command(name="call")
@click.argument("tool_name")
@click.option(
    "--params",
    "params_json",
    type=str,
    default="{}",
    help="Tool parameters as a JSON object (default: {})",
)
def call(tool_name: str, params_json: str) -> None:
    """Call one tool and print its result envelope."""
    try:
        params = json.loads(params_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--params") from e
    if not isinstance(params, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--params")

    config = _load_config()
    envelope = asyncio.run(_call_tool(config, tool_name, params))
    console.print_json(data=envelope)
    raise SystemExit(0 if envelope.get("exit_code") == 0 else 1)


async def _call_tool(
    config: ModelToolRuntimeConfig, tool_name: str, params: dict[str, Any]
) -> dict[str, Any]:
    db_handler = DbHandler()
    await db_handler.initialize(config.as_handler_config())
    try:
        return await HeraToolDispatcher(db_handler).dispatch(tool_name, params)
    finally:
        await db_handler.shutdown()


@cli.command(name="tools")
def tools() -> None:
    """List the registered tools."""
    dispatcher = HeraToolDispatcher(DbHandler())
    table = Table(title="HERA Tools")
    table.add_column("Tool", style="cyan")
    table.add_column("Description")
    for tool in dispatcher.list_tools():
        table.add_row(tool["name"], tool["description"])
    console.print(table)


# Export for CLI registration
__all__ = ["cli", "create_app"]
