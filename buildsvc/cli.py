"""Thin CLI wrapper for buildsvc.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import json
from typing import Annotated, NoReturn

import typer
from rich.console import Console

from buildsvc import __version__
from buildsvc.client import BuildClient
from buildsvc.config import (
    LOG_LEVELS,
    get_settings,
    parse_http_addr,
    print_settings_json,
)
from buildsvc.errors import BuildServiceError
from buildsvc.models import Build, BuildPatch

app = typer.Typer(
    name="buildsvc",
    help="Build Service - serve and manage in-memory build records",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"buildsvc version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Build Service - serve and manage in-memory build records."""


@app.command()
def config(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        console.print(print_settings_json(settings))
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Server:[/bold]")
        console.print(f"  Listen address:      {settings.http_addr}")
        console.print(f"  Log level:           {settings.log_level}")
        console.print()
        console.print("[bold]Client:[/bold]")
        console.print(f"  Server URL:          {settings.server_url}")
        console.print(f"  Timeout (seconds):   {settings.client_timeout}")


@app.command()
def serve(
    http_addr: Annotated[
        str | None,
        typer.Option("--http-addr", help="HTTP listen address ([host]:port)"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level"),
    ] = None,
) -> None:
    """Serve the build API over HTTP with a fresh in-memory store."""
    import uvicorn

    from buildsvc.log import configure_logging
    from web.app import create_app

    settings = get_settings()
    addr = http_addr or settings.http_addr
    level = (log_level or settings.log_level).upper()

    try:
        host, port = parse_http_addr(addr)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2) from None

    if level not in LOG_LEVELS:
        console.print(
            f"[red]Invalid log level: {log_level}. "
            f"Valid values: {', '.join(LOG_LEVELS)}[/red]"
        )
        raise typer.Exit(code=2)

    configure_logging(level)
    # log_config=None keeps uvicorn's loggers on the root logfmt handler
    uvicorn.run(
        create_app(),
        host=host,
        port=port,
        log_level=level.lower(),
        log_config=None,
    )


builds_app = typer.Typer(help="Manage builds on a running server")
app.add_typer(builds_app, name="builds")

ServerOption = Annotated[
    str | None,
    typer.Option("--server", "-s", help="Server base URL"),
]
NameOption = Annotated[
    str | None,
    typer.Option("--name", "-n", help="Build display name"),
]


def _client(server: str | None) -> BuildClient:
    """Create a client for the given server, or the configured one."""
    settings = get_settings()
    return BuildClient(
        base_url=server or settings.server_url, timeout=settings.client_timeout
    )


def _fail(error: BuildServiceError) -> NoReturn:
    """Print a service error and exit with status 1."""
    console.print(f"[red]{error}[/red]")
    raise typer.Exit(code=1)


@builds_app.command("create")
def builds_create(
    build_id: Annotated[str, typer.Argument(help="Build ID")],
    name: NameOption = None,
    server: ServerOption = None,
) -> None:
    """Create a build; fails if the ID already exists."""
    with _client(server) as client:
        try:
            client.create(Build(id=build_id, name=name or ""))
        except BuildServiceError as e:
            _fail(e)
    console.print(f"[green]Created build {build_id}[/green]")


@builds_app.command("get")
def builds_get(
    build_id: Annotated[str, typer.Argument(help="Build ID")],
    server: ServerOption = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show a build."""
    with _client(server) as client:
        try:
            build = client.read(build_id)
        except BuildServiceError as e:
            _fail(e)

    if json_output:
        console.print(json.dumps(build.to_dict(), indent=2))
    else:
        console.print(f"[green]{build.id}[/green]")
        console.print(f"  Name: {build.name or '(unset)'}")


@builds_app.command("replace")
def builds_replace(
    build_id: Annotated[str, typer.Argument(help="Build ID")],
    name: NameOption = None,
    server: ServerOption = None,
) -> None:
    """Create or overwrite a build."""
    with _client(server) as client:
        try:
            client.replace(build_id, Build(id=build_id, name=name or ""))
        except BuildServiceError as e:
            _fail(e)
    console.print(f"[green]Stored build {build_id}[/green]")


@builds_app.command("patch")
def builds_patch(
    build_id: Annotated[str, typer.Argument(help="Build ID")],
    name: NameOption = None,
    server: ServerOption = None,
) -> None:
    """Update fields of an existing build."""
    with _client(server) as client:
        try:
            build = client.partial_update(build_id, BuildPatch(name=name))
        except BuildServiceError as e:
            _fail(e)
    console.print(f"[green]Updated build {build.id}[/green]")


@builds_app.command("delete")
def builds_delete(
    build_id: Annotated[str, typer.Argument(help="Build ID")],
    server: ServerOption = None,
) -> None:
    """Delete a build."""
    with _client(server) as client:
        try:
            client.delete(build_id)
        except BuildServiceError as e:
            _fail(e)
    console.print(f"[green]Deleted build {build_id}[/green]")


if __name__ == "__main__":
    app()
