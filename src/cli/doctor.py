"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.omdb_client import OmdbClient
from core.config import AppSettings, write_user_env_vars
from core.errors import CatalogError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(settings.omdb_base_url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


async def _check_search(settings: AppSettings) -> tuple[bool, str]:
    """Real search with the configured key (OMDb answers 401 for bad keys)."""

    try:
        results = await OmdbClient(settings).search("batman")
        return True, f"{len(results)} results for 'batman'"
    except CatalogError as exc:
        return False, f"{exc.kind.label()}: {exc.message}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="popcorn doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    has_key = bool(settings.omdb_api_key)
    table.add_row("OMDb key", "OK" if has_key else "MISSING", "configured" if has_key else "run `popcorn doctor setup-key`")
    table.add_row("OMDb base_url", "OK", settings.omdb_base_url)
    table.add_row("Min query length", "OK", str(settings.min_query_length))

    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    if has_key and ok_http:
        ok_search, detail_search = asyncio.run(_check_search(settings))
        table.add_row("Catalog search", "OK" if ok_search else "FAIL", detail_search)

    _console.print(table)

    if not has_key:
        _console.print(
            "\n[yellow]Note:[/yellow] Get a free key at http://www.omdbapi.com/apikey.aspx"
        )


@app.command(name="setup-key")
def setup_key() -> None:
    """Interactive setup: stores the OMDb API key in the user config .env."""

    api_key = typer.prompt("OMDb API key", hide_input=True, confirmation_prompt=False).strip()
    if not api_key:
        raise typer.BadParameter("api key is required")

    env_path = write_user_env_vars({"POPCORN_OMDB_API_KEY": api_key})

    _console.print(f"[green]Saved OMDb config to:[/green] {env_path}")
