"""CLI de popcorn (Typer + Rich).

La CLI es solo la capa de render: todas las decisiones (cuándo buscar, qué
respuesta aplicar, toggle de selección, agregados) viven en
`core.services.session.PopcornSession`.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import typer
from rich.console import Console

from cli import doctor
from cli.rating_prompt import PromptRatingCollector
from cli.ui_components import (
    build_detail_panel,
    build_error_text,
    build_summary_panel,
    build_watched_table,
    print_banner,
    render_fetch_state,
)
from core.config import AppSettings
from core.errors import PopcornError
from core.log import configure_logging
from core.services.session import PopcornSession

app = typer.Typer(no_args_is_help=True, help="Search OMDb, rate movies and track what you watched.")
app.add_typer(doctor.app, name="doctor")

_console = Console()

_HELP = """\
[bold]text[/bold]        search (at least {min_len} characters)
[bold]:N[/bold]          select result N (again to deselect)
[bold]:rate[/bold]       rate the selected movie and add it to watched
[bold]:back[/bold]       close the selected movie
[bold]:watched[/bold]    show watched list and summary
[bold]:remove ID[/bold]  remove a movie from the watched list
[bold]:quit[/bold]       exit"""


def _open_session(settings: AppSettings) -> PopcornSession:
    try:
        return PopcornSession.from_settings(settings)
    except PopcornError as exc:
        _console.print(build_error_text(str(exc)))
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
) -> None:
    settings = AppSettings()
    configure_logging(log_level or settings.log_level)


@app.command()
def search(query: str = typer.Argument(..., help="Free-text title query.")) -> None:
    """One-shot search."""

    settings = AppSettings()
    session = _open_session(settings)
    failed = asyncio.run(_search(session, query))
    if failed:
        raise typer.Exit(code=1)


async def _search(session: PopcornSession, query: str) -> bool:
    try:
        session.set_query(query)
        with _console.status("Loading..."):
            await session.wait()
        hint = build_error_text(f"Type at least {session.search.min_query_length} characters")
        _console.print(render_fetch_state(session.search.state, idle=hint))
        return bool(session.search.error)
    finally:
        await session.aclose()


@app.command()
def show(imdb_id: str = typer.Argument(..., help="IMDb id, e.g. tt0372784.")) -> None:
    """Movie detail by id."""

    settings = AppSettings()
    session = _open_session(settings)
    failed = asyncio.run(_show(session, imdb_id))
    if failed:
        raise typer.Exit(code=1)


async def _show(session: PopcornSession, imdb_id: str) -> bool:
    try:
        session.select(imdb_id)
        with _console.status("Loading..."):
            await session.wait()
        _console.print(render_fetch_state(session.selection.state))
        return bool(session.selection.error)
    finally:
        await session.aclose()


@app.command()
def interactive() -> None:
    """Search, select, rate and keep a watched list for this session."""

    settings = AppSettings()
    session = _open_session(settings)
    print_banner(_console)
    _console.print(_HELP.format(min_len=settings.min_query_length))
    asyncio.run(_interactive(session))


def _render_right_box(session: PopcornSession) -> None:
    """Detalle si hay selección; si no, resumen + lista de vistas."""

    selected = session.selection.selected_id
    if selected is not None:
        detail = session.selection.detail
        if detail is not None:
            _console.print(build_detail_panel(detail, user_rating=session.watched_rating(selected)))
        else:
            _console.print(render_fetch_state(session.selection.state))
        return
    _console.print(build_summary_panel(session.summary()))
    if len(session.watched):
        _console.print(build_watched_table(session.watched.all()))


async def _interactive(session: PopcornSession) -> None:
    collector = PromptRatingCollector(_console)
    try:
        while True:
            line = await asyncio.to_thread(_console.input, "[bold yellow]popcorn>[/bold yellow] ")
            command = line.strip()

            if command in (":q", ":quit", ":exit"):
                return
            if command == ":help":
                _console.print(_HELP.format(min_len=session.search.min_query_length))
                continue

            try:
                if command == ":back":
                    session.close_movie()
                elif command == ":watched":
                    _console.print(build_summary_panel(session.summary()))
                    _console.print(build_watched_table(session.watched.all()))
                    continue
                elif command == ":rate":
                    record = await session.arate_selected(collector)
                    _console.print(f"[green]Added[/green] {record.title} ({record.user_rating}/{session.max_user_rating})")
                elif command.startswith(":remove"):
                    target = command.removeprefix(":remove").strip()
                    if not session.watched.remove(target):
                        _console.print(build_error_text(f"{target} is not in the watched list"))
                elif command.startswith(":") and command[1:].isdigit():
                    movies = session.search.movies
                    index = int(command[1:])
                    if not 1 <= index <= len(movies):
                        _console.print(build_error_text(f"No result #{index}"))
                        continue
                    session.select(movies[index - 1].imdb_id)
                else:
                    session.set_query(line)
                    with _console.status("Loading..."):
                        await session.search.wait()
                    hint = build_error_text(f"Type at least {session.search.min_query_length} characters")
                    _console.print(render_fetch_state(session.search.state, idle=hint))
                    continue
            except PopcornError as exc:
                _console.print(build_error_text(str(exc)))
                continue

            with _console.status("Loading..."):
                await session.selection.wait()
            _render_right_box(session)
    except (EOFError, KeyboardInterrupt):
        return
    finally:
        await session.aclose()


def run() -> None:
    # Emojis en tablas/paneles: cp1252 en terminales Windows no los soporta.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    app()


if __name__ == "__main__":
    run()
