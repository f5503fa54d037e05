"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Todo lo que aquí se pinta ya viene calculado por el Core (estado derivado).
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import MovieDetail, SearchResultItem, WatchedRecord, WatchedSummary
from core.domain.state import Failure, FetchState, Idle, Loading, Success


def _na(value: str) -> str:
    return "" if value in ("", "N/A") else value


def _number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("🍿 popcorn", style="bold yellow")
    subtitle = Text("Search movies • Rate them • Track what you watched", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="yellow", padding=(1, 4)))


def build_error_text(message: str) -> Text:
    return Text.assemble(("⛔ ", "red"), (message, "bold red"))


def build_movies_table(movies: Iterable[SearchResultItem]) -> Table:
    """Tabla de resultados; la columna `#` es la que usa `:N` en modo interactivo."""

    movies = list(movies)
    table = Table(title=f"Found {len(movies)} results")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Year", style="white", no_wrap=True)
    table.add_column("IMDb id", style="magenta", no_wrap=True)
    for index, movie in enumerate(movies, start=1):
        table.add_row(str(index), movie.title, movie.year, movie.imdb_id)
    return table


def render_fetch_state(state: FetchState, *, idle: RenderableType | None = None) -> RenderableType:
    """Loading / error / resultado, en ese orden de prioridad."""

    if isinstance(state, Loading):
        return Text("Loading...", style="dim")
    if isinstance(state, Failure):
        return build_error_text(state.message)
    if isinstance(state, Success):
        payload = state.payload
        if isinstance(payload, MovieDetail):
            return build_detail_panel(payload)
        return build_movies_table(payload)
    if isinstance(state, Idle) and idle is not None:
        return idle
    return Text("")


def build_detail_panel(detail: MovieDetail, *, user_rating: int | None = None) -> Panel:
    body = Text()
    body.append(f"{_na(detail.released)} • {_na(detail.runtime)}\n", style="dim")
    if _na(detail.genre):
        body.append(f"{detail.genre}\n")
    body.append(f"⭐ {_na(detail.imdb_rating) or '-'} IMDb rating\n\n")
    if _na(detail.plot):
        body.append(f"{detail.plot}\n\n", style="italic")
    if _na(detail.actors):
        body.append(f"Starring {detail.actors}\n")
    if _na(detail.director):
        body.append(f"Directed by {detail.director}\n")
    if user_rating is not None:
        body.append(f"\nYou rated this movie {user_rating} 🌟", style="bold green")

    title = Text(detail.title or detail.imdb_id or "Unknown title", style="bold cyan")
    subtitle = _na(detail.poster) or None
    return Panel(body, title=title, subtitle=subtitle, border_style="cyan")


def build_summary_panel(summary: WatchedSummary) -> Panel:
    body = Text()
    body.append(f"#️⃣  {summary.count} movies\n")
    body.append(f"⭐️ {_number(summary.avg_imdb_rating)}\n")
    body.append(f"🌟 {_number(summary.avg_user_rating)}\n")
    body.append(f"⏳ {_number(summary.avg_runtime)} min")
    return Panel(body, title="Movies you watched", border_style="green")


def build_watched_table(records: Iterable[WatchedRecord]) -> Table:
    table = Table(title="Watched")
    table.add_column("Title", style="cyan")
    table.add_column("IMDb id", style="magenta", no_wrap=True)
    table.add_column("⭐️", justify="right")
    table.add_column("🌟", justify="right")
    table.add_column("⏳", justify="right")
    for record in records:
        table.add_row(
            record.title,
            record.imdb_id,
            _number(record.imdb_rating),
            str(record.user_rating),
            f"{_number(record.runtime)} min",
        )
    return table
