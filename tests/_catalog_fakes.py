"""Fetchers en memoria para tests (sin red).

`FakeCatalog` cumple `SearchFetcher` y `DetailFetcher`. Con `gated=True` cada
llamada se queda esperando hasta que el test la libera con `release(n)`, así
se puede decidir el orden en que llegan las respuestas.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parents[1] / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from core.domain.models import MovieDetail, SearchResultItem
from core.errors import MovieNotFoundError


def item(imdb_id: str, title: str, year: str = "2005") -> SearchResultItem:
    return SearchResultItem(imdbID=imdb_id, Title=title, Year=year, Poster="N/A")


BATMAN = [
    item("tt0372784", "Batman Begins", "2005"),
    item("tt2975590", "Batman v Superman: Dawn of Justice", "2016"),
    item("tt0096895", "Batman", "1989"),
]
SUPERMAN = [
    item("tt0078346", "Superman", "1978"),
    item("tt0770828", "Man of Steel", "2013"),
]

DETAILS = {
    "tt0372784": {
        "Title": "Batman Begins",
        "Year": "2005",
        "Runtime": "140 min",
        "imdbRating": "8.2",
        "Genre": "Action, Crime, Drama",
        "Director": "Christopher Nolan",
    },
    "tt0078346": {
        "Title": "Superman",
        "Year": "1978",
        "Runtime": "143 min",
        "imdbRating": "7.4",
        "Genre": "Action, Adventure, Sci-Fi",
        "Director": "Richard Donner",
    },
}


async def let_tasks_run(rounds: int = 5) -> None:
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeCatalog:
    def __init__(
        self,
        results: dict[str, object] | None = None,
        *,
        detail_errors: dict[str, Exception] | None = None,
        gated: bool = False,
    ) -> None:
        self.results = results if results is not None else {"batman": BATMAN, "superman": SUPERMAN}
        self.detail_errors = detail_errors or {}
        self.gated = gated
        self.search_calls: list[str] = []
        self.detail_calls: list[str] = []
        self.gates: list[asyncio.Event] = []

    def release(self, index: int) -> None:
        self.gates[index].set()

    async def _gate(self) -> None:
        if not self.gated:
            return
        event = asyncio.Event()
        self.gates.append(event)
        await event.wait()

    async def search(self, query: str) -> list[SearchResultItem]:
        self.search_calls.append(query)
        await self._gate()
        outcome = self.results.get(query)
        if outcome is None:
            raise MovieNotFoundError()
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)  # type: ignore[arg-type]

    async def fetch_detail(self, imdb_id: str) -> MovieDetail:
        self.detail_calls.append(imdb_id)
        call_no = len(self.detail_calls)
        await self._gate()
        if imdb_id in self.detail_errors:
            raise self.detail_errors[imdb_id]
        payload: dict[str, str] = {"Plot": f"request {call_no}"}
        if imdb_id in DETAILS:
            payload.update(imdbID=imdb_id, **DETAILS[imdb_id])
        return MovieDetail.model_validate(payload)
