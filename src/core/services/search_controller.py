"""Query de búsqueda y su estado derivado (movies, loading, error)."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from core.domain.models import SearchResultItem
from core.domain.state import ErrorKind, Failure, FetchState, Loading, Success
from core.interfaces.catalog import SearchFetcher
from core.services.fetch_slot import FetchSlot, StateListener

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3


class SearchController:
    """Dueño exclusivo de la query y del estado de búsqueda.

    `set_query` es la única vía de escritura. Queries más cortas que
    `min_query_length` no tocan la red: el estado vuelve a `Idle` (lista
    vacía, sin error). El resto pasa a `Loading` y lanza una búsqueda en el
    loop en curso, por lo que debe llamarse desde código asíncrono.

    Con `discard_stale=False` cada respuesta se aplica al llegar, aunque la
    query haya cambiado (comportamiento sin guardia de secuencia).
    """

    def __init__(
        self,
        fetcher: SearchFetcher,
        *,
        min_query_length: int = MIN_QUERY_LENGTH,
        discard_stale: bool = True,
    ) -> None:
        self._fetcher = fetcher
        self._min_query_length = min_query_length
        self._query = ""
        self._slot = FetchSlot("search", discard_stale=discard_stale)

    @property
    def query(self) -> str:
        return self._query

    @property
    def min_query_length(self) -> int:
        return self._min_query_length

    @property
    def state(self) -> FetchState:
        return self._slot.state

    @property
    def movies(self) -> tuple[SearchResultItem, ...]:
        state = self._slot.state
        if isinstance(state, Success):
            return tuple(state.payload)
        return ()

    @property
    def result_count(self) -> int:
        return len(self.movies)

    @property
    def is_loading(self) -> bool:
        return isinstance(self._slot.state, Loading)

    @property
    def error(self) -> str:
        state = self._slot.state
        return state.message if isinstance(state, Failure) else ""

    @property
    def error_kind(self) -> ErrorKind | None:
        state = self._slot.state
        return state.kind if isinstance(state, Failure) else None

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self._slot.subscribe(listener)

    def set_query(self, new_query: str) -> asyncio.Task[None] | None:
        """Actualiza la query y decide si hay que consultar el catálogo.

        Devuelve la tarea de búsqueda lanzada, o `None` si la query es corta.
        """

        self._query = new_query
        if len(new_query) < self._min_query_length:
            self._slot.reset()
            return None

        logger.debug("search #%d for %r", self._slot.sequence + 1, new_query)
        return self._slot.start(lambda: self._fetcher.search(new_query))

    async def wait(self) -> None:
        await self._slot.wait()

    async def aclose(self) -> None:
        await self._slot.aclose()
