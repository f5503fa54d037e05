"""Sesión de usuario: búsqueda + selección + lista de vistas.

Este módulo une los tres dueños de estado (SearchController,
SelectionController, WatchedListStore) detrás de una fachada única para que
la CLI (u otro entry-point) no tenga que coordinarlos. Ningún controlador
escribe en el estado de otro: los efectos cruzados pasan por aquí.
"""

from __future__ import annotations

import asyncio
import logging

from core.config import AppSettings
from core.domain.models import MovieDetail, WatchedRecord, WatchedSummary
from core.errors import InvalidRatingError, NothingSelectedError
from core.interfaces.catalog import DetailFetcher, SearchFetcher
from core.interfaces.rating import RatingCollector
from core.services.search_controller import SearchController
from core.services.selection_controller import SelectionController
from core.services.watched_store import WatchedListStore

logger = logging.getLogger(__name__)


class PopcornSession:
    def __init__(
        self,
        *,
        search_fetcher: SearchFetcher,
        detail_fetcher: DetailFetcher,
        settings: AppSettings | None = None,
        watched: WatchedListStore | None = None,
        discard_stale: bool = True,
    ) -> None:
        self._settings = settings or AppSettings()
        self.search = SearchController(
            search_fetcher,
            min_query_length=self._settings.min_query_length,
            discard_stale=discard_stale,
        )
        self.selection = SelectionController(detail_fetcher, discard_stale=discard_stale)
        self.watched = watched if watched is not None else WatchedListStore(max_rating=self._settings.max_user_rating)

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "PopcornSession":
        """Sesión contra OMDb usando la API key de `settings`."""

        from adapters.omdb_client import OmdbClient  # noqa: PLC0415

        client = OmdbClient(settings)
        return cls(search_fetcher=client, detail_fetcher=client, settings=settings)

    @property
    def max_user_rating(self) -> int:
        return self._settings.max_user_rating

    def set_query(self, query: str) -> None:
        self.search.set_query(query)

    def select(self, imdb_id: str) -> None:
        self.selection.select(imdb_id)

    def close_movie(self) -> None:
        self.selection.close()

    def watched_rating(self, imdb_id: str) -> int | None:
        record = self.watched.get(imdb_id)
        return record.user_rating if record else None

    def add_to_watched(self, user_rating: int) -> WatchedRecord:
        """Confirma la película seleccionada como vista con `user_rating`.

        Requiere una selección con el detalle ya cargado. Tras añadirla se
        cierra la selección.
        """

        imdb_id, detail = self._selected_detail()
        if not 1 <= user_rating <= self.max_user_rating:
            raise InvalidRatingError(user_rating, self.max_user_rating)

        if not detail.imdb_id:
            detail = detail.model_copy(update={"imdb_id": imdb_id})
        record = WatchedRecord.from_detail(detail, user_rating=user_rating)
        self.watched.add(record)
        logger.info("added %s (%s) rated %d", record.title, record.imdb_id, user_rating)
        self.selection.close()
        return record

    def rate_selected(self, collector: RatingCollector) -> WatchedRecord:
        self._selected_detail()
        return self.add_to_watched(collector.collect(self.max_user_rating))

    async def arate_selected(self, collector: RatingCollector) -> WatchedRecord:
        """Como `rate_selected`, pero pregunta la puntuación fuera del loop."""

        self._selected_detail()
        rating = await asyncio.to_thread(collector.collect, self.max_user_rating)
        return self.add_to_watched(rating)

    def _selected_detail(self) -> tuple[str, MovieDetail]:
        imdb_id = self.selection.selected_id
        if imdb_id is None:
            raise NothingSelectedError("No movie selected")
        detail = self.selection.detail
        if detail is None:
            raise NothingSelectedError("Movie details are not loaded yet")
        return imdb_id, detail

    def summary(self) -> WatchedSummary:
        return self.watched.summary()

    async def wait(self) -> None:
        await self.search.wait()
        await self.selection.wait()

    async def aclose(self) -> None:
        await self.search.aclose()
        await self.selection.aclose()
