"""Película seleccionada (toggle) y su ficha de detalle."""

from __future__ import annotations

import logging
from typing import Callable

from core.domain.models import MovieDetail
from core.domain.state import (
    NO_SELECTION,
    ErrorKind,
    Failure,
    FetchState,
    Loading,
    Selected,
    Selection,
    Success,
)
from core.interfaces.catalog import DetailFetcher
from core.services.fetch_slot import FetchSlot, StateListener

logger = logging.getLogger(__name__)

SelectionListener = Callable[[Selection], None]


class SelectionController:
    """Dueño exclusivo de la selección y del estado de detalle.

    Seleccionar el id ya seleccionado deselecciona. Cada cambio a
    `Selected(id)` lanza una petición de detalle; deseleccionar devuelve el
    detalle a `Idle` y deja que la petición en vuelo se descarte al llegar.
    """

    def __init__(self, fetcher: DetailFetcher, *, discard_stale: bool = True) -> None:
        self._fetcher = fetcher
        self._selection: Selection = NO_SELECTION
        self._slot = FetchSlot("detail", discard_stale=discard_stale)
        self._selection_listeners: list[SelectionListener] = []

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def selected_id(self) -> str | None:
        if isinstance(self._selection, Selected):
            return self._selection.imdb_id
        return None

    @property
    def state(self) -> FetchState:
        return self._slot.state

    @property
    def detail(self) -> MovieDetail | None:
        state = self._slot.state
        return state.payload if isinstance(state, Success) else None

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

    def subscribe_selection(self, listener: SelectionListener) -> Callable[[], None]:
        self._selection_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._selection_listeners:
                self._selection_listeners.remove(listener)

        return unsubscribe

    def select(self, imdb_id: str) -> None:
        if self._selection == Selected(imdb_id):
            self.close()
            return

        self._set_selection(Selected(imdb_id))
        self._slot.start(lambda: self._fetcher.fetch_detail(imdb_id))

    def close(self) -> None:
        self._set_selection(NO_SELECTION)
        self._slot.reset()

    async def wait(self) -> None:
        await self._slot.wait()

    async def aclose(self) -> None:
        await self._slot.aclose()

    def _set_selection(self, selection: Selection) -> None:
        if selection != self._selection:
            logger.debug("selection: %s -> %s", self._selection, selection)
        self._selection = selection
        for listener in list(self._selection_listeners):
            listener(selection)
