"""Estado de una petición asíncrona con guardia de secuencia.

Cada controlador (búsqueda, detalle) es dueño de un `FetchSlot`. El slot:
- numera cada acción emitida (`start`/`reset`) con un contador monotónico;
- solo aplica la respuesta cuyo número sigue siendo el último emitido, así el
  estado refleja el orden de emisión y no el de llegada;
- siempre sale de `Loading` al resolver (éxito, fallo o cancelación).

No cancela peticiones en red: las respuestas obsoletas se ignoran al llegar.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from core.domain.state import IDLE, LOADING, ErrorKind, Failure, FetchState, Loading, Success
from core.errors import CatalogError

logger = logging.getLogger(__name__)

StateListener = Callable[[FetchState], None]


class FetchSlot:
    def __init__(self, name: str, *, discard_stale: bool = True) -> None:
        self.name = name
        self._discard_stale = discard_stale
        self._state: FetchState = IDLE
        self._issued = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def sequence(self) -> int:
        """Número de la última acción emitida."""

        return self._issued

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def reset(self) -> None:
        """Vuelve a `Idle` e invalida cualquier respuesta en vuelo."""

        self._issued += 1
        self._set(IDLE)

    def start(self, call: Callable[[], Awaitable[Any]]) -> asyncio.Task[None]:
        """Pasa a `Loading` y lanza `call` en el loop en curso."""

        loop = asyncio.get_running_loop()
        self._issued += 1
        task = loop.create_task(self._run(self._issued, call))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        # La tarea ya existe: su `finally` saca al slot de `Loading` aunque un listener falle.
        self._set(LOADING)
        return task

    async def wait(self) -> None:
        """Espera a que terminen todas las peticiones lanzadas."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        await self.wait()
        # Una tarea cancelada antes de arrancar no pasa por su `finally`.
        if isinstance(self._state, Loading):
            self._set(IDLE)

    async def _run(self, seq: int, call: Callable[[], Awaitable[Any]]) -> None:
        outcome: FetchState = IDLE
        try:
            outcome = Success(await call())
        except CatalogError as exc:
            outcome = Failure(exc.kind, exc.message)
        except Exception as exc:
            logger.exception("%s request #%d raised unexpectedly", self.name, seq)
            outcome = Failure(ErrorKind.TRANSPORT, str(exc) or exc.__class__.__name__)
        finally:
            self._settle(seq, outcome)

    def _settle(self, seq: int, outcome: FetchState) -> None:
        if self._discard_stale and seq != self._issued:
            logger.debug("%s: discarding stale response #%d (latest is #%d)", self.name, seq, self._issued)
            return
        if isinstance(outcome, Failure):
            logger.warning("%s: %s (%s)", self.name, outcome.message, outcome.kind.value)
        self._set(outcome)

    def _set(self, state: FetchState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
