"""Estados de la UI como tipos suma.

Por qué tipos suma (y no flags sueltos):
- `is_loading`/`error`/`movies` se derivan de un único valor, así nunca
  conviven dos estados incompatibles.
- `match` exhaustivo en la capa de render (CLI) sin comprobar `None`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Clasificación de fallos de una petición al catálogo."""

    TRANSPORT = "transport"
    NOT_FOUND = "not_found"
    PARSE = "parse"

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return {
            ErrorKind.TRANSPORT: "Network error",
            ErrorKind.NOT_FOUND: "Not found",
            ErrorKind.PARSE: "Invalid response",
        }[self]


@dataclass(frozen=True)
class Idle:
    """Ninguna petición emitida todavía (o estado reiniciado)."""


@dataclass(frozen=True)
class Loading:
    """Petición en vuelo."""


@dataclass(frozen=True)
class Success(Generic[T]):
    payload: T


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str


FetchState = Union[Idle, Loading, Success, Failure]

IDLE = Idle()
LOADING = Loading()


@dataclass(frozen=True)
class NoSelection:
    """Ninguna película seleccionada."""


@dataclass(frozen=True)
class Selected:
    imdb_id: str


Selection = Union[NoSelection, Selected]

NO_SELECTION = NoSelection()
