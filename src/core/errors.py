"""Taxonomía de errores.

- `CatalogError` y subclases: fallos de una petición al catálogo. Los
  controladores los convierten en `Failure(kind, message)`; nunca suben más.
- `PopcornError` y subclases: errores locales (config, lista de vistas).
  Se propagan hasta la CLI.
"""

from __future__ import annotations

from core.domain.state import ErrorKind

SEARCH_TRANSPORT_MESSAGE = "Something went wrong with fetching movies"
NOT_FOUND_MESSAGE = "Movie not found"


class CatalogError(Exception):
    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(CatalogError):
    kind = ErrorKind.TRANSPORT


class MovieNotFoundError(CatalogError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = NOT_FOUND_MESSAGE) -> None:
        super().__init__(message)


class PayloadParseError(CatalogError):
    kind = ErrorKind.PARSE


class PopcornError(Exception):
    """Base de errores locales de la aplicación."""


class ConfigurationError(PopcornError):
    pass


class DuplicateWatchedError(PopcornError):
    def __init__(self, imdb_id: str) -> None:
        super().__init__(f"{imdb_id} is already in the watched list")
        self.imdb_id = imdb_id


class InvalidRatingError(PopcornError):
    def __init__(self, rating: int, max_rating: int) -> None:
        super().__init__(f"Rating must be between 1 and {max_rating}, got {rating}")
        self.rating = rating
        self.max_rating = max_rating


class NothingSelectedError(PopcornError):
    pass
