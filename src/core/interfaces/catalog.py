"""Contratos del catálogo de películas.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Los controladores dependen de esto y no de OMDb: en tests se inyecta un
  fetcher en memoria que cumple el mismo contrato.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import MovieDetail, SearchResultItem


@runtime_checkable
class SearchFetcher(Protocol):
    """Una búsqueda de texto libre contra el catálogo.

    Reglas de diseño:
    - Una sola petición por llamada, sin reintentos.
    - Fallos como `core.errors.CatalogError` (transporte, not found, parseo).
    """

    async def search(self, query: str) -> Sequence[SearchResultItem]:
        """Devuelve los resultados en el orden del servicio."""

        ...


@runtime_checkable
class DetailFetcher(Protocol):
    """Ficha completa de una película por identificador."""

    async def fetch_detail(self, imdb_id: str) -> MovieDetail:
        ...
