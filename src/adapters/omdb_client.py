"""Cliente del catálogo OMDb (búsqueda + detalle).

Implementa `core.interfaces.catalog.SearchFetcher` y `DetailFetcher`.

Notas:
- Búsqueda: status no-2xx => TransportError; `Response == "False"` =>
  MovieNotFoundError.
- Detalle: no se mira el status ni `Response`; cualquier JSON que parsee es
  un `MovieDetail` (aunque describa un id inexistente).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import MovieDetail, SearchResultItem
from core.errors import (
    SEARCH_TRANSPORT_MESSAGE,
    ConfigurationError,
    MovieNotFoundError,
    PayloadParseError,
    TransportError,
)
from core.interfaces.catalog import DetailFetcher, SearchFetcher

logger = logging.getLogger(__name__)


def _json_object(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise PayloadParseError(f"Invalid JSON from catalog: {exc}") from exc
    if not isinstance(data, dict):
        raise PayloadParseError("Unexpected catalog payload (expected an object)")
    return data


class OmdbClient(SearchFetcher, DetailFetcher):
    """Acceso a OMDb con la API key inyectada desde `AppSettings`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._api_key = api_key or self._settings.omdb_api_key
        if not self._api_key:
            raise ConfigurationError(
                "OMDb API key not configured (set POPCORN_OMDB_API_KEY or run `popcorn doctor setup-key`)"
            )
        self._transport = transport

    async def _get(self, params: dict[str, str]) -> httpx.Response:
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                return await client.get(
                    self._settings.omdb_base_url,
                    params={"apikey": self._api_key, **params},
                )
        except httpx.HTTPError as exc:
            logger.warning("OMDb request failed: %s", exc)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

    async def search(self, query: str) -> list[SearchResultItem]:
        logger.debug("OMDb search s=%r", query)
        response = await self._get({"s": query})
        if not response.is_success:
            logger.warning("OMDb search returned HTTP %s", response.status_code)
            raise TransportError(SEARCH_TRANSPORT_MESSAGE)

        data = _json_object(response)
        if data.get("Response") == "False":
            raise MovieNotFoundError()

        raw_items = data.get("Search", [])
        if not isinstance(raw_items, list):
            raise PayloadParseError("Unexpected 'Search' field in catalog payload")
        try:
            return [SearchResultItem.model_validate(item) for item in raw_items]
        except ValidationError as exc:
            raise PayloadParseError(f"Invalid search item: {exc.errors()[0]['msg']}") from exc

    async def fetch_detail(self, imdb_id: str) -> MovieDetail:
        logger.debug("OMDb detail i=%r", imdb_id)
        response = await self._get({"i": imdb_id})
        data = _json_object(response)
        try:
            return MovieDetail.model_validate(data)
        except ValidationError as exc:
            raise PayloadParseError(f"Invalid movie detail: {exc.errors()[0]['msg']}") from exc
