"""Lista de películas vistas (en memoria, solo durante la sesión)."""

from __future__ import annotations

from typing import Iterator

from core.domain.models import WatchedRecord, WatchedSummary
from core.errors import DuplicateWatchedError, InvalidRatingError
from core.services.aggregates import mean


class WatchedListStore:
    """Colección ordenada por inserción; un registro por `imdb_id`.

    Las puntuaciones del usuario deben estar en `1..max_rating`.
    """

    def __init__(self, records: list[WatchedRecord] | None = None, *, max_rating: int = 10) -> None:
        self.max_rating = max_rating
        self._records: list[WatchedRecord] = []
        for record in records or []:
            self.add(record)

    def add(self, record: WatchedRecord) -> None:
        if record.user_rating > self.max_rating:
            raise InvalidRatingError(record.user_rating, self.max_rating)
        if record.imdb_id in self:
            raise DuplicateWatchedError(record.imdb_id)
        self._records.append(record)

    def all(self) -> tuple[WatchedRecord, ...]:
        return tuple(self._records)

    def get(self, imdb_id: str) -> WatchedRecord | None:
        for record in self._records:
            if record.imdb_id == imdb_id:
                return record
        return None

    def remove(self, imdb_id: str) -> bool:
        """Elimina el registro; devuelve False si no estaba."""

        before = len(self._records)
        self._records = [r for r in self._records if r.imdb_id != imdb_id]
        return len(self._records) != before

    def summary(self) -> WatchedSummary:
        records = self._records
        return WatchedSummary(
            count=len(records),
            avg_imdb_rating=mean(r.imdb_rating for r in records),
            avg_user_rating=mean(r.user_rating for r in records),
            avg_runtime=mean(r.runtime for r in records),
        )

    def __contains__(self, imdb_id: object) -> bool:
        return any(r.imdb_id == imdb_id for r in self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[WatchedRecord]:
        return iter(tuple(self._records))
