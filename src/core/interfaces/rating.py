"""Contrato del selector de puntuación (estrellas)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RatingCollector(Protocol):
    """Pide al usuario un entero en `1..max_rating`."""

    def collect(self, max_rating: int) -> int:
        ...
