"""Agregados numéricos de la lista de vistas."""

from __future__ import annotations

from typing import Iterable


def mean(values: Iterable[float]) -> float:
    """Media aritmética; una secuencia vacía vale 0 (no es un error)."""

    items = list(values)
    if not items:
        return 0
    return sum(items) / len(items)
