"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el Core depende de abstracciones.
"""

from core.interfaces.catalog import DetailFetcher, SearchFetcher
from core.interfaces.rating import RatingCollector

__all__ = ["DetailFetcher", "RatingCollector", "SearchFetcher"]
