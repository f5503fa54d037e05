"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde con OMDb (aliases `Title`, `imdbID`, ...)
  sin que el resto del código conozca el formato del proveedor.
- Modelos inmutables: una búsqueda o un detalle nuevo reemplaza al anterior
  entero, nunca se modifica en sitio.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


def _to_number(raw: str) -> float:
    """Convierte '7.8' o '142 min' en número; 'N/A' y vacíos valen 0."""

    token = raw.strip().split(" ", 1)[0] if raw else ""
    try:
        return float(token.replace(",", ""))
    except ValueError:
        return 0.0


class SearchResultItem(BaseModel):
    """Una fila del listado de búsqueda (`Search[]` en OMDb)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    imdb_id: str = Field(
        ...,
        alias="imdbID",
        min_length=1,
        description="Identificador único en el catálogo (IMDb id).",
    )
    title: str = Field(
        ...,
        alias="Title",
        description="Título de la película.",
    )
    year: str = Field(
        default="",
        alias="Year",
        description="Año de estreno tal como lo devuelve el catálogo (p.ej. '2005' o '2010–2014').",
    )
    poster: str = Field(
        default="",
        alias="Poster",
        description="URL del póster ('N/A' si no hay).",
    )


class MovieDetail(BaseModel):
    """Ficha completa de una película.

    Todos los campos tienen default: OMDb responde `{"Response": "False"}`
    para ids inexistentes y eso también se acepta como detalle (vacío).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    imdb_id: str = Field(default="", alias="imdbID")
    title: str = Field(default="", alias="Title")
    year: str = Field(default="", alias="Year")
    poster: str = Field(default="", alias="Poster")
    runtime: str = Field(
        default="",
        alias="Runtime",
        description="Duración en texto libre, p.ej. '142 min'.",
    )
    imdb_rating: str = Field(
        default="",
        alias="imdbRating",
        description="Nota de la crítica (IMDb) como string numérico.",
    )
    plot: str = Field(default="", alias="Plot")
    released: str = Field(default="", alias="Released")
    actors: str = Field(default="", alias="Actors")
    director: str = Field(default="", alias="Director")
    genre: str = Field(default="", alias="Genre")

    @property
    def runtime_minutes(self) -> float:
        return _to_number(self.runtime)

    @property
    def imdb_rating_value(self) -> float:
        return _to_number(self.imdb_rating)


class WatchedRecord(BaseModel):
    """Película vista + puntuación del usuario."""

    model_config = ConfigDict(frozen=True)

    imdb_id: str = Field(..., min_length=1)
    title: str = Field(default="")
    poster: str = Field(default="")
    imdb_rating: float = Field(
        default=0.0,
        ge=0,
        description="Nota de la crítica (0 si el catálogo no la tiene).",
    )
    user_rating: int = Field(
        ...,
        ge=1,
        description="Puntuación del usuario (1..N estrellas).",
    )
    runtime: float = Field(
        default=0.0,
        ge=0,
        description="Duración en minutos.",
    )

    @classmethod
    def from_detail(cls, detail: MovieDetail, *, user_rating: int) -> "WatchedRecord":
        return cls(
            imdb_id=detail.imdb_id,
            title=detail.title,
            poster=detail.poster,
            imdb_rating=detail.imdb_rating_value,
            user_rating=user_rating,
            runtime=detail.runtime_minutes,
        )


class WatchedSummary(BaseModel):
    """Agregados de la lista de vistas. Se recalcula en cada lectura."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(default=0, ge=0)
    avg_imdb_rating: float = Field(default=0.0)
    avg_user_rating: float = Field(default=0.0)
    avg_runtime: float = Field(default=0.0)
