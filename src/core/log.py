"""Logging de la aplicación.

Los módulos usan `logging.getLogger(__name__)`; aquí solo se decide a dónde
van los registros (Rich, a stderr para no mezclarse con tablas/paneles).
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "popcorn-rich"


def configure_logging(level: str | int = "WARNING", *, console: Console | None = None) -> None:
    """Instala un único `RichHandler` en el logger raíz (idempotente)."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)
            return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    # httpx loguea cada request a INFO; solo interesa en modo DEBUG.
    logging.getLogger("httpx").setLevel(level if level <= logging.DEBUG else logging.WARNING)
