"""Selector de puntuación para terminal (implementa `RatingCollector`)."""

from __future__ import annotations

from rich.console import Console
from rich.prompt import IntPrompt

from core.interfaces.rating import RatingCollector


class PromptRatingCollector(RatingCollector):
    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def collect(self, max_rating: int) -> int:
        while True:
            value = IntPrompt.ask(f"Your rating (1-{max_rating})", console=self._console)
            if 1 <= value <= max_rating:
                return value
            self._console.print(f"[red]Pick a number between 1 and {max_rating}.[/red]")
