from __future__ import annotations

from typing import List

from .base import ActionMixin


class GraphicalActions(ActionMixin):

    def gui_exit_anki(self) -> None:
        """Schedule a request to gracefully close Anki.

        The operation is asynchronous: it returns immediately and does not
        wait until the Anki process actually terminates.
        """
        self.invoke("guiExitAnki")

    exit = gui_exit_anki

    def gui_browse(self, query: str) -> List[int]:
        """Open the Card Browser with a search query; returns the matching card ids."""
        return list(self.invoke("guiBrowse", {"query": query}) or [])

    def gui_deck_overview(self, name: str) -> bool:
        return bool(self.invoke("guiDeckOverview", {"name": name}))
