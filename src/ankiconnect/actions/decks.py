from __future__ import annotations

from typing import Dict, List, Sequence

from .base import ActionMixin


class DeckActions(ActionMixin):

    def deck_names(self) -> List[str]:
        """Get the complete list of deck names for the current user."""
        return list(self.invoke("deckNames") or [])

    def deck_names_and_ids(self) -> Dict[str, int]:
        return dict(self.invoke("deckNamesAndIds") or {})

    def create_deck(self, name: str) -> int:
        """Create a new empty deck and return its id.

        An existing deck with the same name is not overwritten; its id is returned.
        """
        return int(self.invoke("createDeck", {"deck": name}))

    def delete_decks(self, names: Sequence[str], cards_too: bool = True) -> None:
        """Delete decks with the given names, together with their cards."""
        if not names:
            return
        self.invoke("deleteDecks", {"decks": list(names), "cardsToo": cards_too})

    def change_deck(self, card_ids: Sequence[int], deck: str) -> None:
        """Move cards to a deck, creating the deck if needed."""
        self.invoke("changeDeck", {"cards": list(card_ids), "deck": deck})

    def get_decks(self, card_ids: Sequence[int]) -> Dict[str, List[int]]:
        """Map deck names to the given card ids they contain."""
        return dict(self.invoke("getDecks", {"cards": list(card_ids)}) or {})
