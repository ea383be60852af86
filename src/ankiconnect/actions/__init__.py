"""Groups of AnkiConnect actions, combined into ``AnkiConnectClient``."""
from .decks import DeckActions
from .graphical import GraphicalActions
from .media import MediaActions
from .misc import MiscActions
from .models import ModelActions
from .notes import NoteActions

__all__ = [
    "DeckActions",
    "GraphicalActions",
    "MediaActions",
    "MiscActions",
    "ModelActions",
    "NoteActions",
]
