"""ankiconnect package.

Typed client for AnkiConnect, the local HTTP/JSON API of the Anki flashcard application:
- AnkiConnectClient: decks, note types, notes, media, profiles and GUI actions
- sync_notes: idempotent upload of dataclass cards to a deck
"""
from .client import AnkiConnectClient
from .config import AnkiConnectConfig, load_config
from .errors import AnkiConnectError, AnkiConnectionError, AnkiResponseError
from .schemas import (
    CardTemplate,
    FieldInfo,
    MediaInput,
    ModelInput,
    NoteInfo,
    NoteInput,
    NoteOptions,
    NoteUpdate,
)
from .sync import SyncResult, anki_id, sync_notes

__all__ = [
    "AnkiConnectClient",
    "AnkiConnectConfig",
    "load_config",
    "AnkiConnectError",
    "AnkiConnectionError",
    "AnkiResponseError",
    "CardTemplate",
    "FieldInfo",
    "MediaInput",
    "ModelInput",
    "NoteInfo",
    "NoteInput",
    "NoteOptions",
    "NoteUpdate",
    "SyncResult",
    "anki_id",
    "sync_notes",
]
