"""
Idempotent upload of dataclass cards to a deck through AnkiConnect.

Usage example:

from dataclasses import dataclass
from ankiconnect import AnkiConnectClient
from ankiconnect.sync import anki_id, sync_notes

@dataclass
class BasicNote:
    Front: str = anki_id()  # identity field
    Back: str = ""

cards = [
    BasicNote(Front="What is 2+2?", Back="4"),
    BasicNote(Front="Capital of France?", Back="Paris"),
]

sync_notes(AnkiConnectClient(), deck_name="My Deck", note_type="Basic", cards=cards)
"""
from __future__ import annotations

import logging
from dataclasses import field, fields as dataclass_fields, is_dataclass
from typing import Any, Dict, List, Sequence, Tuple

from ankiconnect.errors import AnkiConnectError
from ankiconnect.schemas import NoteInput, NoteOptions

logger = logging.getLogger(__name__)


def anki_id(default: Any = ""):
    """Mark a dataclass field as identity field for Anki lookups.

    Example:
        @dataclass
        class Basic:
            Front: str = anki_id()
            Back: str = ""
    """
    return field(default=default, metadata={"anki_id": True})


def escape_query_value(value: Any) -> str:
    """Quote a value for an Anki search query, escaping quotes and the wildcards * and _."""
    s = "" if value is None else str(value)
    for special in ("\\", '"', "*", "_"):
        s = s.replace(special, "\\" + special)
    return f'"{s}"'


def extract_fields_and_ids(card: Any) -> Tuple[Dict[str, Any], List[Tuple[str, Any]]]:
    """Extract all field values and the (field_name, value) pairs of identity fields."""
    if not is_dataclass(card) or isinstance(card, type):
        raise TypeError(f"Unsupported card type {type(card).__name__}: expected a dataclass instance")
    values: Dict[str, Any] = {}
    ids: List[Tuple[str, Any]] = []
    for f in dataclass_fields(card):
        val = getattr(card, f.name)
        values[f.name] = val
        if f.metadata.get("anki_id"):
            ids.append((f.name, val))
    return values, ids


def build_search_query(deck_name: str, note_type: str, ids: Sequence[Tuple[str, Any]]) -> str:
    parts = [
        f"deck:{escape_query_value(deck_name)}",
        f"note:{escape_query_value(note_type)}",
    ]
    for fname, fval in ids:
        parts.append(f"{fname}:{escape_query_value(fval)}")
    return " ".join(parts)


class SyncResult:
    def __init__(self) -> None:
        self.added: int = 0
        self.skipped_existing: int = 0
        self.failures: List[str] = []

    def __repr__(self) -> str:
        return f"SyncResult(added={self.added}, skipped_existing={self.skipped_existing}, failures={len(self.failures)})"


def sync_notes(client, deck_name: str, note_type: str, cards: Sequence[Any]) -> SyncResult:
    """Add cards that are not yet in the deck.

    - Cards are dataclass instances with one or more fields marked by anki_id().
    - Each card is looked up by deck, note type and all identity fields; a match is skipped.
      Otherwise a new note is added with allowDuplicate set, since duplicates are checked here.
    - Per-card failures are collected in the result instead of being raised.
    """
    result = SyncResult()

    try:
        client.version()
    except AnkiConnectError as e:
        logger.warning("Could not connect to AnkiConnect, skipping sync", extra={"url": client.url, "error": str(e)})
        result.failures.append(f"AnkiConnect unreachable at {client.url}")
        return result

    client.create_deck(deck_name)

    for idx, card in enumerate(cards):
        try:
            values, ids = extract_fields_and_ids(card)
            if not ids:
                raise ValueError("No ID fields provided. Use anki_id() in your dataclass to mark identity fields.")

            query = build_search_query(deck_name, note_type, ids)
            if client.find_notes(query):
                result.skipped_existing += 1
                continue

            note = NoteInput(
                deck_name=deck_name,
                model_name=note_type,
                fields={k: "" if v is None else str(v) for k, v in values.items()},
                options=NoteOptions(allow_duplicate=True),
            )
            added = client.add_notes([note])
            if not added or added[0] is None:
                raise AnkiConnectError("addNotes returned no note id", "addNotes")
            result.added += 1
        except (AnkiConnectError, TypeError, ValueError) as e:
            msg = f"Card #{idx + 1} failed: {e}"
            logger.error(msg, extra={"deck": deck_name})
            result.failures.append(msg)

    logger.info(
        "Sync finished",
        extra={
            "deck": deck_name,
            "added": result.added,
            "skipped": result.skipped_existing,
            "failures": len(result.failures),
        },
    )
    return result
