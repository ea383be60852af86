from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ankiconnect.errors import AnkiConnectError
from ankiconnect.schemas import NoteInfo, NoteInput, NoteUpdate

from .base import ActionMixin


def _note_params(note: NoteInput | Mapping[str, Any]) -> dict:
    if not isinstance(note, NoteInput):
        note = NoteInput.model_validate(note)
    return note.to_params()


def _tag_string(tags: Iterable[str] | str) -> str:
    if isinstance(tags, str):
        return tags
    return " ".join(tags)


class NoteActions(ActionMixin):

    def find_notes(self, query: str) -> List[int]:
        """Return note ids matching an Anki search query.

        Query syntax: https://docs.ankiweb.net/searching.html
        """
        return list(self.invoke("findNotes", {"query": query}) or [])

    def notes_info(self, note_ids: Sequence[int]) -> List[NoteInfo]:
        """Return information for each given note id.

        Ids that no longer exist are left out of the result.
        """
        if not note_ids:
            return []
        raw = self.invoke("notesInfo", {"notes": list(note_ids)}) or []
        return [NoteInfo.model_validate(item) for item in raw if item]

    def add_note(self, note: NoteInput | Mapping[str, Any]) -> int:
        """Create a note and return its id.

        Raises:
            AnkiConnectError: If the note couldn't be created
        """
        note_id = self.invoke("addNote", {"note": _note_params(note)})
        if note_id is None:
            raise AnkiConnectError("note could not be created", "addNote")
        return int(note_id)

    def add_notes(self, notes: Sequence[NoteInput | Mapping[str, Any]]) -> List[Optional[int]]:
        """Create several notes.

        Returns:
            One entry per input note: the new note id, or None if that note couldn't be created
        """
        if not notes:
            return []
        result = self.invoke("addNotes", {"notes": [_note_params(n) for n in notes]}) or []
        return [None if note_id is None else int(note_id) for note_id in result]

    def can_add_notes(self, notes: Sequence[NoteInput | Mapping[str, Any]]) -> List[bool]:
        if not notes:
            return []
        return [bool(ok) for ok in self.invoke("canAddNotes", {"notes": [_note_params(n) for n in notes]}) or []]

    def update_note_fields(self, note: NoteUpdate | Mapping[str, Any]) -> None:
        """Modify the fields of an existing note; media may be attached."""
        if not isinstance(note, NoteUpdate):
            note = NoteUpdate.model_validate(note)
        self.invoke("updateNoteFields", {"note": note.to_params()})

    def delete_notes(self, note_ids: Sequence[int]) -> None:
        """Delete notes; all cards of a deleted note are deleted too."""
        if not note_ids:
            return
        self.invoke("deleteNotes", {"notes": list(note_ids)})

    def remove_empty_notes(self) -> None:
        """Delete all empty notes for the current user."""
        self.invoke("removeEmptyNotes")

    def add_tags(self, note_ids: Sequence[int], tags: Iterable[str] | str) -> None:
        self.invoke("addTags", {"notes": list(note_ids), "tags": _tag_string(tags)})

    def remove_tags(self, note_ids: Sequence[int], tags: Iterable[str] | str) -> None:
        self.invoke("removeTags", {"notes": list(note_ids), "tags": _tag_string(tags)})

    def get_tags(self) -> List[str]:
        return list(self.invoke("getTags") or [])
