"""
Typed request and response models for AnkiConnect actions.

Python attribute names are snake_case; the camelCase names AnkiConnect expects
are declared as aliases and used when serializing with ``to_params``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _AnkiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    def to_params(self) -> Dict[str, Any]:
        """Serialize to the JSON shape AnkiConnect expects."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CardTemplate(_AnkiModel):
    """A card template of a note type."""
    name: str = Field(..., alias="Name", description="Card template name")
    front: str = Field(..., alias="Front", description="Front side template")
    back: str = Field(..., alias="Back", description="Back side template")


class ModelInput(_AnkiModel):
    """Payload for the createModel action."""
    model_name: str = Field(..., alias="modelName", min_length=1)
    in_order_fields: List[str] = Field(..., alias="inOrderFields", min_length=1)
    css: Optional[str] = Field(None, description="Optional CSS, Anki's built-in CSS when omitted")
    is_cloze: bool = Field(default=False, alias="isCloze")
    card_templates: List[CardTemplate] = Field(..., alias="cardTemplates", min_length=1)


class MediaInput(_AnkiModel):
    """A picture, audio or video file attached to a note.

    Exactly one of url, path or data (base64) must be given.
    """
    url: Optional[str] = None
    path: Optional[str] = None
    data: Optional[str] = None
    filename: str
    skip_hash: Optional[str] = Field(None, alias="skipHash", description="md5 of content to skip")
    fields: List[str] = Field(default_factory=list, description="Fields the media is appended to")

    @model_validator(mode="after")
    def _one_source(self) -> "MediaInput":
        sources = [s for s in (self.url, self.path, self.data) if s is not None]
        if len(sources) != 1:
            raise ValueError("exactly one of url, path or data must be set")
        return self


class NoteOptions(_AnkiModel):
    allow_duplicate: bool = Field(default=False, alias="allowDuplicate")
    duplicate_scope: Optional[Literal["deck", "collection"]] = Field(None, alias="duplicateScope")


class NoteInput(_AnkiModel):
    """A complete note for addNote/addNotes/canAddNotes."""
    deck_name: str = Field(..., alias="deckName")
    model_name: str = Field(..., alias="modelName")
    fields: Dict[str, str]
    options: NoteOptions = Field(default_factory=NoteOptions)
    tags: List[str] = Field(default_factory=list)
    audio: List[MediaInput] = Field(default_factory=list)
    video: List[MediaInput] = Field(default_factory=list)
    picture: List[MediaInput] = Field(default_factory=list)


class NoteUpdate(_AnkiModel):
    """New field values (and optional media) for an existing note."""
    id: int
    fields: Dict[str, str]
    audio: List[MediaInput] = Field(default_factory=list)
    video: List[MediaInput] = Field(default_factory=list)
    picture: List[MediaInput] = Field(default_factory=list)


class FieldInfo(_AnkiModel):
    value: str
    order: int


class NoteInfo(_AnkiModel):
    """A note as returned by notesInfo."""
    note_id: int = Field(..., alias="noteId")
    model_name: str = Field(..., alias="modelName")
    tags: List[str] = Field(default_factory=list)
    fields: Dict[str, FieldInfo] = Field(default_factory=dict)
    cards: List[int] = Field(default_factory=list)

    def field_values(self) -> Dict[str, str]:
        """Field values ordered as they appear on the note type."""
        ordered = sorted(self.fields.items(), key=lambda item: item[1].order)
        return {name: info.value for name, info in ordered}
