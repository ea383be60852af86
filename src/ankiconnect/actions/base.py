from __future__ import annotations

from typing import Any, Mapping


class ActionMixin:
    """Base for groups of AnkiConnect actions; the client supplies ``invoke`` and ``min_version``."""

    min_version: int

    def invoke(self, action: str, params: Mapping[str, Any] | None = None) -> Any:
        raise NotImplementedError
