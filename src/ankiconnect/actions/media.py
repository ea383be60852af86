from __future__ import annotations

import base64
from typing import Any, Dict, List, Optional

from .base import ActionMixin


class MediaActions(ActionMixin):

    def get_media_files_names(self, pattern: str = "*") -> List[str]:
        """List media file names in the collection matching a glob pattern."""
        return list(self.invoke("getMediaFilesNames", {"pattern": pattern}) or [])

    def store_media_file(
        self,
        filename: str,
        data: bytes | None = None,
        *,
        path: str | None = None,
        url: str | None = None,
        delete_existing: bool = True,
    ) -> str:
        """Store a file in Anki's media folder.

        Exactly one source must be given: raw ``data`` (base64 encoded before sending),
        an absolute local ``path``, or a ``url`` AnkiConnect downloads from.

        Returns:
            The filename the media was stored under; Anki may rename it
        """
        params: Dict[str, Any] = {"filename": filename, "deleteExisting": delete_existing}
        sources = 0
        if data is not None:
            params["data"] = base64.b64encode(data).decode("ascii")
            sources += 1
        if path is not None:
            params["path"] = path
            sources += 1
        if url is not None:
            params["url"] = url
            sources += 1
        if sources != 1:
            raise ValueError("exactly one of data, path or url must be given")
        stored = self.invoke("storeMediaFile", params)
        return stored if isinstance(stored, str) else filename

    def retrieve_media_file(self, filename: str) -> Optional[bytes]:
        """Return the file's content, or None if it doesn't exist."""
        encoded = self.invoke("retrieveMediaFile", {"filename": filename})
        if encoded is False or encoded is None:
            return None
        return base64.b64decode(encoded)

    def delete_media_file(self, filename: str) -> None:
        self.invoke("deleteMediaFile", {"filename": filename})

    def get_media_dir_path(self) -> str:
        return str(self.invoke("getMediaDirPath"))
