"""
HTTP transport for AnkiConnect.

Every action goes through ``AnkiConnectClient.invoke``: the request envelope is
serialized to JSON, POSTed to the local endpoint, and the response envelope is
unwrapped, raising ``AnkiConnectError`` when AnkiConnect reports an error.
This module uses only stdlib (urllib) to talk to AnkiConnect.
"""
from __future__ import annotations

import http.client
import json
import logging
import time
import urllib.error
import urllib.request
from typing import Any, Mapping

from ankiconnect.actions import (
    DeckActions,
    GraphicalActions,
    MediaActions,
    MiscActions,
    ModelActions,
    NoteActions,
)
from ankiconnect.config import DEFAULT_URL, MIN_VERSION, AnkiConnectConfig
from ankiconnect.envelope import build_request, decode_body, unwrap_response
from ankiconnect.errors import AnkiConnectError, AnkiConnectionError

logger = logging.getLogger(__name__)

_HEADERS = {
    "Content-Type": "application/json; charset=utf-8",
    "Accept": "application/json; charset=utf-8",
}


class AnkiConnectClient(
    MiscActions,
    DeckActions,
    ModelActions,
    NoteActions,
    MediaActions,
    GraphicalActions,
):
    """Client for a local AnkiConnect endpoint.

    Example:
        >>> client = AnkiConnectClient()
        >>> client.create_deck("Spanish")
        >>> client.deck_names()
        ['Default', 'Spanish']
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        timeout: float = 60.0,
        min_version: int = MIN_VERSION,
        api_key: str | None = None,
    ) -> None:
        self.url = url or DEFAULT_URL
        self.timeout = timeout
        self.min_version = min_version
        self.api_key = api_key
        # AnkiConnect is local; environment proxies must not intercept it
        self._opener = urllib.request.build_opener(urllib.request.ProxyHandler({}))

    @classmethod
    def from_config(cls, config: AnkiConnectConfig) -> "AnkiConnectClient":
        return cls(
            config.url,
            timeout=config.timeout,
            min_version=config.min_version,
            api_key=config.api_key,
        )

    def __repr__(self) -> str:
        return f"AnkiConnectClient(url={self.url!r}, min_version={self.min_version})"

    def build_request(self, action: str, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return build_request(action, self.min_version, params, self.api_key)

    def invoke(self, action: str, params: Mapping[str, Any] | None = None) -> Any:
        """Send one action to AnkiConnect and return its result.

        Raises:
            AnkiConnectionError: If the endpoint cannot be reached
            AnkiResponseError: If the reply is not a JSON response envelope
            AnkiConnectError: If AnkiConnect reports an error or an HTTP error status
        """
        data = json.dumps(self.build_request(action, params)).encode("utf-8")
        try:
            req = urllib.request.Request(self.url, data=data, headers=_HEADERS, method="POST")
        except ValueError as e:
            raise AnkiConnectionError(f"invalid AnkiConnect URL {self.url!r}: {e}", action) from e

        started = time.monotonic()
        try:
            with self._opener.open(req, timeout=self.timeout) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            logger.warning("AnkiConnect returned an HTTP error", extra={"action": action, "status": e.code})
            raise self._http_error(e, action) from e
        except (urllib.error.URLError, http.client.HTTPException, TimeoutError, ConnectionError) as e:
            reason = getattr(e, "reason", e)
            logger.warning("AnkiConnect unreachable", extra={"action": action, "url": self.url})
            raise AnkiConnectionError(f"cannot reach AnkiConnect at {self.url}: {reason}", action) from e

        logger.debug(
            "AnkiConnect action completed",
            extra={"action": action, "duration_ms": round((time.monotonic() - started) * 1000, 1)},
        )
        return unwrap_response(decode_body(raw, action), action)

    @staticmethod
    def _http_error(e: urllib.error.HTTPError, action: str) -> AnkiConnectError:
        try:
            body = json.loads(e.read().decode("utf-8"))
        except (UnicodeDecodeError, ValueError, OSError):
            body = None
        if isinstance(body, Mapping) and body.get("error"):
            return AnkiConnectError(str(body["error"]), action)
        return AnkiConnectError(f"unknown error, status code: {e.code}", action)

    def version(self) -> int:
        """Get the exposed version of AnkiConnect's API."""
        return int(self.invoke("version"))

    def check_version(self) -> bool:
        """Whether the server's API version is at least ``min_version``."""
        server_version = self.version()
        supported = server_version >= self.min_version
        if not supported:
            logger.warning(
                "AnkiConnect API version is too old",
                extra={"server_version": server_version, "min_version": self.min_version},
            )
        return supported
