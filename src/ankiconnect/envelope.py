"""Request and response envelopes shared by every AnkiConnect action."""
from __future__ import annotations

import json
from typing import Any, Mapping

from ankiconnect.errors import AnkiConnectError, AnkiResponseError


def build_request(
    action: str,
    version: int,
    params: Mapping[str, Any] | None = None,
    key: str | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "action": action,
        "version": version,
    }
    if params:
        payload["params"] = dict(params)
    if key:
        payload["key"] = key
    return payload


def decode_body(raw: bytes, action: str) -> Any:
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        raise AnkiResponseError(f"invalid JSON in response: {e}", action) from e


def unwrap_response(envelope: Any, action: str) -> Any:
    """Return ``result`` from a response envelope or raise its ``error``."""
    if not isinstance(envelope, Mapping) or "result" not in envelope or "error" not in envelope:
        raise AnkiResponseError(f"unexpected response: {envelope!r}", action)
    if envelope["error"] is not None:
        raise AnkiConnectError(str(envelope["error"]), action)
    return envelope["result"]
