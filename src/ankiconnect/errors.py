from __future__ import annotations


class AnkiConnectError(RuntimeError):
    """AnkiConnect reported a failure for an action."""

    def __init__(self, message: str, action: str | None = None) -> None:
        self.action = action
        if action:
            message = f"AnkiConnect error on action '{action}': {message}"
        super().__init__(message)


class AnkiConnectionError(AnkiConnectError):
    """The AnkiConnect endpoint could not be reached."""


class AnkiResponseError(AnkiConnectError):
    """The reply could not be decoded as an AnkiConnect envelope."""
