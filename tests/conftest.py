"""Fixtures providing an in-process fake AnkiConnect HTTP server."""
import json
import logging
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from ankiconnect import AnkiConnectClient


class FakeAnkiConnect:
    """Records requests and answers them from canned per-action results.

    - results: action -> result value, or a callable taking the request params
    - errors: action -> error string returned in the envelope
    - raw: (status, body bytes) returned for every request when set
    - delay: seconds to wait before answering
    - content_length_padding: bytes announced in Content-Length but never sent

    Inner actions of a multi request are answered like AnkiConnect does: with an
    envelope when they carry a version of 6 or later, otherwise with the bare result.
    """

    def __init__(self) -> None:
        self.requests = []
        self.headers = []
        self.results = {"version": 6}
        self.errors = {}
        self.raw = None
        self.delay = 0.0
        self.content_length_padding = 0
        self.url = ""

    @property
    def last(self):
        return self.requests[-1]

    @property
    def actions(self):
        return [r["action"] for r in self.requests]

    def envelope(self, payload):
        action = payload["action"]
        if action in self.errors:
            return {"result": None, "error": self.errors[action]}
        if action == "multi" and "multi" not in self.results:
            return {"result": [self.inner(a) for a in payload["params"]["actions"]], "error": None}
        result = self.results.get(action)
        if callable(result):
            result = result(payload.get("params", {}))
        return {"result": result, "error": None}

    def inner(self, payload):
        envelope = self.envelope(payload)
        if payload.get("version", 4) >= 6:
            return envelope
        if envelope["error"] is not None:
            return {"result": None, "error": envelope["error"]}
        return envelope["result"]

    def respond(self, payload):
        if self.delay:
            time.sleep(self.delay)
        if self.raw is not None:
            return self.raw
        return 200, json.dumps(self.envelope(payload)).encode("utf-8")


def _make_handler(fake: FakeAnkiConnect):
    class Handler(BaseHTTPRequestHandler):
        def do_POST(self):
            length = int(self.headers.get("Content-Length", 0))
            payload = json.loads(self.rfile.read(length).decode("utf-8"))
            fake.requests.append(payload)
            fake.headers.append(dict(self.headers))
            status, body = fake.respond(payload)
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body) + fake.content_length_padding))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):
            pass

    return Handler


@pytest.fixture
def fake_anki():
    fake = FakeAnkiConnect()
    server = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(fake))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    fake.url = f"http://127.0.0.1:{server.server_address[1]}/"
    try:
        yield fake
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def client(fake_anki):
    return AnkiConnectClient(fake_anki.url, timeout=5)


@pytest.fixture
def closed_url():
    """URL of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"http://127.0.0.1:{port}/"


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    pkg_logger = logging.getLogger("ankiconnect")
    pkg_logger.handlers.clear()
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("ANKI_CONNECT_URL", raising=False)
    monkeypatch.delenv("ANKI_CONNECT_API_KEY", raising=False)
