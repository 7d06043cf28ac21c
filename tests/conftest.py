"""Shared fixtures: a local stand-in server for the HTTP providers."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List

import pytest


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: Dict[str, str]
    body: bytes

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))


@dataclass
class StubResponse:
    status: int = 200
    body: str = "{}"
    content_type: str = "application/json"


class StubRequestHandler(BaseHTTPRequestHandler):
    """Record each POST and answer with the configured response."""

    def do_POST(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length else b""
        self.server.requests.append(  # type: ignore[attr-defined]
            RecordedRequest(
                method="POST",
                path=self.path,
                headers={key.lower(): value for key, value in self.headers.items()},
                body=body,
            )
        )
        response: StubResponse = self.server.response  # type: ignore[attr-defined]
        payload = response.body.encode("utf-8")
        self.send_response(response.status)
        self.send_header("Content-Type", response.content_type)
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A003 - inherited signature
        return


class StubHTTPServer(ThreadingHTTPServer):
    def __init__(self, server_address, RequestHandlerClass):
        super().__init__(server_address, RequestHandlerClass)
        self.requests: List[RecordedRequest] = []
        self.response = StubResponse()


@dataclass
class StubServer:
    """Lifecycle wrapper around the threaded stand-in server."""

    _server: StubHTTPServer = field(
        default_factory=lambda: StubHTTPServer(("127.0.0.1", 0), StubRequestHandler)
    )

    def __post_init__(self) -> None:
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def base_url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}"

    @property
    def requests(self) -> List[RecordedRequest]:
        return self._server.requests

    def respond(self, status: int = 200, body: Any = None, content_type: str = "application/json") -> None:
        text = body if isinstance(body, str) else json.dumps(body if body is not None else {})
        self._server.response = StubResponse(status=status, body=text, content_type=content_type)

    def start(self) -> None:
        self._thread.start()

    def stop(self) -> None:
        self._server.shutdown()
        self._server.server_close()
        self._thread.join(timeout=2)


@pytest.fixture
def stub_server():
    server = StubServer()
    server.start()
    try:
        yield server
    finally:
        server.stop()
