"""
Integration Fixtures.

A throwaway HTTP server on 127.0.0.1 that serves a configurable statistics
document, so the CLI can be exercised over a real socket.
"""

import json
import threading
from collections.abc import Generator
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

import pytest


@dataclass
class MockForum:
    """Response configuration and request log for the mock server."""

    base_url: str = ""
    status_code: int = 200
    body: bytes = b"{}"
    requests: list[str] = field(default_factory=list)

    def serve_json(self, payload: Any, status_code: int = 200) -> None:
        self.body = json.dumps(payload).encode("utf-8")
        self.status_code = status_code


def _handler_for(forum: MockForum) -> type[BaseHTTPRequestHandler]:
    class StatisticsHandler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:
            forum.requests.append(self.path)
            if self.path != "/site/statistics.json":
                self.send_response(404)
                self.end_headers()
                return
            self.send_response(forum.status_code)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(forum.body)))
            self.end_headers()
            self.wfile.write(forum.body)

        def log_message(self, format: str, *args: Any) -> None:
            pass

    return StatisticsHandler


@pytest.fixture
def mock_forum() -> Generator[MockForum, None, None]:
    """Run the mock forum for the duration of a test."""
    forum = MockForum()
    server = ThreadingHTTPServer(("127.0.0.1", 0), _handler_for(forum))
    host, port = server.server_address[:2]
    forum.base_url = f"http://{host}:{port}"

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield forum
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


@pytest.fixture
def unused_base_url() -> str:
    """Base URL of a port with nothing listening."""
    import socket

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"
