"""Shared fixtures: fake credentials and a local HTTP server that verifies API-HMAC."""

import hashlib
import hmac
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from referral_stats.security.secrets import Credentials

TEST_KEY = "test-key"
TEST_SECRET = "test-secret"
ECHO_DOCUMENT = {"pairs": {"BTC/BTC": {"volume": "0.5", "trades": 3}}, "referral": "pro"}


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(api_key=TEST_KEY, api_secret=TEST_SECRET)


class _VerifyingHandler(BaseHTTPRequestHandler):
    """200 + ECHO_DOCUMENT when the HMAC headers verify, 401 otherwise; /bad returns non-JSON."""

    def do_GET(self):
        self.server.seen.append({"path": self.path, "headers": dict(self.headers)})
        ts = self.headers.get("TS", "")
        message = f"{ts}GET{self.path}".encode()
        expected = hmac.new(TEST_SECRET.encode(), message, hashlib.sha256).hexdigest()
        ok = self.headers.get("API-KEY") == TEST_KEY and hmac.compare_digest(
            self.headers.get("API-HMAC", ""), expected
        )
        if not ok:
            self._reply(401, b'{"error":"invalid signature"}')
        elif self.path == "/bad":
            self._reply(200, b"<html>not json</html>")
        else:
            self._reply(200, json.dumps(ECHO_DOCUMENT).encode())

    def _reply(self, status: int, body: bytes) -> None:
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def verifying_server():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _VerifyingHandler)
    server.seen = []
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def endpoint(verifying_server) -> str:
    host, port = verifying_server.server_address[:2]
    return f"http://{host}:{port}"
