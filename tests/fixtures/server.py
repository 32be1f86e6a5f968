"""
Local HTTP server for integration tests.

Routes:
- /echo            echoes the request body; reports what it saw in headers
- /status/<code>   answers with <code> and a short body
- /slow?seconds=N  sleeps N seconds, then answers 200
- /multi           answers with a repeated X-Multi header
"""

import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional
from urllib.parse import parse_qs, urlsplit


class EchoHandler(BaseHTTPRequestHandler):
    """Request handler behind EchoServer."""

    def _read_body(self) -> bytes:
        length = int(self.headers.get("Content-Length") or 0)
        return self.rfile.read(length) if length else b""

    def _reply(self, status: int, body: bytes, extra: Optional[list[tuple[str, str]]] = None) -> None:
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("X-Seen-Method", self.command)
        self.send_header("X-Seen-Req-Id", self.headers.get("X-Req-Id", ""))
        for key, value in extra or []:
            self.send_header(key, value)
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def _handle(self) -> None:
        parts = urlsplit(self.path)
        body = self._read_body()
        self.server.seen_request_ids.append(self.headers.get("X-Req-Id", ""))

        if parts.path == "/echo":
            content_type = self.headers.get("Content-Type", "application/octet-stream")
            self._reply(200, body, [("Content-Type", content_type)])
        elif parts.path.startswith("/status/"):
            code = int(parts.path.rsplit("/", 1)[1])
            self._reply(code, b"failure body")
        elif parts.path == "/slow":
            seconds = float(parse_qs(parts.query).get("seconds", ["2"])[0])
            time.sleep(seconds)
            self._reply(200, b"slow")
        elif parts.path == "/multi":
            self._reply(200, b"", [("X-Multi", "a"), ("X-Multi", "b")])
        else:
            self._reply(404, b"not found")

    do_GET = _handle
    do_POST = _handle
    do_PUT = _handle
    do_PATCH = _handle
    do_DELETE = _handle
    do_HEAD = _handle

    def log_message(self, format: str, *args) -> None:
        pass


class EchoServer:
    """
    Threaded echo server bound to an ephemeral localhost port.

    Usage:
        with EchoServer() as server:
            url = server.url("/echo")
    """

    def __init__(self) -> None:
        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), EchoHandler)
        self._httpd.seen_request_ids = []
        self._thread = threading.Thread(target=self._httpd.serve_forever, daemon=True)

    @property
    def seen_request_ids(self) -> list[str]:
        return self._httpd.seen_request_ids

    def url(self, path: str = "/") -> str:
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}{path}"

    def start(self) -> "EchoServer":
        self._thread.start()
        return self

    def stop(self) -> None:
        self._httpd.shutdown()
        self._httpd.server_close()

    def __enter__(self) -> "EchoServer":
        return self.start()

    def __exit__(self, *args) -> None:
        self.stop()
