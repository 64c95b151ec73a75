"""JSON-over-HTTP front end of the log service."""

from __future__ import annotations

import json
import re
import ssl
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, urlsplit

from logly.core import Logly
from logly.store import StoreError

INDEX_MESSAGE = "Hello, this is Logly"
_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)

Response = tuple[int, bytes]


def _encode(payload: dict) -> bytes:
    return (json.dumps(payload, separators=(",", ":"), ensure_ascii=False) + "\n").encode("utf-8")


def _decode_object(body: bytes) -> dict:
    value = json.loads(body)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError("request body must be a JSON object")
    return value


def _first(values: Sequence[str] | str) -> str:
    if isinstance(values, str):
        return values
    return values[0] if values else ""


def _parse_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid id {text!r}")
    return int(text)


@dataclass
class HttpError:
    """Body sent back with a failed request."""

    error: str
    time: datetime = field(default_factory=lambda: datetime.now().astimezone())

    def to_dict(self) -> dict:
        return {"error": self.error, "time": self.time.isoformat()}

    def encode(self) -> bytes:
        return _encode(self.to_dict())


class HttpServer:
    """Request handlers returning a status code and a JSON body."""

    def __init__(self, logly: Logly) -> None:
        self.logly = logly

    def _fail(self, exc: Exception) -> Response:
        self.logly.logger.error("%s", exc)
        return HTTPStatus.BAD_REQUEST, HttpError(str(exc)).encode()

    def handle_append(self, body: bytes) -> Response:
        """Append the ``data`` field of a JSON body; answer with the new id."""
        try:
            request = _decode_object(body)
            data = request.get("data")
            if data is None:
                data = ""
            if not isinstance(data, str):
                raise ValueError("field data must be a string")
            record_id = self.logly.append(data)
        except (ValueError, StoreError) as exc:
            return self._fail(exc)
        return HTTPStatus.OK, _encode({"id": record_id})

    def handle_fetch(self, query: Mapping[str, Sequence[str] | str], body: bytes) -> Response:
        """Fetch by the ``id`` query parameter, or else by the ``id`` field of the body."""
        try:
            if "id" in query:
                record_id = _parse_int(_first(query["id"]))
            else:
                request = _decode_object(body)
                record_id = request.get("id")
                if record_id is None:
                    record_id = 0
                if isinstance(record_id, bool) or not isinstance(record_id, int) or record_id < 0:
                    raise ValueError("field id must be a non-negative integer")
            record = self.logly.fetch(record_id)
        except (ValueError, StoreError) as exc:
            return self._fail(exc)
        return HTTPStatus.OK, _encode({"data": record.data})

    def handle_index(self) -> Response:
        return HTTPStatus.OK, _encode({"message": INDEX_MESSAGE})


def make_handler(server: HttpServer) -> type[BaseHTTPRequestHandler]:
    """A request handler class routing /append, /fetch and everything else to the index."""

    class _Handler(BaseHTTPRequestHandler):
        def _read_body(self) -> bytes:
            try:
                length = int(self.headers.get("Content-Length") or 0)
            except ValueError:
                length = 0
            return self.rfile.read(length) if length > 0 else b""

        def _dispatch(self) -> None:
            url = urlsplit(self.path)
            body = self._read_body()
            if url.path == "/append":
                status, payload = server.handle_append(body)
            elif url.path == "/fetch":
                query = parse_qs(url.query, keep_blank_values=True)
                status, payload = server.handle_fetch(query, body)
            else:
                status, payload = server.handle_index()
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        do_GET = do_POST = do_PUT = do_PATCH = do_DELETE = _dispatch

        def log_message(self, format, *args) -> None:  # noqa: A002
            server.logly.logger.debug("%s - %s", self.address_string(), format % args)

    return _Handler


def serve(logly: Logly, address: tuple[str, int], cert_file: str, key_file: str) -> None:
    """Serve the HTTP API over TLS until interrupted."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(cert_file, key_file)
    with ThreadingHTTPServer(address, make_handler(HttpServer(logly))) as httpd:
        httpd.socket = context.wrap_socket(httpd.socket, server_side=True)
        logly.logger.info("started HTTP secure server on port %d", httpd.server_address[1])
        httpd.serve_forever()