"""HTTP surface of the dev server: static files, index redirect, and live-reload sessions"""

import email.utils
import mimetypes
from dataclasses import dataclass, field
from http import HTTPStatus
from pathlib import Path
from typing import Callable
from urllib.parse import unquote, urlsplit

from loguru import logger
from websockets.datastructures import Headers
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response
from websockets.sync.server import ServerConnection

from pageturtle.server.broadcast import Broadcaster


LIVE_RELOAD_PATH = "/livereload"
INDEX_PAGE = "/index.html"


@dataclass
class StaticResult:
    status:  HTTPStatus
    body:    bytes = b""
    headers: dict[str, str] = field(default_factory=dict)


def resolve_static(output_dir: Path, request_path: str) -> StaticResult:
    """Map a request path to a redirect, a file under output_dir, or not-found."""
    path = unquote(urlsplit(request_path).path)
    if path == "/":
        return StaticResult(HTTPStatus.FOUND, headers={"Location": INDEX_PAGE})

    root = output_dir.resolve()
    target = (root / path.lstrip("/")).resolve()
    if not target.is_relative_to(root) or not target.is_file():
        return StaticResult(
            HTTPStatus.NOT_FOUND, b"Not Found\n", {"Content-Type": "text/plain; charset=utf-8"},
        )

    content_type = mimetypes.guess_type(target.name)[0] or "application/octet-stream"
    if content_type.startswith("text/") or content_type.endswith(("xml", "javascript")):
        content_type += "; charset=utf-8"
    return StaticResult(HTTPStatus.OK, target.read_bytes(), {"Content-Type": content_type})


def to_response(result: StaticResult) -> Response:
    headers = Headers()
    headers["Date"] = email.utils.formatdate(usegmt=True)
    headers["Connection"] = "close"
    headers["Cache-Control"] = "no-store"
    headers["Content-Length"] = str(len(result.body))
    for name, value in result.headers.items():
        headers[name] = value
    return Response(result.status.value, result.status.phrase, headers, result.body)


def make_process_request(output_dir: Path) -> Callable[[ServerConnection, Request], Response | None]:
    """Answer plain HTTP requests directly; only the live-reload path proceeds to the upgrade."""

    def process_request(connection: ServerConnection, request: Request) -> Response | None:
        if urlsplit(request.path).path == LIVE_RELOAD_PATH:
            return None
        result = resolve_static(output_dir, request.path)
        logger.debug("{} {}", result.status.value, request.path)
        return to_response(result)

    return process_request


def relay(connection, broadcaster: Broadcaster) -> None:
    """Forward every signal to one client until a send fails."""
    with broadcaster.subscribe() as subscription:
        logger.info("Live-reload session connected ({} open)", broadcaster.subscriber_count)
        while True:
            message = subscription.get()
            if message is None:
                break
            try:
                connection.send(message)
            except (ConnectionClosed, OSError):
                break
    logger.info("Live-reload session closed ({} open)", broadcaster.subscriber_count)


def make_session_handler(broadcaster: Broadcaster) -> Callable[[ServerConnection], None]:
    def handler(connection: ServerConnection) -> None:
        relay(connection, broadcaster)

    return handler
