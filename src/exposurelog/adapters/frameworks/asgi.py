"""ASGI adapter for exporting stored exposures.

Provides a framework-agnostic ASGI application usable with any ASGI server
(uvicorn, hypercorn, daphne) so UI and export consumers can read exposures
without a web framework dependency.
"""

import json
import logging
from collections.abc import Callable, Coroutine
from typing import Any
from urllib.parse import parse_qs

from exposurelog.adapters.frameworks.query_params import _parse_since_param
from exposurelog.core.encoding.ndjson import encode_exposures_async
from exposurelog.core.ports import ExposureStoragePort

logger = logging.getLogger(__name__)

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]

NDJSON_CONTENT_TYPE = "application/x-ndjson"


def _parse_query_params(scope: Scope) -> dict[str, list[str]]:
    """Parse query string from ASGI scope into parameter dictionary.

    Returns an empty dict if query_string is missing or empty.
    """
    query_string = scope.get("query_string", b"").decode(errors="replace")
    return parse_qs(query_string)


async def _send_response(send: Send, status: int, content_type: str, body: str) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body as string (will be encoded to bytes).
    """
    headers = [(b"content-type", content_type.encode())]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body.encode()})


async def _handle_endpoint(
    send: Send,
    endpoint_func: Callable[[], Coroutine[Any, Any, str]],
    content_type: str,
    log_message: str,
) -> None:
    """Execute an endpoint function with error handling and send response.

    Failures are logged with traceback and answered with a 500 JSON body.
    """
    try:
        body = await endpoint_func()
    except Exception:
        logger.exception(log_message)
        error_body = json.dumps({"error": "Internal Server Error"})
        await _send_response(send, 500, "application/json", error_body)
        return
    await _send_response(send, 200, content_type, body)


def create_asgi_app(
    storage: ExposureStoragePort,
    prefix: str = "/exposures",
) -> ASGIApp:
    """Create an ASGI app exporting exposures.

    Endpoints:
        GET {prefix}?since=<epoch ms>: NDJSON, one exposure per line.
        GET {prefix}/count: JSON object ``{"count": n}``.

    Args:
        storage: Storage adapter implementing ExposureStoragePort.
        prefix: Path the exposure endpoints are mounted under.

    Returns:
        ASGI application callable.
    """
    prefix = prefix.rstrip("/")
    count_path = f"{prefix}/count"

    async def count_body() -> str:
        return json.dumps({"count": await storage.count()})

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        path = scope["path"]
        if scope.get("method", "GET") != "GET" and path in (prefix, count_path):
            await _send_response(send, 405, "text/plain", "Method Not Allowed")
        elif path == prefix:
            since = _parse_since_param(_parse_query_params(scope))
            await _handle_endpoint(
                send,
                lambda: encode_exposures_async(storage.read(since=since)),
                NDJSON_CONTENT_TYPE,
                "Error encoding exposures endpoint",
            )
        elif path == count_path:
            await _handle_endpoint(
                send,
                count_body,
                "application/json",
                "Error counting exposures",
            )
        else:
            await _send_response(send, 404, "text/plain", "Not Found")

    return app
