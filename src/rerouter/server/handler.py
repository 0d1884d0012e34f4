"""ASGI handler — translates ASGI scope/messages to rerouter types.

The only component that touches raw ASGI HTTP messages. Converts the
scope to a Request, runs it through the middleware pipeline and the
fallback handler, and sends the Response back through ASGI send().
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeAlias

from rerouter._internal.asgi import Receive, Scope, Send
from rerouter.errors import HTTPError
from rerouter.http.request import Request
from rerouter.http.response import Response
from rerouter.middleware.protocol import Next
from rerouter.server.sender import send_response

logger = logging.getLogger("rerouter.server")

# Pass-through handler at the end of the pipeline
Fallback: TypeAlias = Callable[[Request], Any]


async def call_fallback(fallback: Fallback, request: Request) -> Response:
    """Invoke the fallback handler, sync or async.

    A ``str`` or ``bytes`` return value becomes a 200 body.
    """
    result = fallback(request)
    if inspect.isawaitable(result):
        result = await result
    if isinstance(result, Response):
        return result
    if isinstance(result, (str, bytes)):
        return Response(body=result)
    msg = f"Fallback handler returned {type(result).__name__}, expected Response, str or bytes"
    raise TypeError(msg)


def http_error_response(exc: HTTPError) -> Response:
    """Map an HTTPError to a plain-text Response."""
    response = Response(body=exc.detail or f"Error {exc.status}", status=exc.status)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    middleware: tuple[Callable[..., Any], ...],
    fallback: Fallback,
    trust_forwarded_host: bool = False,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, trust_forwarded_host=trust_forwarded_host)

    try:

        async def dispatch(req: Request) -> Response:
            return await call_fallback(fallback, req)

        # Wrap middleware around the dispatch
        handler: Next = dispatch
        for mw in reversed(middleware):

            async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> Response:
                return await _mw(req, _next)

            handler = make_next

        response = await handler(request)

    except HTTPError as exc:
        logger.debug("%d %s %s — %s", exc.status, request.method, request.url, exc.detail)
        response = http_error_response(exc)
    except Exception:
        logger.exception("500 %s %s", request.method, request.url)
        response = Response(body="Internal Server Error", status=500)

    head = request.method == "HEAD"
    try:
        await send_response(response, send, head=head)
    except UnicodeEncodeError:
        # Raised while encoding headers, before anything reached the client
        logger.exception(
            "500 %s %s — response headers are not latin-1", request.method, request.url
        )
        await send_response(Response(body="Internal Server Error", status=500), send, head=head)
