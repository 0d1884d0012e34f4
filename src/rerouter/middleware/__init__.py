"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    RewriteMiddleware -- Redirect requests matched by a rewrite chain
"""

from rerouter.middleware.protocol import Middleware, Next
from rerouter.middleware.rewrite import RewriteMiddleware, redirect_response

__all__ = [
    "Middleware",
    "Next",
    "RewriteMiddleware",
    "redirect_response",
]
