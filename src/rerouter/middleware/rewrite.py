"""Rewrite middleware — the HTTP side of the rewrite engine.

Hands the request's host and path to a ``RewriteChain``. A redirect
becomes an empty-bodied 301/302 with a ``Location`` header; a
pass-through goes to the next handler untouched.
"""

from rerouter.http.request import Request
from rerouter.http.response import Response
from rerouter.middleware.protocol import Next
from rerouter.rewrite.chain import RewriteChain
from rerouter.rewrite.engine import PassThrough, Redirect, RewriteEngine


def redirect_response(result: Redirect, *, debug: bool = False) -> Response:
    """Build the HTTP response for a redirect outcome."""
    response = Response(status=int(result.status)).with_header("Location", result.url)
    if debug and result.rule_id:
        response = response.with_header("X-Rewrite-Rule", result.rule_id)
    return response


class RewriteMiddleware:
    """Redirect requests matched by a rewrite chain.

    Usage::

        chain = RewriteChain.from_files(["rules/mappings.yaml", "rules/site.yaml"])
        app.add_middleware(RewriteMiddleware(chain))

    A single ``RewriteEngine`` is accepted as a one-engine chain.
    With ``debug=True`` redirects also carry ``X-Rewrite-Rule: <rule id>``.
    """

    __slots__ = ("chain", "debug")

    def __init__(self, chain: RewriteChain | RewriteEngine, *, debug: bool = False) -> None:
        if isinstance(chain, RewriteEngine):
            chain = RewriteChain((chain,))
        self.chain = chain
        self.debug = debug

    async def __call__(self, request: Request, next: Next) -> Response:
        result = self.chain.evaluate(request)
        if isinstance(result, PassThrough):
            return await next(request)
        return redirect_response(result, debug=self.debug)
