"""Immutable HTTP request.

Only the metadata the rewrite layer and fallback handlers need:
method, path, host, headers, query string. The body is never read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from rerouter._internal.hosts import normalize_host
from rerouter._internal.paths import scope_path
from rerouter.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``host`` is resolved once in ``from_asgi``: the ``Host`` header,
    or the first ``X-Forwarded-Host`` entry when the app trusts proxies.
    It is ``None`` when the client sent no host at all.

    ``path`` stays percent-encoded (taken from ``raw_path`` when the
    server provides it), so it can be copied into a URL as is.
    """

    method: str
    path: str
    host: str | None
    headers: Headers
    query: str = ""
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    @property
    def url(self) -> str:
        """Request path plus query string."""
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path

    @classmethod
    def from_asgi(
        cls,
        scope: dict[str, Any],
        *,
        trust_forwarded_host: bool = False,
    ) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        headers = Headers(tuple(scope.get("headers", ())))
        host: str | None = None
        if trust_forwarded_host:
            forwarded = headers.get("x-forwarded-host")
            if forwarded:
                host = normalize_host(forwarded.split(",")[0])
        if host is None:
            host = normalize_host(headers.get("host"))
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope_path(scope),
            host=host,
            headers=headers,
            query=scope.get("query_string", b"").decode("latin-1"),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
