"""Rerouter exception hierarchy.

Shared by the rule loader, the App, the ASGI handler, and middleware so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class RerouterError(Exception):
    """Base for all rerouter-specific errors."""


class ConfigError(RerouterError):
    """Raised when a rule source or the app configuration is invalid.

    Raised by ``RuleSet.load()`` and the YAML loader, and surfaced by
    ``App._freeze()`` at startup. Never caught inside the library.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RerouterError):
    """An error that maps directly to an HTTP status code.

    Raised by fallback handlers or middleware. The ASGI handler catches
    these and turns them into a plain-text response with ``status``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — nothing downstream handles the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
