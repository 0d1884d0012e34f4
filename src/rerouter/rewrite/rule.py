"""Rule records and the request target they are evaluated against."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from urllib.parse import urlsplit

from rerouter._internal.hosts import normalize_host
from rerouter.rewrite.pattern import HostPattern, PathPattern, TargetTemplate


class RedirectStatus(IntEnum):
    """Redirect status a rule emits."""

    PERMANENT = 301
    TEMPORARY = 302

    @classmethod
    def parse(cls, value: object) -> RedirectStatus:
        """Accept ``301``/``302`` (int or string) or ``permanent``/``temporary``."""
        if isinstance(value, bool):
            raise ValueError(f"invalid status {value!r}")
        if isinstance(value, str):
            text = value.strip().lower()
            if text in ("permanent", "temporary"):
                return cls[text.upper()]
            if text.isdecimal():
                value = int(text)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                pass
        raise ValueError(f"invalid status {value!r} (expected 301, 302, 'permanent' or 'temporary')")


@dataclass(frozen=True, slots=True)
class Rule:
    """One matcher -> target mapping.

    ``host`` of ``None`` matches any host, including a missing one.
    """

    id: str
    path: PathPattern
    target: TargetTemplate
    status: RedirectStatus
    host: HostPattern | None = None
    keep_query: bool = False

    def apply(self, host: str | None, path: str, query: str = "") -> str | None:
        """Return the destination URL, or ``None`` if the rule does not apply."""
        if self.host is not None and not self.host.matches(host):
            return None
        captures = self.path.match(path)
        if captures is None:
            return None
        destination = self.target.render(captures)
        if self.keep_query and query:
            # The query goes before any fragment the target carries
            base, hash_, fragment = destination.partition("#")
            sep = "&" if "?" in base else "?"
            destination = f"{base}{sep}{query}{hash_}{fragment}"
        return destination


@dataclass(frozen=True, slots=True)
class RequestTarget:
    """The part of a request the engine looks at."""

    host: str | None
    path: str
    query: str = ""

    @classmethod
    def from_url(cls, url: str) -> RequestTarget:
        """Split ``http://host/path?query`` (or a bare ``/path``) into a target."""
        parts = urlsplit(url)
        return cls(
            host=normalize_host(parts.hostname),
            path=parts.path or "/",
            query=parts.query,
        )
