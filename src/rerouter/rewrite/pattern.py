"""Host patterns, path patterns, and target templates.

Everything here is compiled once when a rule set loads and is immutable
afterwards. Compilation helpers raise ``ValueError``; ``RuleSet.load``
turns those into ``ConfigError`` with the offending rule named.

Path pattern kinds:

- ``exact``   — path equals the literal
- ``prefix``  — path starts with the literal; ``$1`` is the remainder
- ``regex``   — ``re.fullmatch`` against the whole path; groups are ``$1..$9``
- ``listing`` — literal where ``/a/b`` and ``/a/b/`` are the same path

Every kind exposes the whole matched path as ``$0``.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum

from rerouter._internal.hosts import normalize_host


class MatchKind(StrEnum):
    """How a rule's path pattern is compared with the request path."""

    EXACT = "exact"
    PREFIX = "prefix"
    REGEX = "regex"
    LISTING = "listing"


# -- Host --


@dataclass(frozen=True, slots=True)
class HostPattern:
    """Case-insensitive host matcher.

    ``www.example.com`` matches that host only. ``*`` matches any run of
    characters, so ``www.*`` matches every ``www.`` host and
    ``*.example.com`` matches every subdomain (but not ``example.com``).
    """

    source: str
    _regex: re.Pattern[str] | None = field(default=None, repr=False, compare=False)

    def matches(self, host: str | None) -> bool:
        host = normalize_host(host)
        if host is None:
            return False
        if self._regex is None:
            return host == self.source
        return self._regex.fullmatch(host) is not None


def compile_host(source: object) -> HostPattern:
    """Compile a host pattern string."""
    if not isinstance(source, str) or not source.strip():
        raise ValueError(f"host must be a non-empty string, got {source!r}")
    normalized = source.strip().lower()
    if any(ch in normalized for ch in " /?#"):
        raise ValueError(f"invalid host pattern {source!r}")
    if "*" not in normalized:
        return HostPattern(normalized.rstrip("."))
    regex = ".*".join(re.escape(part) for part in normalized.split("*"))
    return HostPattern(normalized, re.compile(regex))


# -- Path --


def _strip_slash(path: str) -> str:
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


@dataclass(frozen=True, slots=True)
class PathPattern:
    """Path matcher producing positional captures.

    ``match()`` returns ``None`` when the path does not match, else a
    tuple whose item 0 is the whole path and items 1..n are the groups.
    """

    kind: MatchKind
    source: str
    groups: int = 0
    _regex: re.Pattern[str] | None = field(default=None, repr=False, compare=False)

    def match(self, path: str) -> tuple[str, ...] | None:
        if self.kind is MatchKind.EXACT:
            return (path,) if path == self.source else None

        if self.kind is MatchKind.LISTING:
            return (path,) if _strip_slash(path) == _strip_slash(self.source) else None

        if self.kind is MatchKind.PREFIX:
            if not path.startswith(self.source):
                return None
            return (path, path[len(self.source) :])

        assert self._regex is not None
        m = self._regex.fullmatch(path)
        if m is None:
            return None
        return (m.group(0), *(group or "" for group in m.groups()))


def compile_path(source: object, kind: object = None) -> PathPattern:
    """Compile a path pattern.

    When *kind* is omitted, a pattern starting with ``^`` is a regex and
    anything else is an exact literal.
    """
    if not isinstance(source, str) or not source:
        raise ValueError(f"path must be a non-empty string, got {source!r}")

    if kind is None:
        match_kind = MatchKind.REGEX if source.startswith("^") else MatchKind.EXACT
    else:
        try:
            match_kind = MatchKind(str(kind).lower())
        except ValueError:
            allowed = ", ".join(k.value for k in MatchKind)
            raise ValueError(f"unknown match kind {kind!r} (expected one of: {allowed})") from None

    if match_kind is MatchKind.REGEX:
        try:
            regex = re.compile(source)
        except re.error as exc:
            raise ValueError(f"invalid path regex {source!r}: {exc}") from exc
        return PathPattern(match_kind, source, regex.groups, regex)

    if not source.startswith("/"):
        raise ValueError(f"{match_kind} path {source!r} must start with '/'")
    groups = 1 if match_kind is MatchKind.PREFIX else 0
    return PathPattern(match_kind, source, groups)


# -- Target --


@dataclass(frozen=True, slots=True)
class TargetTemplate:
    """Destination URL with ``$0..$9`` placeholders.

    ``$$`` is a literal dollar sign. Parsed into literal and group-index
    parts so rendering never has to re-scan the string.
    """

    source: str
    parts: tuple[str | int, ...] = ()

    @property
    def max_group(self) -> int:
        """Highest group index referenced, or -1 for a literal target."""
        return max((p for p in self.parts if isinstance(p, int)), default=-1)

    def render(self, captures: tuple[str, ...]) -> str:
        return "".join(p if isinstance(p, str) else captures[p] for p in self.parts)


def compile_target(source: object) -> TargetTemplate:
    """Parse a target template string."""
    if not isinstance(source, str) or not source.strip():
        raise ValueError(f"target must be a non-empty string, got {source!r}")

    parts: list[str | int] = []
    literal: list[str] = []
    i = 0
    while i < len(source):
        ch = source[i]
        if ch != "$":
            literal.append(ch)
            i += 1
            continue
        nxt = source[i + 1] if i + 1 < len(source) else ""
        if nxt == "$":
            literal.append("$")
        elif "0" <= nxt <= "9":
            if literal:
                parts.append("".join(literal))
                literal = []
            parts.append(int(nxt))
        else:
            raise ValueError(f"dangling '$' at offset {i} in target {source!r} (use '$$' for a literal)")
        i += 2
    if literal:
        parts.append("".join(literal))
    return TargetTemplate(source, tuple(parts))
