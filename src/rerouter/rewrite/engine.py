"""Rewrite engine — ordered, first-match-wins rule evaluation.

``evaluate()`` is a pure function of (rule set, request): it performs no
I/O, keeps no per-request state, and never raises for an unmatched
request. Not matching is the ``PASS_THROUGH`` outcome.
"""

import logging
from dataclasses import dataclass, field
from typing import Final, Protocol, TypeAlias

from rerouter.rewrite.rule import RedirectStatus
from rerouter.rewrite.ruleset import RuleSet

logger = logging.getLogger("rerouter.rewrite")


class RequestLike(Protocol):
    """Anything with a host, a path, and a query string.

    Satisfied by ``RequestTarget`` and by the HTTP ``Request``.
    """

    @property
    def host(self) -> str | None: ...

    @property
    def path(self) -> str: ...

    @property
    def query(self) -> str: ...


@dataclass(frozen=True, slots=True)
class Redirect:
    """Send the client to ``url`` with ``status``.

    ``rule_id`` names the rule that fired; it is informational and does
    not take part in equality.
    """

    url: str
    status: RedirectStatus
    rule_id: str = field(default="", compare=False)


@dataclass(frozen=True, slots=True)
class PassThrough:
    """No rule matched; the request continues unmodified."""


PASS_THROUGH: Final = PassThrough()

# Outcome of evaluating a request
MatchResult: TypeAlias = Redirect | PassThrough


class RewriteEngine:
    """Evaluates one RuleSet against requests.

    Usage::

        engine = RewriteEngine(load_rules("rules/site.yaml"))
        result = engine.evaluate(RequestTarget("www.springsource.org", "/sts/welcome"))
        if isinstance(result, Redirect):
            ...
    """

    __slots__ = ("name", "ruleset")

    def __init__(self, ruleset: RuleSet, *, name: str | None = None) -> None:
        self.ruleset = ruleset
        self.name = name or ruleset.name

    def evaluate(self, request: RequestLike) -> MatchResult:
        """Return the first matching rule's redirect, or ``PASS_THROUGH``."""
        host = request.host
        path = request.path
        query = request.query
        for rule in self.ruleset.rules():
            destination = rule.apply(host, path, query)
            if destination is None:
                continue
            logger.debug(
                "%s: rule %r matched %s%s -> %d %s",
                self.name,
                rule.id,
                host or "",
                path,
                rule.status,
                destination,
            )
            return Redirect(destination, rule.status, rule_id=rule.id)
        return PASS_THROUGH

    def __repr__(self) -> str:
        return f"RewriteEngine(name={self.name!r}, rules={len(self.ruleset)})"
