"""Rewrite chain — explicit precedence between rule sets.

Each engine (typically one per rule file) gets the chance to redirect a
request before the next one is consulted. The order of engines in the
chain is the precedence; nothing is inferred from load order elsewhere.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

from rerouter.rewrite.engine import PASS_THROUGH, MatchResult, PassThrough, RequestLike, RewriteEngine
from rerouter.rewrite.loader import load_rules


class RewriteChain:
    """Ordered, immutable list of rewrite engines. First redirect wins.

    Usage::

        chain = RewriteChain.from_files(["rules/mappings.yaml", "rules/site.yaml"])
        result = chain.evaluate(RequestTarget.from_url("http://springframework.io/projects/x"))
    """

    __slots__ = ("_engines",)

    def __init__(self, engines: Iterable[RewriteEngine] = ()) -> None:
        self._engines: tuple[RewriteEngine, ...] = tuple(engines)

    @classmethod
    def from_files(cls, paths: Iterable[str | Path]) -> RewriteChain:
        """Load each YAML rule file into its own engine, keeping the given order."""
        return cls(RewriteEngine(load_rules(path)) for path in paths)

    def then(self, engine: RewriteEngine) -> RewriteChain:
        """Return a new chain with *engine* consulted after the existing ones."""
        return RewriteChain((*self._engines, engine))

    @property
    def engines(self) -> tuple[RewriteEngine, ...]:
        return self._engines

    def evaluate(self, request: RequestLike) -> MatchResult:
        for engine in self._engines:
            result = engine.evaluate(request)
            if not isinstance(result, PassThrough):
                return result
        return PASS_THROUGH

    def __iter__(self) -> Iterator[RewriteEngine]:
        return iter(self._engines)

    def __len__(self) -> int:
        return len(self._engines)

    def __repr__(self) -> str:
        names = ", ".join(engine.name for engine in self._engines)
        return f"RewriteChain([{names}])"
