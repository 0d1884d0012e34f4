"""Ordered, immutable rule collection.

A RuleSet is built once at startup and only read afterwards, so it can be
shared by any number of concurrent requests without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from rerouter.errors import ConfigError
from rerouter.rewrite.pattern import compile_host, compile_path, compile_target
from rerouter.rewrite.rule import RedirectStatus, Rule

_RULE_KEYS = frozenset({"id", "host", "path", "match", "to", "status", "keep_query"})
_REQUIRED_KEYS = ("path", "to", "status")


def _build_rule(definition: Mapping[str, Any], default_id: str) -> Rule:
    """Compile one rule definition. Raises ``ValueError`` on bad input."""
    unknown = sorted(set(definition) - _RULE_KEYS)
    if unknown:
        raise ValueError(f"unknown keys: {', '.join(map(str, unknown))}")
    missing = [key for key in _REQUIRED_KEYS if definition.get(key) is None]
    if missing:
        raise ValueError(f"missing required field(s): {', '.join(missing)}")

    rule_id = definition.get("id", default_id)
    if not isinstance(rule_id, str) or not rule_id.strip():
        raise ValueError(f"id must be a non-empty string, got {rule_id!r}")

    host = definition.get("host")
    path = compile_path(definition["path"], definition.get("match"))
    target = compile_target(definition["to"])
    if target.max_group > path.groups:
        raise ValueError(
            f"target {target.source!r} references ${target.max_group} "
            f"but path {path.source!r} has {path.groups} group(s)"
        )

    keep_query = definition.get("keep_query", False)
    if not isinstance(keep_query, bool):
        raise ValueError(f"keep_query must be true or false, got {keep_query!r}")

    return Rule(
        id=rule_id.strip(),
        path=path,
        target=target,
        status=RedirectStatus.parse(definition["status"]),
        host=compile_host(host) if host is not None else None,
        keep_query=keep_query,
    )


class RuleSet:
    """Immutable, ordered sequence of rules. First match wins.

    Usage::

        ruleset = RuleSet.load(
            [
                {"path": "/videos", "to": "http://www.youtube.com/springsourcedev", "status": 302},
                {"host": "www.*", "path": "/", "match": "prefix",
                 "to": "http://springframework.io/$1", "status": "permanent"},
            ],
            name="site",
        )
    """

    __slots__ = ("_rules", "name")

    def __init__(self, rules: Iterable[Rule] = (), *, name: str = "rules") -> None:
        rules = tuple(rules)
        seen: set[str] = set()
        for rule in rules:
            if rule.id in seen:
                raise ConfigError(f"{name}: duplicate rule id {rule.id!r}")
            seen.add(rule.id)
        self._rules: tuple[Rule, ...] = rules
        self.name = name

    @classmethod
    def load(
        cls,
        source: Iterable[Mapping[str, Any]],
        *,
        name: str = "rules",
        origin: str | None = None,
    ) -> RuleSet:
        """Compile rule definitions into a RuleSet.

        Args:
            source: Rule definitions in evaluation order. Each is a mapping
                with ``path``, ``to`` and ``status`` and optionally ``id``,
                ``host``, ``match`` and ``keep_query``.
            name: Rule set name; also the prefix of generated rule ids.
            origin: Where the definitions came from (a file path), used in
                error messages. Defaults to *name*.

        Raises:
            ConfigError: On malformed patterns or templates, missing fields,
                unknown keys, invalid status, or duplicate rule ids.
        """
        where = origin or name
        if isinstance(source, (str, bytes, Mapping)) or not isinstance(source, Iterable):
            raise ConfigError(f"{where}: rules must be a list, got {type(source).__name__}")

        rules: list[Rule] = []
        seen: set[str] = set()
        for index, definition in enumerate(source, start=1):
            if not isinstance(definition, Mapping):
                raise ConfigError(
                    f"{where}: rule {index}: expected a mapping, got {type(definition).__name__}"
                )
            label = definition.get("id", index)
            try:
                rule = _build_rule(definition, f"{name}:{index}")
            except ValueError as exc:
                raise ConfigError(f"{where}: rule {label!r}: {exc}") from exc
            if rule.id in seen:
                raise ConfigError(f"{where}: duplicate rule id {rule.id!r}")
            seen.add(rule.id)
            rules.append(rule)
        return cls(rules, name=name)

    def rules(self) -> Iterator[Rule]:
        """Iterate rules in load order. Each call starts a fresh iterator."""
        return iter(self._rules)

    def get(self, rule_id: str) -> Rule | None:
        """Look up a rule by id."""
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        return None

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet(name={self.name!r}, rules={len(self._rules)})"
