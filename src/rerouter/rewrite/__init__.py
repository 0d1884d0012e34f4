"""Rewrite core — rules, rule sets, engines, and chains.

A rule maps (host pattern, path pattern) to a target URL and a redirect
status. Rule sets are compiled once and evaluated first-match-wins;
a chain consults several rule sets in an explicit order.
"""

from rerouter.rewrite.chain import RewriteChain
from rerouter.rewrite.engine import (
    PASS_THROUGH,
    MatchResult,
    PassThrough,
    Redirect,
    RequestLike,
    RewriteEngine,
)
from rerouter.rewrite.loader import load_rules, parse_rules
from rerouter.rewrite.pattern import (
    HostPattern,
    MatchKind,
    PathPattern,
    TargetTemplate,
    compile_host,
    compile_path,
    compile_target,
)
from rerouter.rewrite.rule import RedirectStatus, RequestTarget, Rule
from rerouter.rewrite.ruleset import RuleSet

__all__ = [
    "PASS_THROUGH",
    "HostPattern",
    "MatchKind",
    "MatchResult",
    "PassThrough",
    "PathPattern",
    "Redirect",
    "RedirectStatus",
    "RequestLike",
    "RequestTarget",
    "RewriteChain",
    "RewriteEngine",
    "Rule",
    "RuleSet",
    "TargetTemplate",
    "compile_host",
    "compile_path",
    "compile_target",
    "load_rules",
    "parse_rules",
]
