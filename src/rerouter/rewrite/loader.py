"""YAML rule files.

A rule file is a versioned document with an ordered ``rules`` list::

    version: 1
    rules:
      - id: blog-assets
        host: blog.springsource.org
        path: /wp-content/
        match: prefix
        to: http://wp.springframework.io/wp-content/$1
        status: temporary

Rule order in the file is evaluation order.
"""

import logging
from pathlib import Path

import yaml

from rerouter.errors import ConfigError
from rerouter.rewrite.ruleset import RuleSet

logger = logging.getLogger("rerouter.rules")

_SUPPORTED_VERSION = 1


def parse_rules(text: str, *, name: str = "rules", origin: str | None = None) -> RuleSet:
    """Parse a YAML rule document.

    Raises:
        ConfigError: If the YAML is malformed, the version is missing or
            unsupported, or any rule is invalid.
    """
    where = origin or name
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"{where}: invalid YAML: {exc}") from exc

    if not isinstance(document, dict):
        raise ConfigError(
            f"{where}: expected a mapping with 'version' and 'rules', "
            f"got {type(document).__name__}"
        )

    version = document.get("version")
    if version != _SUPPORTED_VERSION:
        raise ConfigError(
            f"{where}: unsupported rules version {version!r} (expected {_SUPPORTED_VERSION})"
        )

    unknown = sorted(set(document) - {"version", "rules"})
    if unknown:
        raise ConfigError(f"{where}: unknown top-level keys: {', '.join(map(str, unknown))}")

    rules = document.get("rules")
    if rules is None:
        raise ConfigError(f"{where}: missing 'rules' list")

    return RuleSet.load(rules, name=name, origin=origin)


def load_rules(path: str | Path, *, name: str | None = None) -> RuleSet:
    """Load a YAML rule file. The rule set is named after the file stem by default."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read rule file {path}: {exc}") from exc

    ruleset = parse_rules(text, name=name or path.stem, origin=str(path))
    logger.info("Loaded %d rules from %s", len(ruleset), path)
    return ruleset
