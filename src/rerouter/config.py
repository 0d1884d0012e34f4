"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(
            rule_files=("rules/mappings.yaml", "rules/site.yaml"),
            debug=True,
        )

    ``rule_files`` is the precedence order: the first file gets the first
    chance to redirect a request.
    """

    # Rules
    rule_files: tuple[str | Path, ...] = ()

    # Adds X-Rewrite-Rule to redirect responses
    debug: bool = False

    # Proxies
    trust_forwarded_host: bool = False
