"""Shared fixtures: the legacy-site rule files and an app built from them."""

from pathlib import Path

import pytest

from rerouter.app import App
from rerouter.config import AppConfig

RULES_DIR = Path(__file__).parent / "rules"


@pytest.fixture
def rule_files() -> tuple[Path, ...]:
    """Rule files in precedence order: mappings before site."""
    return (RULES_DIR / "mappings.yaml", RULES_DIR / "site.yaml")


@pytest.fixture
def legacy_app(rule_files: tuple[Path, ...]) -> App:
    return App(AppConfig(rule_files=rule_files))
