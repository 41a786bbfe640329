"""Shared pytest fixtures for the tanstack-starter test suite.

Provides reusable fixtures for:
- A shared Composer (templates are read from the installed package)
- A factory for Selection objects
- Every feature combination of the catalog, for property-style tests
- A recording Rich console
"""

from __future__ import annotations

import itertools
from typing import Any

import pytest
from rich.console import Console

from tanstack_starter.config import Selection
from tanstack_starter.scaffolder import CATALOG, Composer, Composition


ALL_FEATURE_KEYS: list[str] = [feature.key for feature in CATALOG]


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def composer() -> Composer:
    """One Composer for the whole session; it holds no per-run state."""
    return Composer()


@pytest.fixture
def make_selection():
    """Factory building a ``Selection`` with sensible defaults."""

    def _make(**overrides: Any) -> Selection:
        data: dict[str, Any] = {
            "project_name": "demo",
            "package_manager": "npm",
            "features": [],
        }
        data.update(overrides)
        return Selection(**data)

    return _make


@pytest.fixture
def compose(composer: Composer, make_selection):
    """Compose straight from keyword arguments."""

    def _compose(**overrides: Any) -> Composition:
        return composer.compose(make_selection(**overrides))

    return _compose


@pytest.fixture(scope="session")
def all_feature_combinations() -> list[tuple[str, ...]]:
    """Every subset of the catalog (256 for eight features)."""
    combos: list[tuple[str, ...]] = []
    for size in range(len(ALL_FEATURE_KEYS) + 1):
        combos.extend(itertools.combinations(ALL_FEATURE_KEYS, size))
    return combos


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture
def recording_console(monkeypatch) -> Console:
    """Replace the shared console with one that records output."""
    from tanstack_starter import cli, utils

    recorder = Console(record=True, width=200, color_system=None)
    monkeypatch.setattr(utils, "console", recorder)
    monkeypatch.setattr(cli, "console", recorder)
    return recorder
