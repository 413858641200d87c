# tests/stack_engine/conftest.py
"""Fixtures for stack engine tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure `src` is importable when running tests from the repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def make_group():
    """Factory for StaticGroup sources built from (key, value) pairs."""
    from nicestack.stack_engine.sources import StaticGroup

    def _make(pairs):
        return StaticGroup([{"key": k, "value": v} for k, v in pairs])

    return _make


@pytest.fixture
def engine(make_group):
    """Engine with layers A=[(1,10),(2,20)] and B=[(1,5),(2,15)] over a fixed [1, 2] domain."""
    from nicestack.stack_engine import StackEngine, XDomain

    eng = StackEngine(domain=XDomain((1, 2)))
    eng.stack(make_group([(1, 10), (2, 20)]), "A")
    eng.stack(make_group([(1, 5), (2, 15)]), "B")
    return eng
