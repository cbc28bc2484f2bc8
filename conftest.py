"""Global test configuration and shared fixtures."""

from __future__ import annotations

import typing as t

import pytest

import sub_mox.resolver


@pytest.fixture(autouse=True)
def reset_default_resolver() -> t.Generator[None, None, None]:
    """Ensure a clean process-wide substitute registry between tests."""
    sub_mox.resolver.reset_default_resolver()
    yield
    sub_mox.resolver.reset_default_resolver()
