"""Pytest plugin providing the ``sub_mox`` fixture."""

from __future__ import annotations

import logging
import typing as t

import pytest

from .resolver import CallRouterResolver, default_resolver
from .router import Normal
from .substitute import SubMox

logger = logging.getLogger(__name__)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("sub_mox")
    group.addoption(
        "--sub-mox-isolated-registry",
        action="store_true",
        dest="sub_mox_isolated_registry",
        default=None,
        help=(
            "Give each sub_mox fixture its own substitute registry. "
            "Overrides the pytest.ini setting."
        ),
    )
    group.addoption(
        "--no-sub-mox-isolated-registry",
        action="store_false",
        dest="sub_mox_isolated_registry",
        default=None,
        help=(
            "Register substitutes created by the sub_mox fixture in the "
            "process-wide registry. Overrides the pytest.ini setting."
        ),
    )
    parser.addini(
        "sub_mox_isolated_registry",
        "Give each sub_mox fixture its own substitute registry.",
        type="bool",
        default=True,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "sub_mox(isolated_registry: bool = True): override whether the "
            "sub_mox fixture uses its own substitute registry for a single test."
        ),
    )


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[t.Any]
) -> t.Generator[None, None, None]:
    """Attach the report of each phase to the item.

    Teardown uses the call-phase report to avoid masking the original failure.
    """
    del call
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


def _isolated_registry_enabled(request: pytest.FixtureRequest) -> bool:
    """Return whether the fixture should use a private registry."""
    # Priority order: marker > fixture param > CLI option > INI setting

    marker_value = _get_marker_isolated_registry(request)
    if marker_value is not None:
        return marker_value

    param_value = _get_param_isolated_registry(request)
    if param_value is not None:
        return param_value

    config = request.config
    cli_value = config.getoption("sub_mox_isolated_registry")
    if cli_value is not None:
        return bool(cli_value)

    return bool(config.getini("sub_mox_isolated_registry"))


def _get_marker_isolated_registry(request: pytest.FixtureRequest) -> bool | None:
    """Return the marker override if present."""
    marker = request.node.get_closest_marker("sub_mox")
    if marker is None or "isolated_registry" not in marker.kwargs:
        return None
    return bool(marker.kwargs["isolated_registry"])


def _get_param_isolated_registry(request: pytest.FixtureRequest) -> bool | None:
    """Return the fixture parameter override if present."""
    param = getattr(request, "param", None)
    if param is None:
        return None
    if isinstance(param, dict):
        if "isolated_registry" in param:
            return bool(param["isolated_registry"])
        keys = list(param.keys())
        msg = (
            "sub_mox fixture param dict must contain 'isolated_registry' key, "
            f"got keys: {keys}"
        )
        raise TypeError(msg)
    if isinstance(param, bool):
        return param
    msg = (
        "sub_mox fixture param must be a bool or dict with 'isolated_registry' "
        f"key, got {type(param).__name__}"
    )
    raise TypeError(msg)


@pytest.fixture
def sub_mox(request: pytest.FixtureRequest) -> t.Generator[SubMox, None, None]:
    """Provide a :class:`SubMox` for creating and checking substitutes."""
    isolated = _isolated_registry_enabled(request)
    resolver = CallRouterResolver() if isolated else default_resolver()
    mox = SubMox(resolver)
    try:
        yield mox
    except Exception:
        logger.exception("Error during sub_mox fixture setup or test execution")
        raise
    finally:
        _teardown_sub_mox(request.node, mox)


def _teardown_sub_mox(item: pytest.Item, mox: SubMox) -> None:
    """Reset every router and fail on verifications left unfinished."""
    pending = [
        f"{router.name} ({router.mode.kind.lower()})"
        for router in mox.routers
        if not isinstance(router.mode, Normal)
    ]
    for router in mox.routers:
        router.reset_mode()
    if pending and not _call_stage_failed(item):
        described = ", ".join(pending)
        logger.error("Unfinished sub_mox requests at teardown: %s", described)
        pytest.fail(
            "sub_mox: configuration or verification started without a call on "
            f"the substitute: {described}"
        )


def _call_stage_failed(item: pytest.Item) -> bool:
    """Return ``True`` when the test body has already failed."""
    rep_call = getattr(item, "rep_call", None)
    return bool(rep_call and rep_call.failed)
