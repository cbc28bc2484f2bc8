"""Unit tests for the pytest plugin."""

from __future__ import annotations

import dataclasses as dc
import textwrap

import pytest

from sub_mox.resolver import default_resolver
from sub_mox.substitute import SubMox
from sub_mox.unittests._contracts import Engine

pytest_plugins = ("sub_mox.pytest_plugin", "pytester")


@dc.dataclass(slots=True, frozen=True)
class RegistryTestCase:
    """Configuration layers and the registry they should select."""

    ini_setting: str | None
    cli_args: tuple[str, ...]
    test_decorator: str
    expect_isolated: bool


def test_fixture_basic(sub_mox: SubMox) -> None:
    """Fixture yields a SubMox whose substitutes work end to end."""
    engine = sub_mox.for_(Engine)
    engine.rev_at(100)
    sub_mox.received(engine).rev_at(100)
    assert not default_resolver().is_substitute(engine)


@pytest.mark.sub_mox(isolated_registry=False)
def test_marker_selects_default_registry(sub_mox: SubMox) -> None:
    """The marker overrides the ini default."""
    engine = sub_mox.for_(Engine)
    assert sub_mox.resolver is default_resolver()
    assert default_resolver().is_substitute(engine)


@pytest.mark.parametrize(
    "case",
    [
        RegistryTestCase(None, (), "", expect_isolated=True),
        RegistryTestCase("false", (), "", expect_isolated=False),
        RegistryTestCase(
            "false", ("--sub-mox-isolated-registry",), "", expect_isolated=True
        ),
        RegistryTestCase(
            None, ("--no-sub-mox-isolated-registry",), "", expect_isolated=False
        ),
        RegistryTestCase(
            None,
            ("--no-sub-mox-isolated-registry",),
            "@pytest.mark.sub_mox(isolated_registry=True)",
            expect_isolated=True,
        ),
    ],
    ids=["ini-default", "ini-false", "cli-over-ini", "cli-off", "marker-over-cli"],
)
def test_registry_configuration_precedence(
    pytester: pytest.Pytester, case: RegistryTestCase
) -> None:
    """Marker > CLI > ini when choosing the registry."""
    if case.ini_setting is not None:
        pytester.makeini(
            f"""
            [pytest]
            sub_mox_isolated_registry = {case.ini_setting}
            """
        )
    pytester.makepyfile(
        textwrap.dedent(
            f"""
            import pytest

            from sub_mox.resolver import default_resolver

            pytest_plugins = ("sub_mox.pytest_plugin",)

            {case.test_decorator}
            def test_registry(sub_mox):
                isolated = sub_mox.resolver is not default_resolver()
                assert isolated is {case.expect_isolated}
            """
        )
    )
    result = pytester.runpytest(*case.cli_args)
    result.assert_outcomes(passed=1)


def test_fixture_param_overrides(pytester: pytest.Pytester) -> None:
    """Indirect fixture parameters select the registry."""
    pytester.makepyfile(
        """
        import pytest

        from sub_mox.resolver import default_resolver

        pytest_plugins = ("sub_mox.pytest_plugin",)

        @pytest.mark.parametrize("sub_mox", [False, {"isolated_registry": True}],
                                 indirect=True)
        def test_param(sub_mox, request):
            isolated = sub_mox.resolver is not default_resolver()
            assert isolated is (request.node.callspec.id != "False")

        @pytest.mark.parametrize("sub_mox", [{"other": 1}], indirect=True)
        def test_bad_param(sub_mox):
            pass
        """
    )
    result = pytester.runpytest()
    result.assert_outcomes(passed=2, errors=1)
    result.stdout.fnmatch_lines(["*must contain 'isolated_registry' key*"])


def test_unfinished_verification_fails_at_teardown(pytester: pytest.Pytester) -> None:
    """A received() request without a call is reported at teardown."""
    pytester.makepyfile(
        """
        import abc

        pytest_plugins = ("sub_mox.pytest_plugin",)

        class Engine(abc.ABC):
            @abc.abstractmethod
            def rev(self) -> None: ...

        def test_forgot_call(sub_mox):
            engine = sub_mox.for_(Engine, name="engine")
            sub_mox.received(engine)

        def test_already_failing(sub_mox):
            engine = sub_mox.for_(Engine)
            sub_mox.received(engine)
            assert False
        """
    )
    result = pytester.runpytest()
    result.assert_outcomes(passed=1, failed=1, errors=1)
    result.stdout.fnmatch_lines(
        ["*started without a call on the substitute: engine (verifying)*"]
    )
