"""Per-substitute call router implementing the configure/call/verify cycle."""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import typing as t

from .calls import CallCollection
from .configuration import (
    ReturnConfiguration,
    ReturnConfigurations,
    WhenConfiguration,
    WhenConfigurations,
)
from .quantity import Quantity
from .specification import CallSpecification, MatchArgs
from .verifiers import CountVerifier

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .calls import MethodIdentity, RecordedCall
    from .configuration import CallAction, ReturnStrategy

logger = logging.getLogger(__name__)


class ModeKind(enum.StrEnum):
    """Discriminator for the router's one-shot modes."""

    NORMAL = "NORMAL"
    CONFIGURING_RETURN = "CONFIGURING_RETURN"
    CONFIGURING_WHEN = "CONFIGURING_WHEN"
    VERIFYING = "VERIFYING"
    CLEARING_HISTORY = "CLEARING_HISTORY"


@dc.dataclass(frozen=True, slots=True)
class Normal:
    """Record the call and answer it from the configurations."""

    kind: t.ClassVar[ModeKind] = ModeKind.NORMAL


@dc.dataclass(frozen=True, slots=True)
class ConfiguringReturn:
    """Capture the next call as the specification for ``strategy``."""

    strategy: ReturnStrategy
    kind: t.ClassVar[ModeKind] = ModeKind.CONFIGURING_RETURN


@dc.dataclass(frozen=True, slots=True)
class ConfiguringWhen:
    """Capture the next call as the specification for ``action``."""

    action: CallAction
    kind: t.ClassVar[ModeKind] = ModeKind.CONFIGURING_WHEN


@dc.dataclass(frozen=True, slots=True)
class Verifying:
    """Check the history against the next call's specification."""

    match_args: MatchArgs = MatchArgs.EXACT
    quantity: Quantity = dc.field(default_factory=lambda: Quantity.exactly(1))
    kind: t.ClassVar[ModeKind] = ModeKind.VERIFYING


@dc.dataclass(frozen=True, slots=True)
class ClearingHistory:
    """Discard the history instead of handling the next call."""

    kind: t.ClassVar[ModeKind] = ModeKind.CLEARING_HISTORY


Mode = Normal | ConfiguringReturn | ConfiguringWhen | Verifying | ClearingHistory

NORMAL: t.Final[Normal] = Normal()


class CallRouter:
    """Route every call made on one substitute.

    The router owns the substitute's call history and its return and
    side-effect configurations. Configuration and verification requests set a
    one-shot mode that decides how the *next* intercepted call is handled;
    afterwards the router always falls back to :class:`Normal`, even when
    handling the call raised.
    """

    def __init__(self, name: str | None = None) -> None:
        self.name = name or "substitute"
        self._mode: Mode = NORMAL
        self._calls = CallCollection()
        self._returns = ReturnConfigurations()
        self._whens = WhenConfigurations()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def mode(self) -> Mode:
        """Return the mode that applies to the next intercepted call."""
        return self._mode

    @property
    def history(self) -> tuple[RecordedCall, ...]:
        """Return a snapshot of every recorded call, oldest first."""
        return self._calls.snapshot()

    def __repr__(self) -> str:
        """Return a debug representation."""
        return (
            f"CallRouter(name={self.name!r}, mode={self._mode.kind}, "
            f"calls={len(self._calls)})"
        )

    # ------------------------------------------------------------------
    # Mode transitions
    # ------------------------------------------------------------------
    def _enter(self, mode: Mode) -> None:
        if not isinstance(self._mode, Normal):
            logger.warning(
                "%s: replacing pending %s mode with %s before any call was made",
                self.name,
                self._mode.kind,
                mode.kind,
            )
        logger.debug("%s: entering %s mode", self.name, mode.kind)
        self._mode = mode

    def enter_configuring_return(self, strategy: ReturnStrategy) -> None:
        """Bind *strategy* to the next call made on the substitute."""
        self._enter(ConfiguringReturn(strategy))

    def enter_configuring_when(self, action: CallAction) -> None:
        """Bind *action* to the next call made on the substitute."""
        self._enter(ConfiguringWhen(action))

    def enter_verifying(
        self,
        match_args: MatchArgs = MatchArgs.EXACT,
        quantity: Quantity | None = None,
    ) -> None:
        """Verify the next call against the history.

        Without an explicit *quantity* exactly one matching call is required.
        """
        self._enter(Verifying(match_args, quantity or Quantity.exactly(1)))

    def enter_clearing_history(self) -> None:
        """Discard the history when the next call arrives."""
        self._enter(ClearingHistory())

    def clear_received_calls(self) -> None:
        """Discard the history immediately."""
        self.enter_clearing_history()
        try:
            self._clear_history()
        finally:
            self.reset_mode()

    def reset_mode(self) -> None:
        """Drop any pending one-shot mode."""
        self._mode = NORMAL

    # ------------------------------------------------------------------
    # Call handling
    # ------------------------------------------------------------------
    def route(self, identity: MethodIdentity, args: t.Sequence[object]) -> object:
        """Handle one intercepted call and return its result."""
        mode = self._mode
        self._mode = NORMAL
        if isinstance(mode, Verifying):
            return self._verify(mode, identity, args)
        if isinstance(mode, ClearingHistory):
            self._clear_history()
            return identity.default_value()

        if isinstance(mode, ConfiguringReturn):
            spec = CallSpecification.from_call(identity, args)
            self._returns.add(ReturnConfiguration(spec, mode.strategy))
            logger.debug("%s: configured return for %s", self.name, spec.describe())
            return identity.default_value()
        if isinstance(mode, ConfiguringWhen):
            spec = CallSpecification.from_call(identity, args)
            self._whens.add(WhenConfiguration(spec, mode.action))
            logger.debug("%s: configured action for %s", self.name, spec.describe())
            return identity.default_value()
        return self._invoke(self._calls.append(identity, args))

    def _invoke(self, call: RecordedCall) -> object:
        for configuration in self._whens.matching(call):
            configuration.action(call)
        configuration = self._returns.find(call)
        if configuration is None:
            return call.identity.default_value()
        return configuration.strategy(call)

    def _verify(
        self, mode: Verifying, identity: MethodIdentity, args: t.Sequence[object]
    ) -> object:
        spec = CallSpecification.from_call(identity, args, mode.match_args)
        actual = CountVerifier(spec, mode.quantity).verify(self._calls)
        logger.debug(
            "%s: verified %s received %d time(s)", self.name, spec.describe(), actual
        )
        return identity.default_value()

    def _clear_history(self) -> None:
        logger.debug("%s: clearing %d recorded call(s)", self.name, len(self._calls))
        self._calls.clear()


__all__ = [
    "NORMAL",
    "CallRouter",
    "ClearingHistory",
    "ConfiguringReturn",
    "ConfiguringWhen",
    "Mode",
    "ModeKind",
    "Normal",
    "Verifying",
]
