"""Creation of substitutes and the configure/verify helpers built on the router."""

from __future__ import annotations

import logging
import typing as t

from .configuration import Raise, ReturnFrom, ReturnSequence, ReturnValue
from .interception import create_interceptable
from .quantity import Quantity
from .resolver import CallRouterResolver, default_resolver
from .router import CallRouter
from .specification import MatchArgs

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .calls import RecordedCall
    from .configuration import CallAction, ReturnStrategy

logger = logging.getLogger(__name__)

T = t.TypeVar("T")


class When(t.Generic[T]):
    """Deferred side-effect registration returned by :meth:`SubMox.when`."""

    def __init__(
        self, router: CallRouter, substitute: T, call: t.Callable[[T], object]
    ) -> None:
        self._router = router
        self._substitute = substitute
        self._call = call

    def do(self, action: CallAction) -> None:
        """Run *action* whenever the captured call is made."""
        self._router.enter_configuring_when(action)
        try:
            self._call(self._substitute)
        finally:
            self._router.reset_mode()


class SubMox:
    """Create substitutes and configure or verify them.

    Parameters
    ----------
    resolver:
        Registry used to map substitutes to routers. Defaults to the
        process-wide resolver returned by
        :func:`~sub_mox.resolver.default_resolver`.
    """

    def __init__(self, resolver: CallRouterResolver | None = None) -> None:
        self.resolver = resolver if resolver is not None else default_resolver()
        self._routers: list[CallRouter] = []

    @property
    def routers(self) -> list[CallRouter]:
        """Return the routers of every substitute created by this instance."""
        return list(self._routers)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------
    def for_(self, contract: type[T], *, name: str | None = None) -> T:
        """Return a new substitute implementing *contract*."""
        label = name or contract.__qualname__
        router = CallRouter(label)
        instance = create_interceptable(contract, router.route, name=label)
        self.resolver.register(instance, router)
        self._routers.append(router)
        logger.debug("Created substitute for %s", label)
        return t.cast("T", instance)

    def router_for(self, substitute: object) -> CallRouter:
        """Return the router behind *substitute*."""
        return self.resolver.resolve_for(substitute)

    # ------------------------------------------------------------------
    # Return configuration
    # ------------------------------------------------------------------
    def configure(self, substitute: T, strategy: ReturnStrategy) -> T:
        """Bind *strategy* to the next call made on the returned substitute."""
        self.router_for(substitute).enter_configuring_return(strategy)
        return substitute

    def returns(self, substitute: T, value: object, *more: object) -> T:
        """Return *value* from the next captured call.

        Extra values are returned by successive calls; the last value repeats.
        """
        if more:
            return self.configure(substitute, ReturnSequence((value, *more)))
        return self.configure(substitute, ReturnValue(value))

    def returns_from(
        self, substitute: T, func: t.Callable[[RecordedCall], object]
    ) -> T:
        """Compute the result of the next captured call with *func*."""
        return self.configure(substitute, ReturnFrom(func))

    def raises(
        self, substitute: T, error: BaseException | type[BaseException]
    ) -> T:
        """Raise *error* whenever the next captured call is made."""
        return self.configure(substitute, Raise(error))

    def when(self, substitute: T, call: t.Callable[[T], object]) -> When[T]:
        """Start a side-effect registration for the call made by *call*."""
        return When(self.router_for(substitute), substitute, call)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    def _verify(self, substitute: T, match_args: MatchArgs, count: int) -> T:
        router = self.router_for(substitute)
        router.enter_verifying(match_args, Quantity.exactly(count))
        return substitute

    def received(self, substitute: T, count: int = 1) -> T:
        """Check the next call on the result was received exactly *count* times."""
        return self._verify(substitute, MatchArgs.EXACT, count)

    def did_not_receive(self, substitute: T) -> T:
        """Check the next call on the result was never received."""
        return self._verify(substitute, MatchArgs.EXACT, 0)

    def received_with_any_args(self, substitute: T, count: int = 1) -> T:
        """Like :meth:`received` but ignoring argument values."""
        return self._verify(substitute, MatchArgs.ANY, count)

    def did_not_receive_with_any_args(self, substitute: T) -> T:
        """Like :meth:`did_not_receive` but ignoring argument values."""
        return self._verify(substitute, MatchArgs.ANY, 0)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------
    def clear_received_calls(self, substitute: object) -> None:
        """Forget every call *substitute* has received."""
        self.router_for(substitute).clear_received_calls()

    def received_calls(self, substitute: object) -> tuple[RecordedCall, ...]:
        """Return every call *substitute* has received, oldest first."""
        return self.router_for(substitute).history


def _default() -> SubMox:
    return SubMox(default_resolver())


def substitute_for(contract: type[T], *, name: str | None = None) -> T:
    """Return a new substitute registered with the default resolver."""
    return _default().for_(contract, name=name)


def returns(substitute: T, value: object, *more: object) -> T:
    """See :meth:`SubMox.returns`."""
    return _default().returns(substitute, value, *more)


def returns_from(substitute: T, func: t.Callable[[RecordedCall], object]) -> T:
    """See :meth:`SubMox.returns_from`."""
    return _default().returns_from(substitute, func)


def raises(substitute: T, error: BaseException | type[BaseException]) -> T:
    """See :meth:`SubMox.raises`."""
    return _default().raises(substitute, error)


def when(substitute: T, call: t.Callable[[T], object]) -> When[T]:
    """See :meth:`SubMox.when`."""
    return _default().when(substitute, call)


def received(substitute: T, count: int = 1) -> T:
    """See :meth:`SubMox.received`."""
    return _default().received(substitute, count)


def did_not_receive(substitute: T) -> T:
    """See :meth:`SubMox.did_not_receive`."""
    return _default().did_not_receive(substitute)


def received_with_any_args(substitute: T, count: int = 1) -> T:
    """See :meth:`SubMox.received_with_any_args`."""
    return _default().received_with_any_args(substitute, count)


def did_not_receive_with_any_args(substitute: T) -> T:
    """See :meth:`SubMox.did_not_receive_with_any_args`."""
    return _default().did_not_receive_with_any_args(substitute)


def clear_received_calls(substitute: object) -> None:
    """See :meth:`SubMox.clear_received_calls`."""
    _default().clear_received_calls(substitute)


def received_calls(substitute: object) -> tuple[RecordedCall, ...]:
    """See :meth:`SubMox.received_calls`."""
    return _default().received_calls(substitute)


__all__ = [
    "SubMox",
    "When",
    "clear_received_calls",
    "did_not_receive",
    "did_not_receive_with_any_args",
    "raises",
    "received",
    "received_calls",
    "received_with_any_args",
    "returns",
    "returns_from",
    "substitute_for",
    "when",
]
