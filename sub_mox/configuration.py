"""Return and side-effect configurations attached to call specifications."""

from __future__ import annotations

import dataclasses as dc
import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .calls import RecordedCall
    from .specification import CallSpecification

CallAction = t.Callable[["RecordedCall"], object]


class ReturnStrategy(t.Protocol):
    """Produce the result of a configured call."""

    def __call__(self, call: RecordedCall) -> object:
        """Return a value for *call* or raise."""
        ...


@dc.dataclass(frozen=True, slots=True)
class ReturnValue:
    """Return a constant ``value``."""

    value: object

    def __call__(self, call: RecordedCall) -> object:
        """Return the configured value."""
        return self.value


class ReturnSequence:
    """Return ``values`` one per call, repeating the last one once exhausted."""

    def __init__(self, values: t.Sequence[object]) -> None:
        if not values:
            msg = "ReturnSequence requires at least one value"
            raise ValueError(msg)
        self.values = tuple(values)
        self._next = 0

    def __call__(self, call: RecordedCall) -> object:
        """Return the next value in the sequence."""
        value = self.values[self._next]
        if self._next < len(self.values) - 1:
            self._next += 1
        return value

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"ReturnSequence({list(self.values)!r})"


@dc.dataclass(frozen=True, slots=True)
class ReturnFrom:
    """Compute the result from the call with ``func``."""

    func: CallAction

    def __call__(self, call: RecordedCall) -> object:
        """Return ``func(call)``."""
        return self.func(call)


@dc.dataclass(frozen=True, slots=True)
class Raise:
    """Raise ``error`` whenever the call is made."""

    error: BaseException | type[BaseException]

    def __call__(self, call: RecordedCall) -> t.NoReturn:
        """Raise the configured error."""
        raise self.error


@dc.dataclass(frozen=True, slots=True)
class ReturnConfiguration:
    """Bind a :class:`~sub_mox.specification.CallSpecification` to a strategy."""

    specification: CallSpecification
    strategy: ReturnStrategy


@dc.dataclass(frozen=True, slots=True)
class WhenConfiguration:
    """Bind a :class:`~sub_mox.specification.CallSpecification` to an action."""

    specification: CallSpecification
    action: CallAction


class ReturnConfigurations:
    """Return configurations of one substitute; the latest match wins."""

    def __init__(self) -> None:
        self._configurations: list[ReturnConfiguration] = []

    def add(self, configuration: ReturnConfiguration) -> None:
        self._configurations.append(configuration)

    def find(self, call: RecordedCall) -> ReturnConfiguration | None:
        """Return the most recently added configuration matching *call*."""
        for configuration in reversed(self._configurations):
            if configuration.specification.matches(call):
                return configuration
        return None

    def __len__(self) -> int:
        return len(self._configurations)


class WhenConfigurations:
    """Side-effect configurations of one substitute, kept in registration order."""

    def __init__(self) -> None:
        self._configurations: list[WhenConfiguration] = []

    def add(self, configuration: WhenConfiguration) -> None:
        self._configurations.append(configuration)

    def matching(self, call: RecordedCall) -> list[WhenConfiguration]:
        """Return every configuration matching *call*, oldest first."""
        return [
            configuration
            for configuration in self._configurations
            if configuration.specification.matches(call)
        ]

    def __len__(self) -> int:
        return len(self._configurations)


__all__ = [
    "CallAction",
    "Raise",
    "ReturnConfiguration",
    "ReturnConfigurations",
    "ReturnFrom",
    "ReturnSequence",
    "ReturnStrategy",
    "ReturnValue",
    "WhenConfiguration",
    "WhenConfigurations",
]
