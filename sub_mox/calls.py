"""Call identities, recorded calls, and per-substitute call history."""

from __future__ import annotations

import dataclasses as dc
import itertools
import types
import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .specification import CallSpecification

_EMPTY_DEFAULTS: t.Final[dict[type, t.Callable[[], object]]] = {
    int: int,
    float: float,
    complex: complex,
    bool: bool,
    str: str,
    bytes: bytes,
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
}


def default_value_for(annotation: object) -> object:
    """Return the zero/empty value for a return *annotation*.

    Unknown and ``None`` annotations produce ``None``. Generic aliases such
    as ``list[int]`` resolve through their origin type.
    """
    if annotation is None or annotation is type(None):
        return None
    origin = t.get_origin(annotation) or annotation
    if origin is t.Union or origin is types.UnionType:
        return None
    factory = _EMPTY_DEFAULTS.get(origin) if isinstance(origin, type) else None
    if factory is None:
        return None
    return factory()


@dc.dataclass(frozen=True, slots=True)
class MethodIdentity:
    """Stable identity of a substituted member.

    Equality covers the member name and its parameter names only; the return
    annotation is carried along to compute default return values.
    """

    name: str
    parameters: tuple[str, ...] = ()
    returns: object = dc.field(default=None, compare=False, hash=False, repr=False)

    @property
    def arity(self) -> int:
        """Return the number of parameters, excluding ``self``."""
        return len(self.parameters)

    def default_value(self) -> object:
        """Return the value produced when no return is configured."""
        return default_value_for(self.returns)

    def __str__(self) -> str:
        """Return ``name(param, ...)``."""
        return f"{self.name}({', '.join(self.parameters)})"


@dc.dataclass(frozen=True, slots=True)
class RecordedCall:
    """An intercepted invocation captured in a :class:`CallCollection`."""

    identity: MethodIdentity
    args: tuple[t.Any, ...]
    sequence: int

    @property
    def name(self) -> str:
        """Return the member name that was called."""
        return self.identity.name

    def arg(self, index_or_name: int | str) -> t.Any:  # noqa: ANN401 - user values
        """Return one argument by position or parameter name."""
        if isinstance(index_or_name, str):
            try:
                index = self.identity.parameters.index(index_or_name)
            except ValueError:
                msg = f"{self.identity.name}() has no parameter {index_or_name!r}"
                raise KeyError(msg) from None
            return self.args[index]
        return self.args[index_or_name]

    def __repr__(self) -> str:
        """Return a call-like debug representation."""
        rendered = ", ".join(repr(arg) for arg in self.args)
        return f"{self.identity.name}({rendered})"


class CallCollection:
    """Ordered, append-only history of calls received by one substitute.

    Sequence numbers keep increasing across :meth:`clear` so that they remain
    unique for the lifetime of the collection.
    """

    def __init__(self) -> None:
        self._calls: list[RecordedCall] = []
        self._counter = itertools.count()

    def append(
        self, identity: MethodIdentity, args: t.Sequence[object]
    ) -> RecordedCall:
        """Record a call to *identity* with *args* and return the new entry."""
        call = RecordedCall(identity, tuple(args), next(self._counter))
        self._calls.append(call)
        return call

    def clear(self) -> None:
        """Discard every recorded call."""
        self._calls = []

    def snapshot(self) -> tuple[RecordedCall, ...]:
        """Return an immutable copy of the history."""
        return tuple(self._calls)

    def matching(self, specification: CallSpecification) -> list[RecordedCall]:
        """Return the calls satisfying *specification* in call order."""
        return [call for call in self._calls if specification.matches(call)]

    def for_identity(self, identity: MethodIdentity) -> list[RecordedCall]:
        """Return every call made to *identity*."""
        return [call for call in self._calls if call.identity == identity]

    def __iter__(self) -> t.Iterator[RecordedCall]:
        """Iterate over a snapshot of the history."""
        return iter(self.snapshot())

    def __len__(self) -> int:
        """Return the number of recorded calls."""
        return len(self._calls)


__all__ = [
    "CallCollection",
    "MethodIdentity",
    "RecordedCall",
    "default_value_for",
]
