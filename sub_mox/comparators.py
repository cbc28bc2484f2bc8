"""Argument matchers used to select calls for stubbing and verification."""

from __future__ import annotations

import collections.abc as cabc
import typing as t


class Comparator(t.Protocol):
    """Callable returning ``True`` when a value matches."""

    def matches(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""
        ...

    def __call__(self, value: object) -> bool:
        """Alias for :meth:`matches`."""
        ...


class _Matcher:
    """Shared behaviour for the concrete matchers."""

    __slots__ = ()

    def matches(self, value: object) -> bool:  # pragma: no cover - abstract
        raise NotImplementedError

    def __call__(self, value: object) -> bool:
        """Return ``True`` if *value* satisfies the comparison."""
        return self.matches(value)


class Exact(_Matcher):
    """Match values equal to ``expected``."""

    __slots__ = ("expected",)

    def __init__(self, expected: object) -> None:
        self.expected = expected

    def matches(self, value: object) -> bool:
        """Return ``True`` when *value* equals the expected value."""
        if value is self.expected:
            return True
        return bool(self.expected == value)

    def __repr__(self) -> str:
        """Return a debug representation."""
        return repr(self.expected)


class Any(_Matcher):
    """Match any value."""

    __slots__ = ()

    def matches(self, value: object) -> bool:
        """Return ``True`` for any input."""
        return True

    def __repr__(self) -> str:
        """Return a debug representation."""
        return "Any()"


class IsA(_Matcher):
    """Match instances of ``typ``."""

    __slots__ = ("typ",)

    def __init__(self, typ: type | tuple[type, ...]) -> None:
        self.typ = typ

    def matches(self, value: object) -> bool:
        """Return ``True`` when ``value`` is an instance of ``typ``."""
        return isinstance(value, self.typ)

    def __repr__(self) -> str:
        """Return a debug representation."""
        if isinstance(self.typ, tuple):
            names = ", ".join(typ.__name__ for typ in self.typ)
            return f"IsA(({names}))"
        return f"IsA({self.typ.__name__})"


class Predicate(_Matcher):
    """Use a custom ``func`` to determine a match.

    Exceptions raised by ``func`` propagate to the caller: a predicate that
    cannot evaluate an argument indicates a broken stub or verification.
    """

    __slots__ = ("func",)

    def __init__(self, func: t.Callable[[t.Any], object]) -> None:
        self.func = func

    def matches(self, value: object) -> bool:
        """Return ``True`` if ``func(value)`` is truthy."""
        return bool(self.func(value))

    def __repr__(self) -> str:
        """Return a debug representation."""
        name = getattr(self.func, "__qualname__", None) or repr(self.func)
        return f"Predicate({name})"


class Items(_Matcher):
    """Match the ``*args`` tuple of a call element by element."""

    __slots__ = ("matchers",)

    def __init__(self, values: cabc.Iterable[object]) -> None:
        self.matchers = tuple(as_matcher(value) for value in values)

    def matches(self, value: object) -> bool:
        """Return ``True`` for a tuple of the same length whose items all match."""
        if not isinstance(value, tuple) or len(value) != len(self.matchers):
            return False
        return all(
            matcher.matches(item)
            for matcher, item in zip(self.matchers, value, strict=True)
        )

    def __repr__(self) -> str:
        """Return a debug representation."""
        rendered = ", ".join(repr(matcher) for matcher in self.matchers)
        if len(self.matchers) == 1:
            rendered += ","
        return f"({rendered})"


class Keywords(_Matcher):
    """Match the ``**kwargs`` mapping of a call key by key."""

    __slots__ = ("matchers",)

    def __init__(self, values: cabc.Mapping[str, object]) -> None:
        self.matchers = {key: as_matcher(value) for key, value in values.items()}

    def matches(self, value: object) -> bool:
        """Return ``True`` for a mapping with the same keys whose values match."""
        if not isinstance(value, cabc.Mapping) or value.keys() != self.matchers.keys():
            return False
        return all(
            matcher.matches(value[key]) for key, matcher in self.matchers.items()
        )

    def __repr__(self) -> str:
        """Return a debug representation."""
        rendered = ", ".join(
            f"{key!r}: {matcher!r}" for key, matcher in self.matchers.items()
        )
        return f"{{{rendered}}}"


ANY: t.Final[Any] = Any()


def is_matcher(value: object) -> bool:
    """Return ``True`` when *value* is one of the argument matchers."""
    return isinstance(value, _Matcher)


def as_matcher(value: object) -> Comparator:
    """Return *value* unchanged if it is a matcher, else wrap it in :class:`Exact`."""
    if isinstance(value, _Matcher):
        return value
    return Exact(value)


__all__ = [
    "ANY",
    "Any",
    "Comparator",
    "Exact",
    "IsA",
    "Items",
    "Keywords",
    "Predicate",
    "as_matcher",
    "is_matcher",
]
