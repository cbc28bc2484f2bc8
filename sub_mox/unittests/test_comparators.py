"""Unit tests for argument matchers."""

from __future__ import annotations

import typing as t

import pytest

from sub_mox.comparators import (
    ANY,
    Any,
    Exact,
    IsA,
    Items,
    Keywords,
    Predicate,
    as_matcher,
    is_matcher,
)


@pytest.mark.parametrize(
    ("matcher", "good", "bad", "expected_repr"),
    [
        (Exact(7000), 7000, 7002, "7000"),
        (Exact("rpm"), "rpm", "RPM", "'rpm'"),
        (IsA(int), 42, "42", "IsA(int)"),
        (IsA((int, str)), "42", 4.2, "IsA((int, str))"),
    ],
)
def test_matchers_match_and_repr(
    matcher: t.Callable[[object], bool],
    good: object,
    bad: object,
    expected_repr: str,
) -> None:
    """Matchers evaluate values and provide helpful reprs."""
    assert matcher(good)
    assert not matcher(bad)
    assert repr(matcher) == expected_repr


@pytest.mark.parametrize("value", [None, 0, "", [], object()])
def test_any_matches_everything(value: object) -> None:
    """Any accepts every value, including falsy ones."""
    assert Any().matches(value)
    assert ANY(value)
    assert repr(ANY) == "Any()"


def test_exact_uses_value_equality() -> None:
    """Exact compares by value rather than identity."""
    assert Exact([1, 2, {"a": 3}]).matches([1, 2, {"a": 3}])
    assert Exact(1).matches(1.0)
    assert not Exact((1, 2)).matches([1, 2])


def test_exact_matches_identical_objects_without_eq() -> None:
    """An object always matches itself."""

    class Opaque:
        def __eq__(self, other: object) -> bool:
            return False

        __hash__ = object.__hash__

    value = Opaque()
    assert Exact(value).matches(value)
    assert not Exact(value).matches(Opaque())


def test_predicate_matches_and_repr() -> None:
    """Predicate delegates to the provided function."""
    matcher = Predicate(str.isupper)
    assert matcher("HELLO")
    assert not matcher("hi")
    assert repr(matcher) == "Predicate(str.isupper)"


def test_predicate_non_boolean_return() -> None:
    """Predicate coerces the function result to bool."""
    assert Predicate(lambda _: "not a bool").matches("anything") is True
    assert Predicate(lambda _: "").matches("anything") is False


def test_predicate_raises_exception() -> None:
    """Predicate propagates exceptions from the wrapped function."""

    def raises_exc(_: object) -> bool:
        msg = "Test exception"
        raise ValueError(msg)

    with pytest.raises(ValueError, match="Test exception"):
        Predicate(raises_exc).matches("anything")


def test_as_matcher_wraps_plain_values() -> None:
    """Plain values become Exact matchers; matchers pass through."""
    wrapped = as_matcher(5)
    assert isinstance(wrapped, Exact)
    assert wrapped.expected == 5
    assert as_matcher(ANY) is ANY
    predicate = Predicate(bool)
    assert as_matcher(predicate) is predicate


def test_is_matcher() -> None:
    """Only sub-mox matchers are recognised as matchers."""
    assert is_matcher(ANY)
    assert is_matcher(IsA(int))
    assert not is_matcher(len)
    assert not is_matcher("Any()")


def test_items_match_element_by_element() -> None:
    """Variadic positional values are matched item by item."""
    matcher = Items((1, ANY))
    assert matcher((1, 2))
    assert matcher((1, "x"))
    assert not matcher((2, 2))
    assert not matcher((1,))
    assert not matcher((1, 2, 3))
    assert not matcher([1, 2])
    assert repr(matcher) == "(1, Any())"
    assert repr(Items((ANY,))) == "(Any(),)"


def test_keywords_match_key_by_key() -> None:
    """Variadic keyword values need the same keys and matching values."""
    matcher = Keywords({"mode": ANY, "level": 3})
    assert matcher({"mode": "fast", "level": 3})
    assert not matcher({"mode": "fast", "level": 4})
    assert not matcher({"mode": "fast"})
    assert not matcher({"mode": "fast", "level": 3, "extra": 1})
    assert repr(matcher) == "{'mode': Any(), 'level': 3}"
