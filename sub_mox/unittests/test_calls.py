"""Unit tests for :mod:`sub_mox.calls`."""

from __future__ import annotations

import typing as t

import pytest

from sub_mox.calls import CallCollection, MethodIdentity, default_value_for
from sub_mox.comparators import ANY
from sub_mox.specification import CallSpecification

REV_AT = MethodIdentity("rev_at", ("rpm",))
IDLE = MethodIdentity("idle")


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (None, None),
        (type(None), None),
        (int, 0),
        (float, 0.0),
        (bool, False),
        (str, ""),
        (bytes, b""),
        (list[int], []),
        (dict[str, int], {}),
        (set[str], set()),
        (frozenset[str], frozenset()),
        (tuple[int, ...], ()),
        (t.List[int], []),  # noqa: UP006 - typing alias on purpose
        (int | None, None),
        (t.Optional[str], None),  # noqa: UP007 - typing alias on purpose
        (object, None),
        ("int", None),
    ],
)
def test_default_value_for(annotation: object, expected: object) -> None:
    """Return annotations map to zero/empty defaults."""
    value = default_value_for(annotation)
    assert value == expected
    assert type(value) is type(expected)


def test_method_identity_equality_ignores_return_annotation() -> None:
    """Identity compares name and parameters only."""
    assert MethodIdentity("f", ("a",), int) == MethodIdentity("f", ("a",), str)
    assert hash(MethodIdentity("f", ("a",), int)) == hash(MethodIdentity("f", ("a",)))
    assert MethodIdentity("f", ("a",)) != MethodIdentity("f", ("b",))
    assert MethodIdentity("f", ("a",)) != MethodIdentity("g", ("a",))


def test_method_identity_arity_and_str() -> None:
    """Arity counts parameters; str renders a signature-like form."""
    identity = MethodIdentity("describe", ("value", "verbose"), str)
    assert identity.arity == 2
    assert str(identity) == "describe(value, verbose)"
    assert identity.default_value() == ""


def test_collection_appends_in_order_with_increasing_sequence() -> None:
    """Sequence numbers are unique and strictly increasing."""
    calls = CallCollection()
    first = calls.append(REV_AT, [7000])
    second = calls.append(IDLE, [])
    third = calls.append(REV_AT, (1,))

    assert [call.sequence for call in calls] == [0, 1, 2]
    assert calls.snapshot() == (first, second, third)
    assert third.args == (1,)
    assert len(calls) == 3


def test_collection_clear_keeps_sequence_increasing() -> None:
    """Clearing discards entries but never reuses sequence numbers."""
    calls = CallCollection()
    calls.append(IDLE, [])
    calls.append(IDLE, [])
    calls.clear()

    assert len(calls) == 0
    assert calls.snapshot() == ()
    assert calls.append(IDLE, []).sequence == 2


def test_snapshot_is_detached_from_later_calls() -> None:
    """Snapshots do not change when more calls arrive."""
    calls = CallCollection()
    calls.append(IDLE, [])
    snapshot = calls.snapshot()
    calls.append(IDLE, [])
    assert len(snapshot) == 1


def test_matching_and_for_identity() -> None:
    """Collections filter by specification or by identity."""
    calls = CallCollection()
    calls.append(REV_AT, [1])
    calls.append(IDLE, [])
    calls.append(REV_AT, [2])

    spec = CallSpecification.from_call(REV_AT, [2])
    assert [call.args for call in calls.matching(spec)] == [(2,)]
    assert len(calls.for_identity(REV_AT)) == 2
    any_spec = CallSpecification(REV_AT, (ANY,))
    assert len(calls.matching(any_spec)) == 2


def test_recorded_call_arg_access_and_repr() -> None:
    """Arguments are reachable by position and parameter name."""
    identity = MethodIdentity("add", ("a", "b"), int)
    call = CallCollection().append(identity, [1, "two"])

    assert call.name == "add"
    assert call.arg(0) == 1
    assert call.arg("b") == "two"
    assert repr(call) == "add(1, 'two')"
    with pytest.raises(KeyError, match="no parameter 'c'"):
        call.arg("c")
