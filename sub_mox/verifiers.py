"""Verification helpers for :class:`~sub_mox.router.CallRouter`."""

from __future__ import annotations

import typing as t
from textwrap import indent

from .errors import ReceivedCallsError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .calls import CallCollection, RecordedCall
    from .quantity import Quantity
    from .specification import CallSpecification


def _numbered(entries: t.Sequence[str], *, start: int = 1) -> str:
    if not entries:
        return "(none)"
    return "\n".join(
        f"{index}. {entry}" for index, entry in enumerate(entries, start=start)
    )


def _format_sections(title: str, sections: list[tuple[str, str]]) -> str:
    parts = [title]
    for label, body in sections:
        if not body:
            continue
        parts.append("")
        parts.append(f"{label}:")
        parts.append(indent(body, "  "))
    return "\n".join(parts)


def _describe_count(count: int) -> str:
    if count == 0:
        return "no matching calls"
    noun = "call" if count == 1 else "calls"
    return f"{count} matching {noun}"


def _describe_calls(calls: t.Sequence[RecordedCall]) -> str:
    return _numbered([repr(call) for call in calls])


def _describe_related(
    specification: CallSpecification, calls: t.Sequence[RecordedCall]
) -> str:
    return _numbered([specification.describe_call(call) for call in calls])


class CountVerifier:
    """Check that a specification was matched the expected number of times."""

    def __init__(self, specification: CallSpecification, quantity: Quantity) -> None:
        self.specification = specification
        self.quantity = quantity

    def count(self, calls: CallCollection) -> list[RecordedCall]:
        """Return the calls in *calls* matching the specification."""
        return calls.matching(self.specification)

    def verify(self, calls: CallCollection) -> int:
        """Raise :class:`ReceivedCallsError` unless the count matches.

        Counting always runs over the complete history held by *calls*.
        Returns the observed count on success.
        """
        matching = self.count(calls)
        actual = len(matching)
        if self.quantity.matches(actual):
            return actual
        matched = {call.sequence for call in matching}
        related = [
            call
            for call in calls.for_identity(self.specification.identity)
            if call.sequence not in matched
        ]
        msg = _format_sections(
            "Received calls mismatch.",
            [
                ("Expected to receive", self.quantity.describe()),
                ("Matching", self.specification.describe()),
                ("Actually received", _describe_count(actual)),
                ("Matching calls", _describe_calls(matching) if matching else ""),
                (
                    "Non-matching calls (mismatched arguments marked with '*')",
                    _describe_related(self.specification, related)
                    if related
                    else "",
                ),
            ],
        )
        raise ReceivedCallsError(
            msg,
            specification=self.specification,
            quantity=self.quantity,
            actual=actual,
            matching=matching,
            related=related,
        )


__all__ = ["CountVerifier"]
