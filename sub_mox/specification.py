"""Call specifications: a member identity plus positional argument matchers."""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as t

from .comparators import ANY, Comparator, Items, Keywords, as_matcher
from .errors import ArgumentSpecificationError

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .calls import MethodIdentity, RecordedCall


class MatchArgs(enum.StrEnum):
    """How the arguments of a captured call become matchers."""

    EXACT = "exact"
    ANY = "any"


@dc.dataclass(frozen=True, slots=True)
class CallSpecification:
    """Select calls by member identity and per-argument matchers."""

    identity: MethodIdentity
    matchers: tuple[Comparator, ...]

    def __post_init__(self) -> None:
        """Ensure there is exactly one matcher per parameter."""
        if len(self.matchers) != self.identity.arity:
            msg = (
                f"{self.identity.name}() takes {self.identity.arity} argument(s) "
                f"but {len(self.matchers)} matcher(s) were given"
            )
            raise ArgumentSpecificationError(msg)

    @classmethod
    def from_call(
        cls,
        identity: MethodIdentity,
        args: t.Sequence[object],
        match_args: MatchArgs = MatchArgs.EXACT,
    ) -> CallSpecification:
        """Build a specification from the arguments of a captured call.

        With :attr:`MatchArgs.EXACT` each argument must equal the captured one,
        unless the caller passed a matcher such as :data:`~sub_mox.ANY`. The
        values collected by ``*args`` and ``**kwargs`` are matched one by one.
        With :attr:`MatchArgs.ANY` only the identity is significant.
        """
        if match_args is MatchArgs.ANY:
            return cls(identity, tuple(ANY for _ in args))
        return cls(
            identity,
            tuple(
                _matcher_for(label, arg)
                for label, arg in zip(_labels(identity, args), args, strict=True)
            ),
        )

    def matches(self, call: RecordedCall) -> bool:
        """Return ``True`` if *call* satisfies this specification."""
        if call.identity != self.identity:
            return False
        return all(
            matcher.matches(arg)
            for matcher, arg in zip(self.matchers, call.args, strict=True)
        )

    def mismatched_positions(self, call: RecordedCall) -> list[int]:
        """Return the argument positions of *call* rejected by a matcher."""
        return [
            index
            for index, (matcher, arg) in enumerate(
                zip(self.matchers, call.args, strict=True)
            )
            if not matcher.matches(arg)
        ]

    def describe(self) -> str:
        """Return ``name(matcher, ...)``."""
        rendered = ", ".join(repr(matcher) for matcher in self.matchers)
        return f"{self.identity.name}({rendered})"

    def describe_call(self, call: RecordedCall) -> str:
        """Render *call*, wrapping arguments this specification rejects in ``*``."""
        bad = set(self.mismatched_positions(call))
        parts = [
            f"*{arg!r}*" if index in bad else repr(arg)
            for index, arg in enumerate(call.args)
        ]
        return f"{call.identity.name}({', '.join(parts)})"


def _labels(identity: MethodIdentity, args: t.Sequence[object]) -> t.Sequence[str]:
    if len(args) != identity.arity:
        # Left for the arity check in ``__post_init__`` to reject.
        return ("",) * len(args)
    return identity.parameters


def _matcher_for(label: str, arg: object) -> Comparator:
    if label.startswith("**") and isinstance(arg, dict):
        return Keywords(arg)
    if label.startswith("*") and isinstance(arg, tuple):
        return Items(arg)
    return as_matcher(arg)


__all__ = ["CallSpecification", "MatchArgs"]
