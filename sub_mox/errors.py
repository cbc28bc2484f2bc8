"""Custom exception types for sub-mox."""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .calls import RecordedCall
    from .quantity import Quantity
    from .specification import CallSpecification


class SubMoxError(Exception):
    """Base exception for sub-mox errors."""


class NullSubstituteReferenceError(SubMoxError):
    """Raised when ``None`` is passed where a substitute is expected."""

    DEFAULT_MESSAGE = (
        "A null reference was passed where a substitute was expected. "
        "Check the substitute was created before configuring or verifying it."
    )

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE)


class NotASubstituteError(SubMoxError):
    """Raised when an object that is not a substitute is configured or checked."""

    DEFAULT_MESSAGE = (
        "Object is not a substitute. Only substitutes created with sub-mox "
        "can be configured or verified."
    )

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE)


class DuplicateRegistrationError(SubMoxError):
    """Raised when an instance is registered with a second router."""


class ArgumentSpecificationError(SubMoxError, ValueError):
    """Raised when argument matchers disagree with a member's parameters."""


class ReceivedCallsError(SubMoxError, AssertionError):
    """Raised when a verification observes the wrong number of calls.

    The instance keeps the pieces used to build its message so callers can
    inspect the mismatch programmatically.
    """

    def __init__(
        self,
        message: str,
        *,
        specification: CallSpecification,
        quantity: Quantity,
        actual: int,
        matching: t.Sequence[RecordedCall] = (),
        related: t.Sequence[RecordedCall] = (),
    ) -> None:
        super().__init__(message)
        self.specification = specification
        self.quantity = quantity
        self.actual = actual
        self.matching = tuple(matching)
        self.related = tuple(related)


__all__ = [
    "ArgumentSpecificationError",
    "DuplicateRegistrationError",
    "NotASubstituteError",
    "NullSubstituteReferenceError",
    "ReceivedCallsError",
    "SubMoxError",
]
