"""Expected call counts for verification."""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(frozen=True, slots=True)
class Quantity:
    """An exact number of calls a verification expects."""

    count: int

    def __post_init__(self) -> None:
        """Reject counts that can never be observed."""
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            msg = "call count must be an integer"
            raise TypeError(msg)
        if self.count < 0:
            msg = "call count must be >= 0"
            raise ValueError(msg)

    @classmethod
    def exactly(cls, count: int) -> Quantity:
        """Expect exactly *count* calls."""
        return cls(count)

    @classmethod
    def none(cls) -> Quantity:
        """Expect no calls at all."""
        return cls(0)

    def matches(self, actual: int) -> bool:
        """Return ``True`` when *actual* satisfies the quantity."""
        return actual == self.count

    def describe(self) -> str:
        """Return a phrase such as ``exactly 2 calls``."""
        if self.count == 0:
            return "no calls"
        noun = "call" if self.count == 1 else "calls"
        return f"exactly {self.count} {noun}"


__all__ = ["Quantity"]
