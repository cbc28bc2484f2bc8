"""Small collaborators used by the runnable examples."""

from __future__ import annotations

import abc


class RateSource(abc.ABC):
    """Supplies currency exchange rates."""

    @abc.abstractmethod
    def rate(self, base: str, quote: str) -> float:
        """Return how many *quote* units one *base* unit buys."""

    @abc.abstractmethod
    def audit(self, message: str) -> None:
        """Record *message* in the audit trail."""


class Converter:
    """Convert amounts using a :class:`RateSource`."""

    def __init__(self, rates: RateSource) -> None:
        self.rates = rates

    def convert(self, amount: float, base: str, quote: str) -> float:
        if base == quote:
            return amount
        result = round(amount * self.rates.rate(base, quote), 2)
        self.rates.audit(f"{amount} {base} -> {result} {quote}")
        return result
