"""Contracts substituted throughout the unit tests."""

from __future__ import annotations

import abc
import typing as t


class Engine(abc.ABC):
    """An engine with members of assorted shapes."""

    @abc.abstractmethod
    def start(self) -> None: ...

    @abc.abstractmethod
    def rev(self) -> None: ...

    @abc.abstractmethod
    def stop(self) -> None: ...

    @abc.abstractmethod
    def idle(self) -> None: ...

    @abc.abstractmethod
    def rev_at(self, rpm: int) -> None: ...

    @abc.abstractmethod
    def fill_petrol_tank_to(self, percent: int) -> None: ...

    @abc.abstractmethod
    def get_capacity_in_litres(self) -> float: ...


class Calculator(t.Protocol):
    """A protocol with return values and keyword parameters."""

    def add(self, a: int, b: int) -> int: ...

    def describe(self, value: object, *, verbose: bool = False) -> str: ...

    def history(self) -> list[int]: ...

    def lookup(self, key: str) -> Calculator | None: ...

    def total(self, *values: int) -> int: ...

    def options(self, **settings: object) -> dict[str, object]: ...


class Greeter:
    """A concrete class whose constructor requires arguments."""

    greeting = "hello"

    def __init__(self, name: str) -> None:
        self.name = name

    def greet(self, who: str = "world") -> str:
        return f"{self.greeting} {who}"

    @staticmethod
    def version() -> str:
        return "1.0"

    @property
    def shout(self) -> str:
        return self.greeting.upper()

    def _private(self) -> int:
        return 1


class Gauge(abc.ABC):
    """A contract mixing an abstract property with an abstract method."""

    @property
    @abc.abstractmethod
    def reading(self) -> float: ...

    @abc.abstractmethod
    def calibrate(self, offset: float) -> None: ...
