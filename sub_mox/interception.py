"""Create intercepting instances that forward every member call to a callback."""

from __future__ import annotations

import dataclasses as dc
import inspect
import threading
import types
import typing as t
import weakref

from .calls import MethodIdentity

OnCall = t.Callable[[MethodIdentity, tuple[t.Any, ...]], t.Any]

_ON_CALL_ATTR: t.Final[str] = "_sub_mox_on_call"
_NAME_ATTR: t.Final[str] = "_sub_mox_name"

_classes: weakref.WeakKeyDictionary[type, weakref.ref[type]] = (
    weakref.WeakKeyDictionary()
)
_classes_lock = threading.Lock()


@dc.dataclass(frozen=True, slots=True)
class Member:
    """An interceptable member of a contract."""

    identity: MethodIdentity
    signature: inspect.Signature

    def bind(
        self, args: tuple[t.Any, ...], kwargs: dict[str, t.Any]
    ) -> tuple[t.Any, ...]:
        """Return the argument values of a call in parameter order.

        Defaults are applied so that positional and keyword spellings of the
        same call produce the same values. Calls that do not fit the
        signature raise :class:`TypeError` like the real member would.
        """
        bound = self.signature.bind(*args, **kwargs)
        bound.apply_defaults()
        return tuple(bound.arguments.values())


def _parameter_label(param: inspect.Parameter) -> str:
    if param.kind is inspect.Parameter.VAR_POSITIONAL:
        return f"*{param.name}"
    if param.kind is inspect.Parameter.VAR_KEYWORD:
        return f"**{param.name}"
    return param.name


def _return_annotation(func: t.Callable[..., t.Any]) -> object:
    try:
        hints = t.get_type_hints(func)
    except Exception:  # noqa: BLE001 - unresolvable forward references
        return None
    return hints.get("return")


def _describe_member(name: str, func: t.Callable[..., t.Any]) -> Member:
    signature = inspect.signature(func)
    params = list(signature.parameters.values())[1:]  # drop ``self``
    signature = signature.replace(parameters=params)
    identity = MethodIdentity(
        name,
        tuple(_parameter_label(param) for param in params),
        _return_annotation(func),
    )
    return Member(identity, signature)


def contract_members(contract: type) -> dict[str, Member]:
    """Return the public instance methods of *contract* keyed by name.

    Static methods, class methods, properties, and names starting with an
    underscore are left untouched.
    """
    members: dict[str, Member] = {}
    for name in dir(contract):
        if name.startswith("_"):
            continue
        raw = inspect.getattr_static(contract, name)
        if not inspect.isfunction(raw):
            continue
        members[name] = _describe_member(name, raw)
    return members


def _make_forwarder(member: Member) -> t.Callable[..., t.Any]:
    def forward(self: object, *args: t.Any, **kwargs: t.Any) -> t.Any:  # noqa: ANN401
        values = member.bind(args, kwargs)
        on_call: OnCall = object.__getattribute__(self, _ON_CALL_ATTR)
        return on_call(member.identity, values)

    forward.__name__ = member.identity.name
    forward.__qualname__ = member.identity.name
    return forward


def _substitute_repr(self: object) -> str:
    return f"<substitute {object.__getattribute__(self, _NAME_ATTR)}>"


def abstract_properties(contract: type) -> list[str]:
    """Return the public abstract properties declared by *contract*."""
    names: list[str] = []
    for name in dir(contract):
        if name.startswith("_"):
            continue
        raw = inspect.getattr_static(contract, name)
        if isinstance(raw, property) and raw.__isabstractmethod__:
            names.append(name)
    return names


def _make_unsupported_property(contract: type, name: str) -> property:
    def fget(self: object) -> t.NoReturn:
        msg = (
            f"{contract.__qualname__}.{name} is an abstract property; "
            "substitutes only intercept methods"
        )
        raise NotImplementedError(msg)

    return property(fget)


def interceptable_class(contract: type) -> type:
    """Return the generated class that intercepts calls on *contract*.

    Classes are cached per contract without keeping either alive: an entry
    lasts while some substitute of the contract still exists.
    """
    with _classes_lock:
        ref = _classes.get(contract)
        cls = ref() if ref is not None else None
        if cls is None:
            cls = _generate_class(contract)
            _classes[contract] = weakref.ref(cls)
        return cls


def _generate_class(contract: type) -> type:
    namespace: dict[str, t.Any] = {
        name: _make_forwarder(member)
        for name, member in contract_members(contract).items()
    }
    for name in abstract_properties(contract):
        namespace[name] = _make_unsupported_property(contract, name)
    namespace["__repr__"] = _substitute_repr
    namespace["__module__"] = contract.__module__
    cls = types.new_class(
        f"{contract.__name__}Substitute",
        (contract,),
        exec_body=lambda ns: ns.update(namespace),
    )
    # Every public method is overridden; the instance is never ``__init__``-ed.
    cls.__abstractmethods__ = frozenset()
    return cls


def create_interceptable(
    contract: type, on_call: OnCall, *, name: str | None = None
) -> t.Any:  # noqa: ANN401 - the instance stands in for *contract*
    """Return an instance of *contract* that routes every call to *on_call*.

    The contract's ``__init__`` is not run, so constructors with required
    arguments do not get in the way. Only public plain methods are
    intercepted: concrete properties keep the contract's behaviour and
    abstract properties raise :class:`NotImplementedError` when read.
    """
    if not isinstance(contract, type):
        msg = f"contract must be a class, got {type(contract).__name__}"
        raise TypeError(msg)
    cls = interceptable_class(contract)
    instance = object.__new__(cls)
    object.__setattr__(instance, _ON_CALL_ATTR, on_call)
    object.__setattr__(instance, _NAME_ATTR, name or contract.__qualname__)
    return instance


__all__ = [
    "Member",
    "OnCall",
    "abstract_properties",
    "contract_members",
    "create_interceptable",
    "interceptable_class",
]
