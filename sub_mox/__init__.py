"""Python-native substitutes built around a configure-call-verify cycle.

A substitute stands in for any class. Every call on it is routed through a
:class:`~sub_mox.router.CallRouter`, which records the call and answers it
from the configured returns and side effects, or verifies the history when a
``received`` check is pending.
"""

from __future__ import annotations

from .calls import CallCollection, MethodIdentity, RecordedCall
from .comparators import ANY, Any, Exact, IsA, Items, Keywords, Predicate
from .errors import (
    ArgumentSpecificationError,
    DuplicateRegistrationError,
    NotASubstituteError,
    NullSubstituteReferenceError,
    ReceivedCallsError,
    SubMoxError,
)
from .interception import create_interceptable
from .quantity import Quantity
from .resolver import CallRouterResolver, default_resolver, reset_default_resolver
from .router import CallRouter
from .specification import CallSpecification, MatchArgs
from .substitute import (
    SubMox,
    When,
    clear_received_calls,
    did_not_receive,
    did_not_receive_with_any_args,
    raises,
    received,
    received_calls,
    received_with_any_args,
    returns,
    returns_from,
    substitute_for,
    when,
)

__all__ = [
    "ANY",
    "Any",
    "ArgumentSpecificationError",
    "CallCollection",
    "CallRouter",
    "CallRouterResolver",
    "CallSpecification",
    "DuplicateRegistrationError",
    "Exact",
    "IsA",
    "Items",
    "Keywords",
    "MatchArgs",
    "MethodIdentity",
    "NotASubstituteError",
    "NullSubstituteReferenceError",
    "Predicate",
    "Quantity",
    "ReceivedCallsError",
    "RecordedCall",
    "SubMox",
    "SubMoxError",
    "When",
    "clear_received_calls",
    "create_interceptable",
    "default_resolver",
    "did_not_receive",
    "did_not_receive_with_any_args",
    "raises",
    "received",
    "received_calls",
    "received_with_any_args",
    "reset_default_resolver",
    "returns",
    "returns_from",
    "substitute_for",
    "when",
]
