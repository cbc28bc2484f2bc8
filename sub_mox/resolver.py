"""Registry mapping substitutes to their call routers."""

from __future__ import annotations

import logging
import threading
import typing as t
import weakref

from .errors import (
    DuplicateRegistrationError,
    NotASubstituteError,
    NullSubstituteReferenceError,
)
from .router import CallRouter

logger = logging.getLogger(__name__)


class CallRouterResolver:
    """Translate substitute instances into their :class:`CallRouter`.

    Entries are keyed by object identity, so substitutes never need to be
    hashable, and they are dropped automatically once the substitute is
    garbage collected. Registration and lookup are serialised by a lock;
    routers themselves are meant for single-threaded use.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._routers: dict[int, CallRouter] = {}
        self._pinned: dict[int, object] = {}

    def resolve_for(self, instance: object) -> CallRouter:
        """Return the router for *instance*.

        Raises
        ------
        NullSubstituteReferenceError
            When *instance* is ``None``.
        NotASubstituteError
            When *instance* is neither registered nor a router itself.
        """
        if instance is None:
            raise NullSubstituteReferenceError
        if isinstance(instance, CallRouter):
            return instance
        with self._lock:
            router = self._routers.get(id(instance))
        if router is None:
            raise NotASubstituteError
        return router

    def register(self, instance: object, router: CallRouter) -> None:
        """Associate *instance* with *router*.

        Routers are not registered against themselves. Registering the same
        instance twice raises :class:`DuplicateRegistrationError`.
        """
        if isinstance(instance, CallRouter):
            return
        key = id(instance)
        with self._lock:
            if key in self._routers:
                msg = f"{instance!r} is already registered as a substitute"
                raise DuplicateRegistrationError(msg)
            self._routers[key] = router
            try:
                weakref.finalize(instance, self._forget, key)
            except TypeError:
                # Not weakly referenceable; pin it so its id stays unique.
                self._pinned[key] = instance
        logger.debug("Registered %s", router.name)

    def _forget(self, key: int) -> None:
        with self._lock:
            self._routers.pop(key, None)

    def is_substitute(self, instance: object) -> bool:
        """Return ``True`` when *instance* resolves to a router."""
        if instance is None:
            return False
        if isinstance(instance, CallRouter):
            return True
        with self._lock:
            return id(instance) in self._routers

    def routers(self) -> list[CallRouter]:
        """Return every router currently registered."""
        with self._lock:
            return list(self._routers.values())

    def clear(self) -> None:
        """Forget every registration."""
        with self._lock:
            self._routers.clear()
            self._pinned.clear()

    def __len__(self) -> int:
        """Return the number of registered substitutes."""
        with self._lock:
            return len(self._routers)


class _DefaultResolver:
    """Holder for the process-wide resolver."""

    _lock: t.ClassVar[threading.Lock] = threading.Lock()
    _resolver: t.ClassVar[CallRouterResolver | None] = None

    @classmethod
    def get(cls) -> CallRouterResolver:
        with cls._lock:
            if cls._resolver is None:
                cls._resolver = CallRouterResolver()
            return cls._resolver

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._resolver = None


def default_resolver() -> CallRouterResolver:
    """Return the process-wide :class:`CallRouterResolver`."""
    return _DefaultResolver.get()


def reset_default_resolver() -> None:
    """Replace the process-wide resolver with a fresh, empty one."""
    _DefaultResolver.reset()


__all__ = ["CallRouterResolver", "default_resolver", "reset_default_resolver"]
