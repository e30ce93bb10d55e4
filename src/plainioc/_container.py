from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar, overload

from ._errors import CircularDependencyError, FactoryAlreadyBoundError, FactoryNotBoundError
from ._keys import Token, describe_key


logger = logging.getLogger(__name__)

T = TypeVar("T")

if TYPE_CHECKING:
    from ._keys import Key


class Lifetime(Enum):
    SINGLETON = "singleton"
    TRANSIENT = "transient"


@dataclass(frozen=True)
class ContainerOptions:
    circular_dependency_detect: bool = False


@dataclass(frozen=True)
class Binding:
    factory: Callable[[Container], object]
    lifetime: Lifetime = Lifetime.TRANSIENT

    @property
    def singleton(self) -> bool:
        return self.lifetime is Lifetime.SINGLETON


class Container:
    """Minimal DI container.

    - bind factories to keys (strings, tokens, classes, functions...)
    - lifetimes: singleton / transient
    - optional circular dependency detection.

    A factory receives the container it is bound in and may resolve other
    keys from it. Every operation runs under one re-entrant lock, so a
    container may be shared between threads.
    """

    def __init__(
        self,
        options: ContainerOptions | None = None,
        *,
        circular_dependency_detect: bool | None = None,
    ) -> None:
        if options is not None and circular_dependency_detect is not None:
            msg = "Provide either `options` or `circular_dependency_detect`, not both."
            raise ValueError(msg)

        if options is None:
            options = ContainerOptions(circular_dependency_detect=bool(circular_dependency_detect))

        self._options = options
        self._bindings: dict[Any, Binding] = {}
        self._instances: dict[Any, object] = {}
        self._resolution_stack: list[Any] = []
        self._lock = threading.RLock()

    @property
    def options(self) -> ContainerOptions:
        return self._options

    def bind(self, key: Key, factory: Callable[[Container], object]) -> None:
        """Bind a factory to `key`; every resolve calls the factory again.

        Example:
          container.bind("db", lambda c: Database(c.resolve("settings")))

        """
        self._bind(key, factory, Lifetime.TRANSIENT)

    def bind_singleton(self, key: Key, factory: Callable[[Container], object]) -> None:
        """Bind a factory to `key`; its first result is cached and reused."""
        self._bind(key, factory, Lifetime.SINGLETON)

    def _bind(self, key: Key, factory: Callable[[Container], object], lifetime: Lifetime) -> None:
        self._validate_factory(key, factory)

        with self._lock:
            if key in self._bindings:
                msg = f"Factory for {describe_key(key)} already bound"
                raise FactoryAlreadyBoundError(msg)
            self._bindings[key] = Binding(factory=factory, lifetime=lifetime)

        logger.debug("Bound %s (%s)", describe_key(key), lifetime.value)

    def unbind(self, key: Key) -> None:
        """Remove the binding for `key` along with its cached singleton, if any."""
        with self._lock:
            if key not in self._bindings:
                msg = f"Factory not bound with {describe_key(key)}"
                raise FactoryNotBoundError(msg)
            del self._bindings[key]
            self._instances.pop(key, None)

        logger.debug("Unbound %s", describe_key(key))

    def is_bound(self, key: Key) -> bool:
        with self._lock:
            return key in self._bindings

    @overload
    def resolve(self, key: type[T]) -> T: ...

    @overload
    def resolve(self, key: Token[T]) -> T: ...

    @overload
    def resolve(self, key: Key) -> Any: ...

    def resolve(self, key: Key) -> Any:
        """Resolve `key` to a value.

        - Singleton already built: return the cached instance.
        - Otherwise call the factory with this container and return its result,
          caching it first when the binding is a singleton.
        Errors raised by the factory propagate unchanged.
        """
        with self._lock:
            binding = self._bindings.get(key)
            if binding is None:
                msg = f"Factory not bound with {describe_key(key)}"
                raise FactoryNotBoundError(msg)

            if binding.singleton and key in self._instances:
                return self._instances[key]

            try:
                self._push(key)

                logger.debug("Calling factory for %s", describe_key(key))
                instance = binding.factory(self)

                # the factory may have unbound or rebound its own key
                if binding.singleton and self._bindings.get(key) is binding:
                    self._instances[key] = instance

                return instance
            finally:
                self._pop()

    def _push(self, key: Key) -> None:
        if not self._options.circular_dependency_detect:
            return

        detected = key in self._resolution_stack
        self._resolution_stack.append(key)

        if detected:
            lines = [f"Circular dependency detected while resolving {describe_key(key)}", "Resolution stack:"]
            lines.extend(f"  [{index}] {describe_key(item)}" for index, item in enumerate(self._resolution_stack))
            msg = "\n".join(lines)
            logger.debug(msg)
            raise CircularDependencyError(msg)

    def _pop(self) -> None:
        if self._options.circular_dependency_detect:
            self._resolution_stack.pop()

    def _validate_factory(self, key: Key, factory: object) -> None:
        if not callable(factory):
            msg = f"Factory for {describe_key(key)} must be callable, got {type(factory).__name__}"
            raise TypeError(msg)

        if inspect.iscoroutinefunction(factory) or inspect.isasyncgenfunction(factory):
            msg = f"Factory for {describe_key(key)} must produce its value synchronously"
            raise TypeError(msg)


Factory = Callable[[Container], T]
