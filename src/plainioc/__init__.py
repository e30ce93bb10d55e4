"""Plain inversion of control container.

This package provides a small dependency injection container for Python: keys
are bound to factories, factories receive the container and may resolve other
keys from it, and values are either rebuilt on every resolve or cached as
singletons. Circular dependencies can optionally be detected.

Exports:
- `Container`: The container; `bind`, `bind_singleton`, `unbind`, `is_bound`, `resolve`.
- `ContainerOptions`: Immutable construction options (`circular_dependency_detect`).
- `Binding`, `Lifetime`: A registered factory and whether its value is cached.
- `Factory`, `Key`: Type aliases for factories and keys.
- `Token`: Unique key object, equal only to itself.
- `describe_key`: Human-readable rendering of a key, as used in error messages.
- `PlainIocError`: Base of `FactoryAlreadyBoundError`, `FactoryNotBoundError`
  and `CircularDependencyError`.
"""

from ._container import Binding, Container, ContainerOptions, Factory, Lifetime
from ._errors import CircularDependencyError, FactoryAlreadyBoundError, FactoryNotBoundError, PlainIocError
from ._keys import Key, Token, describe_key


__all__ = [
    "Binding",
    "CircularDependencyError",
    "Container",
    "ContainerOptions",
    "Factory",
    "FactoryAlreadyBoundError",
    "FactoryNotBoundError",
    "Key",
    "Lifetime",
    "PlainIocError",
    "Token",
    "describe_key",
]
