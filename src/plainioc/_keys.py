from __future__ import annotations

import inspect
from collections.abc import Hashable
from typing import Generic, TypeVar


T = TypeVar("T")

Key = Hashable

_PRIMITIVES = (str, int, float, complex, bool, bytes, type(None))


class Token(Generic[T]):
    """Unique key object.

    A token is only ever equal to itself, so two tokens sharing a name never
    collide in a container:

      DB = Token[Database]("db")
      container.bind(DB, lambda c: Database())
      db = container.resolve(DB)  # typed as Database

    """

    __slots__ = ("name",)

    def __init__(self, name: str = "") -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Token({self.name!r})"


def describe_key(key: object) -> str:
    """Render a key for error messages.

    Never raises; the output does not depend on object addresses.
    """
    kind = type(key).__name__
    try:
        if inspect.isclass(key):
            return f'"{key.__name__}" (class)'

        if isinstance(key, Token):
            return f'"Token({key.name})" (token)'

        if callable(key):
            name = getattr(key, "__name__", None)
            return f'"{name or "<anonymous>"}" (function)'

        if isinstance(key, _PRIMITIVES):
            return f'"{key!s}" ({kind})'

        return f'"<{kind} object>" (object)'
    except Exception:  # noqa: BLE001
        return f'"<unprintable>" ({kind})'
