from __future__ import annotations


class PlainIocError(RuntimeError):
    """Base class of every error raised by the container."""

    @property
    def name(self) -> str:
        """Name of the concrete error kind, e.g. ``"FactoryNotBoundError"``."""
        return type(self).__name__


class FactoryAlreadyBoundError(PlainIocError):
    pass


class FactoryNotBoundError(PlainIocError, LookupError):
    pass


class CircularDependencyError(PlainIocError):
    pass
