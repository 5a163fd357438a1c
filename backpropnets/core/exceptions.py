"""Error kinds raised by backpropnets."""

from __future__ import annotations


class BackpropNetsError(Exception):
    """Base class for every error raised by the package."""


class ShapeMismatchError(BackpropNetsError, ValueError):
    """Training data disagrees with the configured input or output size."""


class UnknownNameError(BackpropNetsError, KeyError):
    """A factory was given a name it does not recognise."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class UnimplementedError(BackpropNetsError, NotImplementedError):
    """A recognised variant has no backing implementation."""


class ResourceUnavailableError(BackpropNetsError, OSError):
    """A file needed for reading or writing could not be opened."""


class MalformedNetworkFileError(BackpropNetsError, ValueError):
    """A persisted network breaks the header/triplet layout."""


__all__ = [
    "BackpropNetsError",
    "MalformedNetworkFileError",
    "ResourceUnavailableError",
    "ShapeMismatchError",
    "UnimplementedError",
    "UnknownNameError",
]
