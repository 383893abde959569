from __future__ import annotations

__all__ = [
    "OctNoiseError",
    "NotBuiltError",
    "InvalidParamsError",
    "UnknownModuleError",
]


class OctNoiseError(Exception):
    """Base class for every error raised by octnoise."""


class NotBuiltError(OctNoiseError, RuntimeError):
    """Sampling a module whose octave table is missing or stale."""


class InvalidParamsError(OctNoiseError, ValueError):
    """Parameter dict or config rejected by validation."""


class UnknownModuleError(OctNoiseError, LookupError):
    """Name not present in a registry."""
