"""octnoise core: error taxonomy and deterministic integer RNGs."""
from __future__ import annotations

from .errors import InvalidParamsError, NotBuiltError, OctNoiseError, UnknownModuleError
from .rng import JavaRandom, derive_seed64, splitmix64, to_int32_signed

__all__ = [
    "OctNoiseError", "NotBuiltError", "InvalidParamsError", "UnknownModuleError",
    "JavaRandom", "derive_seed64", "splitmix64", "to_int32_signed",
]
