"""octnoise - octave (Perlin) noise with an explicit configure/build/sample cycle.

Usage:

    import octnoise as on
    gen = on.Perlin()
    gen.octave_count = 8
    gen.build()
    v = gen.sample(0.25, 1.5, -3.0)

Or detailed modules:

    from octnoise import core, proc
"""
from __future__ import annotations

__version__ = "1.0.0"

from . import core, proc
from .core.errors import InvalidParamsError, NotBuiltError, OctNoiseError, UnknownModuleError
from .proc import (
    NoiseQuality, OctaveTable, ParamCodec, Perlin, PerlinBasis, PerlinConfig, SeedPolicy,
    ValueBasis, get, list_modules, render, sample_array,
)

__all__ = [
    "core", "proc",
    "OctNoiseError", "NotBuiltError", "InvalidParamsError", "UnknownModuleError",
    "NoiseQuality", "OctaveTable", "ParamCodec", "Perlin", "PerlinBasis", "PerlinConfig",
    "SeedPolicy", "ValueBasis", "get", "list_modules", "render", "sample_array",
    "__version__",
]
