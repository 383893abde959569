"""octnoise.proc - noise modules, basis primitives and their registry.

Importing the package registers the built-in bases ("perlin", "value")
and modules ("PERLIN").
"""
from __future__ import annotations

from .api import Basis, ModuleInfo, NoiseModule, NoiseQuality, ParamSpec
from .config import PERLIN_MAX_OCTAVE, PerlinConfig, SeedPolicy, clamp_octave_count
from .noise import PerlinBasis, ValueBasis
from .params import ParamCodec
from .perlin import OctaveTable, Perlin
from .register_all import register_all
from .registry import get, get_basis, list_bases, list_modules, register, register_basis
from .render import grid, render, sample_array

register_all()

__all__ = [
    "Basis", "ModuleInfo", "NoiseModule", "NoiseQuality", "ParamSpec",
    "PERLIN_MAX_OCTAVE", "PerlinConfig", "SeedPolicy", "clamp_octave_count",
    "PerlinBasis", "ValueBasis",
    "ParamCodec",
    "OctaveTable", "Perlin",
    "register_all", "get", "get_basis", "list_bases", "list_modules", "register", "register_basis",
    "grid", "render", "sample_array",
]
