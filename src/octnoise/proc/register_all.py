from __future__ import annotations

from .noise import PerlinBasis, ValueBasis
from .perlin import Perlin
from .registry import register, register_basis


def register_all() -> list[str]:
    """Register the built-in bases and modules; returns the module names."""
    register_basis("perlin", PerlinBasis)
    register_basis("value", ValueBasis)
    mods = (Perlin,)
    for m in mods:
        register(m)
    return sorted(m.info.name for m in mods)
