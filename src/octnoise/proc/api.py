from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol

ParamDict = dict[str, Any]


class NoiseQuality(IntEnum):
    """Interpolation fidelity forwarded to the basis primitive."""
    FAST = 0  # linear
    STD = 1   # cubic s-curve
    BEST = 2  # quintic s-curve

    @classmethod
    def coerce(cls, v: Any) -> "NoiseQuality":
        if isinstance(v, str):
            return cls[v.upper()]
        return cls(v)


@dataclass(frozen=True)
class ParamSpec:
    name: str
    type: str
    range: tuple[float, float] | None = None
    enum: tuple[Any, ...] | None = None
    units: str | None = None
    quant: float | None = None


@dataclass(frozen=True)
class ModuleInfo:
    name: str
    param_specs: tuple[ParamSpec, ...]
    source_module_count: int = 0
    deterministic: bool = True


class Basis(Protocol):
    """Single-frequency coherent noise sampled once per octave."""
    @property
    def seed(self) -> int: ...
    @property
    def quality(self) -> NoiseQuality: ...
    def set_seed(self, seed: int) -> None: ...
    def set_noise_quality(self, quality: NoiseQuality) -> None: ...
    def evaluate(self, x: float, y: float, z: float) -> float: ...


class NoiseModule(Protocol):
    info: ModuleInfo
    def sample(self, x: float, y: float, z: float) -> float: ...
