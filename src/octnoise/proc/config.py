from __future__ import annotations
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from octnoise.core.errors import InvalidParamsError
from .api import ModuleInfo, NoiseQuality, ParamSpec

__all__ = [
    "DEFAULT_PERLIN_FREQUENCY", "DEFAULT_PERLIN_LACUNARITY", "DEFAULT_PERLIN_OCTAVE_COUNT",
    "DEFAULT_PERLIN_PERSISTENCE", "DEFAULT_PERLIN_SEED", "PERLIN_MAX_OCTAVE",
    "SeedPolicy", "PerlinConfig", "PERLIN_INFO", "clamp_octave_count",
]

DEFAULT_PERLIN_FREQUENCY = 1.0
DEFAULT_PERLIN_LACUNARITY = 2.0
DEFAULT_PERLIN_OCTAVE_COUNT = 6
DEFAULT_PERLIN_PERSISTENCE = 0.5
DEFAULT_PERLIN_SEED = 0
PERLIN_MAX_OCTAVE = 30


class SeedPolicy(str, Enum):
    """How ``Perlin.build`` derives per-octave seeds.

    LEGACY
        Java-compatible: each draw overwrites the generator's stored seed,
        so every build after the first starts from a different seed.
    STABLE
        Same draws, stored seed left untouched; rebuilding is idempotent.
    """
    LEGACY = "legacy"
    STABLE = "stable"


def clamp_octave_count(n: int) -> int:
    n = int(n)
    if n < 1:
        return 1
    if n > PERLIN_MAX_OCTAVE:
        return PERLIN_MAX_OCTAVE
    return n


PERLIN_INFO = ModuleInfo(
    name="PERLIN",
    param_specs=(
        ParamSpec("frequency", "float", None, None, "cycles/unit"),
        ParamSpec("lacunarity", "float", (1.5, 3.5)),
        ParamSpec("octave_count", "int", (1, PERLIN_MAX_OCTAVE)),
        ParamSpec("persistence", "float", (0.0, 1.0)),
        ParamSpec("seed", "int"),
        ParamSpec("quality", "enum", enum=tuple(q.name.lower() for q in NoiseQuality)),
        ParamSpec("seed_policy", "enum", enum=tuple(p.value for p in SeedPolicy)),
        ParamSpec("basis", "str"),
    ),
    source_module_count=0,
)


@dataclass(frozen=True, slots=True)
class PerlinConfig:
    """
    Parameter set of a :class:`~octnoise.proc.perlin.Perlin` generator.

    Fields
    ------
    frequency : float, default=1.0
        Frequency of the first octave. Stored and reported only; the octave
        table divides by ``lacunarity ** i`` alone.
    lacunarity : float, default=2.0
        Frequency multiplier between successive octaves (best in [1.5, 3.5]).
    octave_count : int, default=6
        Number of octaves, clamped to [1, 30].
    persistence : float, default=0.5
        Amplitude factor between successive octaves.
    seed : int, default=0
        Base seed. 0 seeds every octave with 0.
    quality : NoiseQuality, default=STD
        Interpolation quality forwarded to each basis (names accepted).
    seed_policy : SeedPolicy, default=LEGACY
        See :class:`SeedPolicy`.
    basis : str, default="perlin"
        Registry name of the basis primitive.

    Notes
    -----
    Frozen so a snapshot can be compared and hashed; the live, mutable
    parameter holder is the generator itself.
    """

    frequency: float = DEFAULT_PERLIN_FREQUENCY
    lacunarity: float = DEFAULT_PERLIN_LACUNARITY
    octave_count: int = DEFAULT_PERLIN_OCTAVE_COUNT
    persistence: float = DEFAULT_PERLIN_PERSISTENCE
    seed: int = DEFAULT_PERLIN_SEED
    quality: NoiseQuality = NoiseQuality.STD
    seed_policy: SeedPolicy = SeedPolicy.LEGACY
    basis: str = "perlin"

    def __post_init__(self) -> None:
        object.__setattr__(self, "octave_count", clamp_octave_count(self.octave_count))
        try:
            object.__setattr__(self, "quality", NoiseQuality.coerce(self.quality))
        except (KeyError, ValueError) as exc:
            raise InvalidParamsError(f"PerlinConfig.quality: unknown quality {self.quality!r}") from exc
        try:
            object.__setattr__(self, "seed_policy", SeedPolicy(self.seed_policy))
        except ValueError as exc:
            raise InvalidParamsError(f"PerlinConfig.seed_policy: unknown policy {self.seed_policy!r}") from exc
        if not isinstance(self.basis, str) or not self.basis:
            raise InvalidParamsError("PerlinConfig.basis must be a non-empty string")

    @classmethod
    def from_dict(cls, params: dict[str, Any], *, strict: bool = False) -> "PerlinConfig":
        from .params import ParamCodec

        return cls(**ParamCodec(PERLIN_INFO).validate(params, strict=strict))

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["quality"] = self.quality.name.lower()
        d["seed_policy"] = self.seed_policy.value
        return d

