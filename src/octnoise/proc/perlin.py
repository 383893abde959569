from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Union

from octnoise.core.errors import InvalidParamsError, NotBuiltError
from octnoise.core.rng import JavaRandom, to_int32_signed
from .api import Basis, ModuleInfo, NoiseQuality
from .config import PERLIN_INFO, PerlinConfig, SeedPolicy, clamp_octave_count
from .registry import get_basis

log = logging.getLogger(__name__)

BasisRef = Union[str, Callable[[], Basis]]


@dataclass(frozen=True)
class OctaveTable:
    """Per-octave state derived by :meth:`Perlin.build`. All tuples share one length."""

    sources: tuple[Basis, ...]
    seeds: tuple[int, ...]
    frequencies: tuple[float, ...]
    amplitudes: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.sources)


def _ieee_pow(base: float, exp: int) -> float:
    try:
        return math.pow(base, exp)
    except OverflowError:
        neg = base < 0 and exp % 2 == 1
        return -math.inf if neg else math.inf


def _ieee_div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a != a or a == 0.0:
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


class Perlin:
    """
    Source module that outputs 3-D Perlin noise: the weighted sum of
    ``octave_count`` independently seeded gradient-noise octaves.

    Two-phase use: edit parameters through the properties (cheap, no
    recomputation), then call :meth:`build` once before sampling. Any
    setter marks the octave table stale and :meth:`sample` raises
    :class:`NotBuiltError` until the next build.

    Octave ``i`` samples its basis at ``(x, y, z) / lacunarity ** i`` with
    amplitude ``persistence ** (octave_count - i)``, so the last octave
    carries weight ``persistence`` and the first ``persistence **
    octave_count``. ``frequency`` is stored and reported but does not enter
    the table. Output is roughly in [-1, 1] with no guarantee.

    Thread safety: no locks. ``sample`` only reads the built table and may
    run concurrently; ``build`` and the setters are exclusive writers and
    must not overlap with sampling. Give each thread its own generator if
    parameters change while others sample.
    """

    info: ModuleInfo = PERLIN_INFO

    def __init__(self, config: PerlinConfig | None = None) -> None:
        cfg = config if config is not None else PerlinConfig()
        self._frequency = cfg.frequency
        self._lacunarity = cfg.lacunarity
        self._octave_count = cfg.octave_count
        self._persistence = cfg.persistence
        self._seed = cfg.seed
        self._quality: Any = cfg.quality
        self._seed_policy: Any = cfg.seed_policy
        self._basis: BasisRef = cfg.basis
        self._table: OctaveTable | None = None
        self._stale = True
        self._exact_div = True

    @classmethod
    def from_config(cls, config: PerlinConfig) -> "Perlin":
        return cls(config)

    @property
    def config(self) -> PerlinConfig:
        basis = self._basis if isinstance(self._basis, str) else getattr(self._basis, "__name__", "custom")
        return PerlinConfig(
            frequency=self._frequency,
            lacunarity=self._lacunarity,
            octave_count=self._octave_count,
            persistence=self._persistence,
            seed=self._seed,
            quality=self._quality,
            seed_policy=self._seed_policy,
            basis=basis,
        )

    # -------------------------
    # Parameters
    # -------------------------
    @property
    def frequency(self) -> float:
        return self._frequency

    @frequency.setter
    def frequency(self, value: float) -> None:
        self._frequency = value
        self._stale = True

    @property
    def lacunarity(self) -> float:
        return self._lacunarity

    @lacunarity.setter
    def lacunarity(self, value: float) -> None:
        self._lacunarity = value
        self._stale = True

    @property
    def octave_count(self) -> int:
        return self._octave_count

    @octave_count.setter
    def octave_count(self, value: int) -> None:
        self._octave_count = clamp_octave_count(value)
        self._stale = True

    @property
    def persistence(self) -> float:
        return self._persistence

    @persistence.setter
    def persistence(self, value: float) -> None:
        self._persistence = value
        self._stale = True

    @property
    def seed(self) -> int:
        """Current seed. A LEGACY build overwrites it with the last octave's seed."""
        return self._seed

    @seed.setter
    def seed(self, value: int) -> None:
        self._seed = value
        self._stale = True

    @property
    def quality(self) -> NoiseQuality:
        return self._quality

    @quality.setter
    def quality(self, value: NoiseQuality) -> None:
        self._quality = value
        self._stale = True

    @property
    def seed_policy(self) -> SeedPolicy:
        return self._seed_policy

    @seed_policy.setter
    def seed_policy(self, value: SeedPolicy) -> None:
        self._seed_policy = value
        self._stale = True

    @property
    def basis(self) -> BasisRef:
        """Registry name of the basis, or a zero-argument factory returning one."""
        return self._basis

    @basis.setter
    def basis(self, value: BasisRef) -> None:
        self._basis = value
        self._stale = True

    @property
    def source_module_count(self) -> int:
        return self.info.source_module_count

    @property
    def is_built(self) -> bool:
        return self._table is not None and not self._stale

    @property
    def table(self) -> OctaveTable:
        if self._table is None:
            raise NotBuiltError("Perlin.build() has not been called")
        return self._table

    # -------------------------
    # Build / sample
    # -------------------------
    def build(self) -> OctaveTable:
        """Derive the octave table from the current parameters, replacing any previous one.

        Nothing on the generator changes if the build fails.
        """
        make = get_basis(self._basis) if isinstance(self._basis, str) else self._basis
        try:
            quality = NoiseQuality.coerce(self._quality)
        except (KeyError, ValueError) as exc:
            raise InvalidParamsError(f"Perlin.quality: unknown quality {self._quality!r}") from exc
        try:
            policy = SeedPolicy(self._seed_policy)
        except ValueError as exc:
            raise InvalidParamsError(f"Perlin.seed_policy: unknown policy {self._seed_policy!r}") from exc
        n = self._octave_count
        # seeds are Java ints
        base_seed = to_int32_signed(self._seed)
        rnd = JavaRandom(base_seed)

        sources: list[Basis] = []
        seeds: list[int] = []
        freqs: list[float] = []
        amps: list[float] = []
        seed = base_seed
        for i in range(n):
            src = make()
            if policy is SeedPolicy.LEGACY:
                # each draw replaces the running seed; a draw of 0 stops further draws
                if seed != 0:
                    seed = rnd.next_int()
                octave_seed = seed
            else:
                octave_seed = rnd.next_int() if base_seed != 0 else 0
            src.set_seed(octave_seed)
            src.set_noise_quality(quality)

            sources.append(src)
            seeds.append(octave_seed)
            freqs.append(_ieee_pow(self._lacunarity, i))
            amps.append(_ieee_pow(self._persistence, n - i))

        if policy is SeedPolicy.LEGACY:
            self._seed = seed
        self._table = OctaveTable(tuple(sources), tuple(seeds), tuple(freqs), tuple(amps))
        self._exact_div = all(f != 0.0 for f in freqs)
        self._stale = False
        log.debug("Perlin built: octaves=%d policy=%s base_seed=%d stored_seed=%d",
                  n, policy.value, base_seed, self._seed)
        return self._table

    def sample(self, x: float, y: float, z: float) -> float:
        if self._stale or self._table is None:
            raise NotBuiltError("Perlin parameters changed since the last build(); call build() first")
        t = self._table
        value = 0.0
        if self._exact_div:
            for src, f, a in zip(t.sources, t.frequencies, t.amplitudes):
                value += src.evaluate(x / f, y / f, z / f) * a
        else:
            for src, f, a in zip(t.sources, t.frequencies, t.amplitudes):
                value += src.evaluate(_ieee_div(x, f), _ieee_div(y, f), _ieee_div(z, f)) * a
        return value

    def __repr__(self) -> str:
        state = "built" if self.is_built else "unbuilt"
        return (f"Perlin(octaves={self._octave_count}, lacunarity={self._lacunarity}, "
                f"persistence={self._persistence}, seed={self._seed}, {state})")
