from __future__ import annotations

import math
from typing import Callable

from octnoise.core.rng import JavaRandom, derive_seed64, to_int32_signed
from .api import NoiseQuality

__all__ = [
    "linear_curve", "s_curve3", "s_curve5", "interp_curve",
    "PerlinBasis", "ValueBasis",
]

# ---------------------------------------------------------------------
# Interpolation curves (picked by NoiseQuality)
# ---------------------------------------------------------------------

def linear_curve(t: float) -> float:
    return t


def s_curve3(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


def s_curve5(t: float) -> float:  # 6t^5 - 15t^4 + 10t^3
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


_CURVES: dict[NoiseQuality, Callable[[float], float]] = {
    NoiseQuality.FAST: linear_curve,
    NoiseQuality.STD: s_curve3,
    NoiseQuality.BEST: s_curve5,
}


def interp_curve(quality: NoiseQuality) -> Callable[[float], float]:
    return _CURVES[NoiseQuality.coerce(quality)]


def _lerp(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def _finite3(x: float, y: float, z: float) -> bool:
    return math.isfinite(x) and math.isfinite(y) and math.isfinite(z)


class _SeededBasis:
    """Seed and quality bookkeeping shared by the built-in bases."""

    def __init__(self, seed: int = 0, quality: NoiseQuality = NoiseQuality.STD) -> None:
        self._seed = 0
        self.set_seed(seed)
        self.set_noise_quality(quality)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def quality(self) -> NoiseQuality:
        return self._quality

    def set_seed(self, seed: int) -> None:
        self._seed = to_int32_signed(seed)

    def set_noise_quality(self, quality: NoiseQuality) -> None:
        self._quality = NoiseQuality.coerce(quality)
        self._curve = _CURVES[self._quality]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self._seed}, quality={self._quality.name})"


# ---------------------------------------------------------------------
# Gradient noise
# ---------------------------------------------------------------------

def _grad(h: int, x: float, y: float, z: float) -> float:
    # 12 cube-edge gradients (plus 4 repeats) selected by the low hash bits
    h &= 15
    u = x if h < 8 else y
    v = y if h < 4 else (x if h == 12 or h == 14 else z)
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


class PerlinBasis(_SeededBasis):
    """Improved gradient noise on the integer lattice.

    The permutation table is shuffled with ``JavaRandom(seed)``, so two
    instances with the same seed are identical. Values are exactly 0.0 on
    lattice points and stay roughly within [-1, 1]. Non-finite
    coordinates return NaN.
    """

    def set_seed(self, seed: int) -> None:
        super().set_seed(seed)
        p = list(range(256))
        rnd = JavaRandom(self._seed)
        for i in range(255, 0, -1):
            j = rnd.next_int(i + 1)
            p[i], p[j] = p[j], p[i]
        self._perm = p + p

    def evaluate(self, x: float, y: float, z: float) -> float:
        if not _finite3(x, y, z):
            return math.nan
        ix, iy, iz = math.floor(x), math.floor(y), math.floor(z)
        x -= ix
        y -= iy
        z -= iz
        X, Y, Z = ix & 255, iy & 255, iz & 255
        curve = self._curve
        u, v, w = curve(x), curve(y), curve(z)

        p = self._perm
        A = p[X] + Y
        AA = p[A] + Z
        AB = p[A + 1] + Z
        B = p[X + 1] + Y
        BA = p[B] + Z
        BB = p[B + 1] + Z

        return _lerp(w,
                     _lerp(v,
                           _lerp(u, _grad(p[AA], x, y, z), _grad(p[BA], x - 1, y, z)),
                           _lerp(u, _grad(p[AB], x, y - 1, z), _grad(p[BB], x - 1, y - 1, z))),
                     _lerp(v,
                           _lerp(u, _grad(p[AA + 1], x, y, z - 1), _grad(p[BA + 1], x - 1, y, z - 1)),
                           _lerp(u, _grad(p[AB + 1], x, y - 1, z - 1), _grad(p[BB + 1], x - 1, y - 1, z - 1))))


# ---------------------------------------------------------------------
# Value noise
# ---------------------------------------------------------------------

class ValueBasis(_SeededBasis):
    """Value noise: hashed lattice values in [-1, 1), blended with the quality curve."""

    def lattice_value(self, ix: int, iy: int, iz: int) -> float:
        h = derive_seed64(self._seed, ix, iy, iz)
        # top 53 bits -> [0,1) -> [-1,1)
        return (h >> 11) / float(1 << 53) * 2.0 - 1.0

    def evaluate(self, x: float, y: float, z: float) -> float:
        if not _finite3(x, y, z):
            return math.nan
        ix, iy, iz = math.floor(x), math.floor(y), math.floor(z)
        curve = self._curve
        u, v, w = curve(x - ix), curve(y - iy), curve(z - iz)
        val = self.lattice_value

        c00 = _lerp(u, val(ix, iy, iz), val(ix + 1, iy, iz))
        c10 = _lerp(u, val(ix, iy + 1, iz), val(ix + 1, iy + 1, iz))
        c01 = _lerp(u, val(ix, iy, iz + 1), val(ix + 1, iy, iz + 1))
        c11 = _lerp(u, val(ix, iy + 1, iz + 1), val(ix + 1, iy + 1, iz + 1))
        return _lerp(w, _lerp(v, c00, c10), _lerp(v, c01, c11))
