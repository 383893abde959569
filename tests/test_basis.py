import math
import random

import pytest

from octnoise.proc.api import NoiseQuality
from octnoise.proc.noise import PerlinBasis, ValueBasis, interp_curve, s_curve3, s_curve5


def _points(n, seed=0, span=20.0):
    rng = random.Random(seed)
    return [(rng.uniform(-span, span), rng.uniform(-span, span), rng.uniform(-span, span))
            for _ in range(n)]


@pytest.mark.parametrize("quality", list(NoiseQuality))
def test_perlin_basis_zero_on_lattice(quality):
    b = PerlinBasis(seed=123, quality=quality)
    for p in [(0, 0, 0), (1, 2, 3), (-4, 7, -9), (300, -256, 511)]:
        assert b.evaluate(*map(float, p)) == 0.0

def test_perlin_basis_range_and_signal():
    b = PerlinBasis(seed=5)
    vals = [b.evaluate(*p) for p in _points(500)]
    assert all(-1.5 < v < 1.5 for v in vals)
    assert max(abs(v) for v in vals) > 0.05

def test_perlin_basis_same_seed_same_values():
    a, b = PerlinBasis(seed=99), PerlinBasis(seed=99)
    for p in _points(50, seed=1):
        assert a.evaluate(*p) == b.evaluate(*p)

def test_perlin_basis_seed_changes_output():
    a, b = PerlinBasis(seed=1), PerlinBasis(seed=2)
    assert any(a.evaluate(*p) != b.evaluate(*p) for p in _points(50, seed=2))

def test_set_seed_rebuilds_permutation():
    a = PerlinBasis(seed=1)
    a.set_seed(2)
    b = PerlinBasis(seed=2)
    assert a.seed == 2
    for p in _points(20, seed=3):
        assert a.evaluate(*p) == b.evaluate(*p)

def test_quality_changes_interpolation():
    pts = _points(20, seed=4)
    fast = PerlinBasis(seed=7, quality=NoiseQuality.FAST)
    best = PerlinBasis(seed=7, quality="best")
    assert best.quality is NoiseQuality.BEST
    assert any(fast.evaluate(*p) != best.evaluate(*p) for p in pts)

def test_curves():
    assert interp_curve(NoiseQuality.FAST)(0.3) == 0.3
    assert interp_curve(NoiseQuality.STD) is s_curve3
    assert interp_curve("best") is s_curve5
    for c in (s_curve3, s_curve5):
        assert c(0.0) == 0.0 and c(1.0) == 1.0
        assert c(0.5) == pytest.approx(0.5)

@pytest.mark.parametrize("cls", [PerlinBasis, ValueBasis])
def test_non_finite_coordinates_give_nan(cls):
    b = cls(seed=3)
    assert math.isnan(b.evaluate(math.inf, 0.0, 0.0))
    assert math.isnan(b.evaluate(0.0, math.nan, 0.0))
    assert math.isnan(b.evaluate(0.0, 0.0, -math.inf))

def test_value_basis_lattice_and_range():
    b = ValueBasis(seed=11, quality=NoiseQuality.BEST)
    for ix, iy, iz in [(0, 0, 0), (3, -2, 8), (-100, 5, 7)]:
        v = b.lattice_value(ix, iy, iz)
        assert -1.0 <= v < 1.0
        assert b.evaluate(float(ix), float(iy), float(iz)) == v
    vals = [b.evaluate(*p) for p in _points(300, seed=5)]
    assert all(-1.0 <= v <= 1.0 for v in vals)
    assert len(set(vals)) > 1

def test_value_basis_seeded():
    a, b = ValueBasis(seed=1), ValueBasis(seed=2)
    assert a.lattice_value(4, 5, 6) != b.lattice_value(4, 5, 6)
    assert a.lattice_value(4, 5, 6) == ValueBasis(seed=1).lattice_value(4, 5, 6)

@pytest.mark.parametrize("cls", [PerlinBasis, ValueBasis])
def test_basis_seed_wraps_to_int32(cls):
    a, b = cls(seed=2**31 + 5), cls(seed=-2**31 + 5)
    assert a.seed == b.seed == -2**31 + 5
    for p in _points(10, seed=8):
        assert a.evaluate(*p) == b.evaluate(*p)
