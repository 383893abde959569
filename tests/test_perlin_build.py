import logging
import math

import pytest

from octnoise.core.errors import InvalidParamsError, NotBuiltError, UnknownModuleError
from octnoise.core.rng import JavaRandom
from octnoise.proc.config import PerlinConfig, SeedPolicy
from octnoise.proc.noise import PerlinBasis, ValueBasis
from octnoise.proc.perlin import OctaveTable, Perlin

log = logging.getLogger("octnoise.tests.build")

JAVA_42 = [-1170105035, 234785527, -1360544799, 205897768, 1325939940, -248792245]


def test_defaults():
    g = Perlin()
    assert g.frequency == 1.0
    assert g.lacunarity == 2.0
    assert g.octave_count == 6
    assert g.persistence == 0.5
    assert g.seed == 0
    assert g.seed_policy is SeedPolicy.LEGACY
    assert g.source_module_count == 0
    assert not g.is_built

@pytest.mark.parametrize("n,expected", [(0, 1), (-5, 1), (1, 1), (10, 10), (30, 30), (50, 30)])
def test_octave_count_clamped(n, expected):
    g = Perlin()
    g.octave_count = n
    assert g.octave_count == expected
    assert PerlinConfig(octave_count=n).octave_count == expected

@pytest.mark.parametrize("n", [1, 6, 7, 30])
def test_table_lengths_match_octave_count(n):
    g = Perlin()
    g.octave_count = n
    t = g.build()
    assert isinstance(t, OctaveTable)
    assert len(t) == n
    assert len(t.sources) == len(t.seeds) == len(t.frequencies) == len(t.amplitudes) == n

@pytest.mark.parametrize("lac", [2.0, 1.5, 3.3])
def test_frequencies_are_lacunarity_powers(lac):
    g = Perlin()
    g.lacunarity = lac
    t = g.build()
    assert t.frequencies[0] == 1.0
    for i, f in enumerate(t.frequencies):
        assert f == math.pow(lac, i)

@pytest.mark.parametrize("pers,n", [(0.5, 6), (0.3, 9), (0.8, 1), (1.7, 4)])
def test_amplitude_exponent_counts_down(pers, n):
    g = Perlin()
    g.persistence = pers
    g.octave_count = n
    t = g.build()
    assert t.amplitudes[n - 1] == pers
    assert t.amplitudes[0] == math.pow(pers, n)
    for i, a in enumerate(t.amplitudes):
        assert a == math.pow(pers, n - i)

def test_zero_seed_gives_zero_octave_seeds_and_idempotent_builds():
    g = Perlin()
    t1 = g.build()
    t2 = g.build()
    assert t1.seeds == (0,) * 6
    assert t2.seeds == t1.seeds
    assert t2.frequencies == t1.frequencies and t2.amplitudes == t1.amplitudes
    assert g.seed == 0
    assert all(s.seed == 0 for s in t2.sources)

def test_legacy_build_draws_java_sequence_and_mutates_seed():
    g = Perlin()
    g.seed = 42
    t = g.build()
    assert list(t.seeds) == JAVA_42
    assert [s.seed for s in t.sources] == JAVA_42
    # the stored seed is left at the last draw
    assert g.seed == JAVA_42[-1]

def test_legacy_consecutive_builds_differ():
    g = Perlin()
    g.seed = 42
    first = g.build().seeds
    second = g.build().seeds
    log.info("legacy seeds: first=%s second=%s", first, second)
    assert first != second
    assert second[0] == JavaRandom(JAVA_42[-1]).next_int()

def test_stable_policy_keeps_seed():
    g = Perlin(PerlinConfig(seed=42, seed_policy="stable"))
    first = g.build().seeds
    second = g.build().seeds
    assert list(first) == JAVA_42
    assert second == first
    assert g.seed == 42

def test_stable_zero_seed():
    g = Perlin(PerlinConfig(seed_policy=SeedPolicy.STABLE))
    assert g.build().seeds == (0,) * 6

def test_quality_forwarded_to_sources():
    g = Perlin()
    g.quality = "fast"
    t = g.build()
    assert all(s.quality.name == "FAST" for s in t.sources)

def test_basis_by_name_or_factory():
    g = Perlin()
    assert all(isinstance(s, PerlinBasis) for s in g.build().sources)
    g.basis = "value"
    assert all(isinstance(s, ValueBasis) for s in g.build().sources)
    g.basis = ValueBasis
    assert all(isinstance(s, ValueBasis) for s in g.build().sources)

def test_unknown_basis_fails_at_build():
    g = Perlin()
    g.basis = "simplex-nope"
    with pytest.raises(UnknownModuleError):
        g.build()

def test_build_replaces_sources():
    g = Perlin()
    t1 = g.build()
    t2 = g.build()
    assert all(a is not b for a, b in zip(t1.sources, t2.sources))
    assert g.table is t2

def test_table_before_build_raises():
    with pytest.raises(NotBuiltError):
        Perlin().table

def test_pow_overflow_gives_inf():
    g = Perlin()
    g.lacunarity = 1e300
    g.octave_count = 4
    t = g.build()
    assert t.frequencies[:2] == (1.0, 1e300)
    assert t.frequencies[2] == math.inf
    g.lacunarity = -1e300
    t = g.build()
    assert t.frequencies[3] == -math.inf

def test_config_snapshot_roundtrip():
    cfg = PerlinConfig(frequency=3.0, lacunarity=2.5, octave_count=12, persistence=0.4,
                       seed=-9, quality="best", seed_policy="stable", basis="value")
    g = Perlin.from_config(cfg)
    assert g.config == cfg
    g.build()
    assert g.config == cfg  # stable policy leaves the seed alone

@pytest.mark.parametrize("attr,value", [("quality", "ultra"), ("seed_policy", "random")])
def test_failed_build_leaves_generator_untouched(attr, value):
    g = Perlin()
    g.seed = 42
    setattr(g, attr, value)
    with pytest.raises(InvalidParamsError):
        g.build()
    assert g.seed == 42
    assert not g.is_built
    with pytest.raises(NotBuiltError):
        g.table

def test_bad_quality_is_a_value_error():
    g = Perlin()
    g.quality = "ultra"
    with pytest.raises(ValueError):
        g.build()

def test_seed_wraps_to_int32():
    a = Perlin(PerlinConfig(seed=2**31, seed_policy="stable"))
    b = Perlin(PerlinConfig(seed=-2**31, seed_policy="stable"))
    ta, tb = a.build(), b.build()
    assert ta.seeds == tb.seeds
    rnd = JavaRandom(-2**31)
    assert list(tb.seeds) == [rnd.next_int() for _ in range(6)]
    for p in [(0.3, 1.7, -2.2), (5.5, 0.25, 9.9)]:
        assert a.sample(*p) == b.sample(*p)

def test_seed_wrapping_to_zero_uses_zero_seeds():
    g = Perlin()
    g.seed = 2**32
    assert g.build().seeds == (0,) * 6
