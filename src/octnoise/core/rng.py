from __future__ import annotations

__all__ = [
    "JavaRandom",
    "splitmix64",
    "derive_seed64",
    "to_int32_signed",
]

_MASK32 = 0xFFFFFFFF
_MASK48 = (1 << 48) - 1
_MASK64 = 0xFFFFFFFFFFFFFFFF

# java.util.Random LCG constants
_MULTIPLIER = 0x5DEECE66D
_ADDEND = 0xB


def to_int32_signed(u: int) -> int:
    """Reinterpret the low 32 bits of ``u`` as a two's complement int32."""
    u &= _MASK32
    return u - (1 << 32) if u & 0x80000000 else u


class JavaRandom:
    """Bit-exact port of the ``java.util.Random`` linear congruential generator.

    Per-octave seeds are drawn from this sequence so that a given base seed
    yields the same octave seeds as the Java library the generator
    reproduces. Only the integer draws are needed here.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self.set_seed(seed)

    def set_seed(self, seed: int) -> None:
        # negative seeds behave like a sign-extended Java long
        self._state = (seed ^ _MULTIPLIER) & _MASK48

    def _next(self, bits: int) -> int:
        self._state = (self._state * _MULTIPLIER + _ADDEND) & _MASK48
        return to_int32_signed(self._state >> (48 - bits))

    def next_int(self, bound: int | None = None) -> int:
        """``nextInt()`` without a bound, ``nextInt(bound)`` otherwise."""
        if bound is None:
            return self._next(32)
        if bound <= 0:
            raise ValueError("bound must be positive")
        if bound & -bound == bound:
            return (bound * self._next(31)) >> 31
        while True:
            bits = self._next(31)
            val = bits % bound
            # Java rejects draws whose int arithmetic would overflow here
            if bits - val + (bound - 1) < (1 << 31):
                return val


def splitmix64(x: int) -> int:
    x &= _MASK64
    x = (x + 0x9E3779B97F4A7C15) & _MASK64
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & _MASK64
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & _MASK64
    z ^= z >> 31
    return z & _MASK64


def derive_seed64(*keys: int) -> int:
    """Fold integer keys (negative allowed) into one unsigned 64-bit hash."""
    s = 0x1234ABCD9876EF01
    for k in keys:
        s = splitmix64(s ^ (k & _MASK64))
    return s
