"""SHA-256 constants derived from the first 64 primes.

FIPS 180-4 defines both constant tables in terms of prime numbers:

- the initial hash value H(0) is the first 32 bits of the fractional parts of
  the square roots of the first 8 primes (2..19), section 5.3.3;
- the round constants k[0..63] are the first 32 bits of the fractional parts
  of the cube roots of the first 64 primes (2..311), section 4.2.2.

Rather than hard-coding the published tables, this module derives them. The
derivation uses double-precision arithmetic and truncates, which reproduces
the published values bit-for-bit.
"""

from __future__ import annotations

import math
from typing import List, Tuple


def first_primes(n: int) -> List[int]:
    """Return the first `n` primes in increasing order.

    Each candidate is tested by trial division against the primes already
    found; a candidate with no known prime divisor is the next prime.
    """
    primes: List[int] = []
    candidate = 1
    while len(primes) < n:
        candidate += 1
        if any(candidate % p == 0 for p in primes):
            continue
        primes.append(candidate)
    return primes


def nth_prime(n: int) -> int:
    """Return the `n`-th prime, 1-indexed (``nth_prime(1) == 2``)."""
    if n < 1:
        raise ValueError(f"Prime index is 1-indexed, got {n}")
    return first_primes(n)[n - 1]


def fixed_point_fraction(real: float, power: int = 32) -> int:
    """Scale the fractional part of `real` by ``2**power`` and truncate."""
    fractional, _ = math.modf(real)
    return int(fractional * (1 << power))


def fractional_sqrt(n: int) -> int:
    """First 32 bits of the fractional part of sqrt(n)."""
    return fixed_point_fraction(math.sqrt(n))


def fractional_cbrt(n: int) -> int:
    """First 32 bits of the fractional part of the cube root of n."""
    return fixed_point_fraction(n ** (1.0 / 3))


def initial_hash_values() -> Tuple[int, ...]:
    """H(0): square-root fractions of the first 8 primes."""
    return tuple(fractional_sqrt(p) for p in first_primes(8))


def round_constants() -> Tuple[int, ...]:
    """k[0..63]: cube-root fractions of the first 64 primes."""
    return tuple(fractional_cbrt(p) for p in first_primes(64))


# Computed once at import.
H0: Tuple[int, ...] = initial_hash_values()
K_VALUES: Tuple[int, ...] = round_constants()
