# -----------------------------------------------------------------------------
#  primes.py
#  Trial-division primality, range counting and factor-count search
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Callable, Iterator
from math import isqrt

Tick = Callable[[int], object]


def bounds(a: int, b: int) -> tuple[int, int]:
    """Return (low, high) regardless of argument order."""
    return (a, b) if a <= b else (b, a)


def is_prime(n: int) -> bool:
    """
    Trial division by every d in 2..isqrt(n).

    >>> is_prime(2), is_prime(18)
    (True, False)
    """
    if n <= 1:
        return False
    for d in range(2, isqrt(n) + 1):
        if n % d == 0:
            return False
    return True


def iter_primes(a: int, b: int, *, tick: Tick | None = None) -> Iterator[int]:
    """
    Yield the primes in [min(a, b), max(a, b)] in ascending order.
    `tick` (if given) is called with every candidate before it is tested.
    """
    lo, hi = bounds(a, b)
    for i in range(lo, hi + 1):
        if tick is not None:
            tick(i)
        if is_prime(i):
            yield i


def count_primes(
    a: int,
    b: int,
    emit: Callable[[int], object] | None = None,
    *,
    tick: Tick | None = None,
) -> int:
    """
    Count primes in the inclusive range, endpoints in either order.
    If `emit` is given it is called with each prime as it is found.
    """
    total = 0
    for p in iter_primes(a, b, tick=tick):
        total += 1
        if emit is not None:
            emit(p)
    return total


def prime_factors(n: int) -> list[int]:
    """
    Ascending prime factors of n, repeated by multiplicity.

    The divisor candidate runs up to the remaining quotient, which shrinks as
    factors are divided out; composite candidates are skipped.

    >>> prime_factors(12)
    [2, 2, 3]
    """
    factors: list[int] = []
    rest = n
    j = 2
    while j <= rest:
        if is_prime(j):
            while rest % j == 0:
                factors.append(j)
                rest //= j
        j += 1
    return factors


def factor_count(n: int) -> int:
    """Number of prime factors of n counted with multiplicity (Ω(n))."""
    return len(prime_factors(n))


def iter_with_factor_count(
    a: int,
    b: int,
    k: int,
    *,
    tick: Tick | None = None,
) -> Iterator[tuple[int, list[int]]]:
    """
    Yield (i, factors) for every i in [max(2, min(a, b)), max(a, b)]
    having exactly k prime factors. 1 is never a candidate.
    """
    lo, hi = bounds(a, b)
    for i in range(max(2, lo), hi + 1):
        if tick is not None:
            tick(i)
        factors = prime_factors(i)
        if len(factors) == k:
            yield i, factors


def count_with_factor_count(
    a: int,
    b: int,
    k: int,
    emit: Callable[[int, list[int]], object] | None = None,
    *,
    tick: Tick | None = None,
) -> int:
    """
    Count integers in the range with exactly k prime factors (with multiplicity).
    k = 0 never matches since every integer >= 2 has a prime factor.
    """
    total = 0
    for i, factors in iter_with_factor_count(a, b, k, tick=tick):
        total += 1
        if emit is not None:
            emit(i, factors)
    return total
