# -----------------------------------------------------------------------------
#  primes.py
#  Primality testing, prime search and trial-division factorization
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from enum import IntEnum

import gmpy2
from sympy import isprime, primepi, primerange

from bignumber.runtime import CFG, trace

# sympy's BPSW test has no known counterexample and is verified below 2^64
_PROVEN_BOUND = 1 << 64


class Primality(IntEnum):
    """Tri-state primality; NOT_PRIME is falsy so `if is_prime(n):` reads naturally."""
    NOT_PRIME = 0
    PROBABLE_PRIME = 1
    DEFINITE_PRIME = 2


def is_prime(n: int, rounds: int | None = None) -> Primality:
    """
    Primality of n.

    Below PRIMALITY.DETERMINISTIC_BOUND (at most 2^64) the answer is exact and
    reported as DEFINITE_PRIME. Above it, a Miller-Rabin test with ``rounds``
    bases (default PRIMALITY.ROUNDS, 15) decides, and a pass is reported as
    PROBABLE_PRIME. Integers below 2 are never prime.
    """
    n = int(n)
    if n < 2:
        return Primality.NOT_PRIME

    bound = min(int(CFG("PRIMALITY.DETERMINISTIC_BOUND", _PROVEN_BOUND)), _PROVEN_BOUND)
    if n < bound:
        return Primality.DEFINITE_PRIME if isprime(n) else Primality.NOT_PRIME

    if rounds is None:
        rounds = int(CFG("PRIMALITY.ROUNDS", 15))
    return Primality.PROBABLE_PRIME if gmpy2.is_prime(n, rounds) else Primality.NOT_PRIME


def next_prime(n: int) -> int:
    """Smallest prime strictly greater than n (2 for any n < 2)."""
    if n < 2:
        return 2
    return int(gmpy2.next_prime(int(n)))


def prime_sieve(limit: int) -> list[int]:
    """All primes p <= limit, ascending."""
    if limit < 2:
        return []
    return [int(p) for p in primerange(2, int(limit) + 1)]


def count_primes(lo: int, hi: int) -> int:
    """Number of primes p with lo <= p <= hi."""
    if hi < max(lo, 2):
        return 0
    return int(primepi(hi)) - int(primepi(max(lo, 2) - 1))


# -----------------------------------------------------------------------------
#  Factorization
# -----------------------------------------------------------------------------

def enumerate_prime_factors(n: int, test_limit: int | None = None) -> Iterator[tuple[int, int]]:
    """
    Yield (factor, cofactor) for every prime factor of n, with multiplicity,
    in nondecreasing order. ``cofactor`` is what remains of n after dividing
    out that factor; a prime n yields (n, 1) once.

    Trial division runs over successive primes up to ``test_limit``
    (default FACTORING.TEST_LIMIT; 0 means unbounded). When the bound is hit
    the enumeration simply ends, leaving the unfactored part as the last
    reported cofactor. A negative bound raises ValueError. Integers n <= 1
    have no prime factors.

    Stop early by ceasing iteration.
    """
    if test_limit is None:
        test_limit = int(CFG("FACTORING.TEST_LIMIT", 0))
    if test_limit < 0:
        raise ValueError(f"test limit must be non-negative, got {test_limit}")

    if n <= 1:
        return
    if is_prime(n):
        yield int(n), 1
        return

    working = gmpy2.mpz(n)
    test = gmpy2.mpz(1)
    while working > 1:
        if is_prime(working):
            yield int(working), 1
            return

        test = gmpy2.next_prime(test)
        if test_limit and test > test_limit:
            trace("factor", f"test limit {test_limit} reached, cofactor {working} left")
            return

        while True:
            q, r = gmpy2.f_divmod(working, test)
            if r != 0:
                break
            working = q
            yield int(test), int(working)
            if test >= working:
                break


def prime_factorization(n: int, test_limit: int | None = None) -> list[int]:
    """Prime factors of n with multiplicity, nondecreasing (partial if test_limit is hit)."""
    return [f for f, _ in enumerate_prime_factors(n, test_limit)]


def prime_factorization_with_sieve(n: int, sieve: Sequence[int]) -> list[int]:
    """
    Factor n by trial division over a precomputed ascending prime ``sieve``.

    Stops as soon as the remaining cofactor is prime. If the sieve runs out
    first the result is partial: the unfactored cofactor is not included.
    """
    if is_prime(n):
        return [int(n)]

    working = int(n)
    output: list[int] = []
    for test in sieve:
        if working <= 1:
            break
        while True:
            q, r = divmod(working, test)
            if r != 0:
                break
            working = q
            output.append(int(test))
            if test >= working:
                break

        if is_prime(working):
            output.append(working)
            break

    return output


def prime_factors_unique(n: int) -> list[int]:
    """
    Distinct prime factors of n, ascending.

    Walks successive primes (not a fixed sieve), dividing out every copy of a
    factor before moving on.
    """
    if is_prime(n):
        return [int(n)]

    output: list[int] = []
    working = gmpy2.mpz(n)
    test = gmpy2.mpz(1)
    while working > 1:
        if is_prime(working):
            output.append(int(working))
            break

        test = gmpy2.next_prime(test)
        if working % test == 0:
            output.append(int(test))
            while working % test == 0:
                working //= test

    return output


def prime_factors_and_exponents(n: int, test_limit: int | None = None) -> dict[int, int]:
    """{prime: exponent} for n, ordered by prime."""
    fac: dict[int, int] = {}
    for f, _ in enumerate_prime_factors(n, test_limit):
        fac[f] = fac.get(f, 0) + 1
    return fac


def exponent_parities(fac: Mapping[int, int]) -> dict[int, bool]:
    """{prime: True if its exponent is even}."""
    return {p: e % 2 == 0 for p, e in fac.items()}


def has_only_even_exponents(fac: Mapping[int, int]) -> bool:
    """True when every exponent is even, i.e. the factored number is a perfect square."""
    return all(e % 2 == 0 for e in fac.values())


def euler_totient(n: int) -> int:
    """φ(n) = n · ∏ (1 - 1/p) over the distinct primes p | n."""
    if n < 1:
        raise ValueError(f"totient is defined for n >= 1, got {n}")
    num, den = n, 1
    for p in prime_factors_unique(n):
        num *= p - 1
        den *= p
    return num // den


def radical(n: int) -> int:
    """Product of the distinct primes dividing n (rad(1) = 1)."""
    r = 1
    for p in prime_factors_unique(n):
        r *= p
    return r


def is_squarefree(n: int) -> bool:
    if n < 1:
        return False
    return all(e == 1 for e in prime_factors_and_exponents(n).values())


def enumerate_numbers_by_prime_factors(
    primes: Iterable[int], limit: int
) -> Iterator[tuple[int, dict[int, int]]]:
    """
    Yield (product, {prime: multiplicity}) for every product of the given
    distinct primes (repetition allowed) that does not exceed ``limit``.

    The empty product (1, {}) comes first, then each non-empty combination
    exactly once in depth-first order. Branches whose running product would
    exceed ``limit`` are pruned. Every yielded map is a fresh dict.
    """
    ps = [int(p) for p in primes]
    if limit < 1:
        return

    yield 1, {}

    def descend(start: int, total: int, fac: dict[int, int]) -> Iterator[tuple[int, dict[int, int]]]:
        for i in range(start, len(ps)):
            p = ps[i]
            nxt = total * p
            if nxt > limit:
                continue
            fac[p] = fac.get(p, 0) + 1
            yield nxt, dict(fac)
            yield from descend(i, nxt, fac)
            fac[p] -= 1
            if not fac[p]:
                del fac[p]

    yield from descend(0, 1, {})
