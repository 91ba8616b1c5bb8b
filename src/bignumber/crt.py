# -----------------------------------------------------------------------------
#  crt.py
#  Chinese Remainder Theorem: folding systems of linear congruences
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterable

import gmpy2

from bignumber.congruence import Congruence
from bignumber.runtime import trace


def crt_pair(c1: Congruence, c2: Congruence) -> Congruence | None:
    """
    Combine two congruences with Ore's algorithm (general moduli).

    With g = gcd(m1, m2) and Bézout coefficients m1·x2 + m2·x1 = g, a solution
    exists iff g | (a1 - a2), and then

        x ≡ (a1·x1·m2 + a2·x2·m1) / g   (mod lcm(m1, m2))

    Returns None when the pair is inconsistent.

    Reference: O. Ore, American Mathematical Monthly 59 (1952), 365-370.
    """
    a1, m1 = gmpy2.mpz(c1.a), gmpy2.mpz(c1.modulus)
    a2, m2 = gmpy2.mpz(c2.a), gmpy2.mpz(c2.modulus)

    g, x2, x1 = gmpy2.gcdext(m1, m2)
    if (a1 - a2) % g != 0:
        return None

    lcm = m1 * m2 // g
    x = (a1 * x1 * (m2 // g) + a2 * x2 * (m1 // g)) % lcm
    return Congruence(int(x), int(lcm))


def _first_and_rest(congruences: Iterable[Congruence]) -> tuple[Congruence, list[Congruence]]:
    items = list(congruences)
    if not items:
        raise ValueError("at least one congruence is required")
    return items[0], items[1:]


def chinese_remainder_theorem(congruences: Iterable[Congruence]) -> Congruence | None:
    """
    Solve x ≡ a_i (mod m_i) for arbitrary moduli > 1.

    Folds left to right with crt_pair(); returns None as soon as one step has
    no solution. A single congruence comes back unchanged.
    """
    total, rest = _first_and_rest(congruences)
    for c in rest:
        combined = crt_pair(total, c)
        if combined is None:
            trace("crt", f"{total} and {c} are inconsistent")
            return None
        total = combined
    return total


def chinese_remainder_theorem_coprime(congruences: Iterable[Congruence]) -> Congruence:
    """
    Solve x ≡ a_i (mod m_i) when the moduli are pairwise coprime.

    Uses the closed form with modular inverses, so a solution always exists.
    Coprimality is not checked; a shared factor makes the inverse undefined
    and gmpy2 raises ZeroDivisionError. A single congruence comes back
    unchanged.
    """
    first, rest = _first_and_rest(congruences)
    if not rest:
        return first

    x, m = gmpy2.mpz(first.a), gmpy2.mpz(first.modulus)
    for c in rest:
        a_k, m_k = gmpy2.mpz(c.a), gmpy2.mpz(c.modulus)
        # m^-1·m·a_k + m_k^-1·m_k·x, reduced mod m·m_k
        t = gmpy2.invert(m, m_k) * m * a_k + gmpy2.invert(m_k, m) * m_k * x
        m = m * m_k
        x = t % m
    return Congruence(int(x), int(m))
