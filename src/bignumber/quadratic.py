# -----------------------------------------------------------------------------
#  quadratic.py
#  Square roots modulo primes, prime powers and composites
# -----------------------------------------------------------------------------

"""
All solvers answer x² ≡ a (mod m) and return None when no root exists.
References:
  http://www.numbertheory.org/php/squareroot.html
  https://www.johndcook.com/blog/quadratic_congruences/
"""

from __future__ import annotations

from itertools import product

import gmpy2

from bignumber.congruence import Congruence, LinearDiophantineSolution, QuadraticCongruenceSolution
from bignumber.crt import chinese_remainder_theorem_coprime
from bignumber.primes import prime_factors_and_exponents
from bignumber.runtime import trace
from bignumber.utility import valuation


def solve_quadratic_congruence_odd_prime(a: int, p: int) -> list[int] | None:
    """
    Roots of x² ≡ a (mod p) for an odd prime p.

    Returns [0] when p | a, None when a is a non-residue, otherwise the two
    roots [r, p - r]. Uses a^((p+1)/4) when p ≡ 3 (mod 4) and Tonelli-Shanks
    otherwise.
    """
    p = gmpy2.mpz(p)
    a = gmpy2.mpz(a) % p
    if a == 0:
        return [0]
    if gmpy2.jacobi(a, p) != 1:
        return None

    if p % 4 == 3:
        r = gmpy2.powmod(a, (p + 1) // 4, p)
        return [int(r), int(p - r)]

    # p - 1 = q·2^s with q odd
    q, s = p - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1

    z = gmpy2.mpz(2)
    while gmpy2.jacobi(z, p) != -1:
        z += 1

    m = s
    c = gmpy2.powmod(z, q, p)
    t = gmpy2.powmod(a, q, p)
    r = gmpy2.powmod(a, (q + 1) // 2, p)

    # order of t halves (at least) every round
    while t != 1:
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % p
            i += 1
        b = gmpy2.powmod(c, 1 << (m - i - 1), p)
        m = i
        c = b * b % p
        t = t * c % p
        r = r * b % p
        trace("sqrtmod", f"tonelli-shanks p={p}: order 2^{i}")

    return [int(r), int(p - r)]


def solve_quadratic_congruence_odd_prime_power(a: int, p: int, n: int) -> list[int] | None:
    """
    Roots of x² ≡ a (mod p^n) for an odd prime p with gcd(a, p) = 1.

    Lifts a root mod p with Hensel's lemma: with y ≡ (2·x_k)^-1 (mod p^k),

        x_{k+1} = x_k - y·(x_k² - a)   (mod p^(k+1))

    Returns [s, p^n - s] or None. The coprimality precondition is not
    re-checked.
    """
    base = solve_quadratic_congruence_odd_prime(a, p)
    if base is None:
        return None

    x = gmpy2.mpz(base[0])
    pk = gmpy2.mpz(p)
    for _ in range(2, n + 1):
        y = gmpy2.invert(2 * x, pk)
        pk *= p
        x = (x - y * (x * x - a)) % pk

    return [int(x), int(pk - x)]


def solve_quadratic_congruence_even_prime_power(a: int, n: int) -> QuadraticCongruenceSolution | None:
    """
    Roots of x² ≡ a (mod 2^n) for odd a.

      n = 1: {1}
      n = 2: {1, 3} if a ≡ 1 (mod 4)
      n ≥ 3: four roots if a ≡ 1 (mod 8), found by starting from {1, 3} and
             adding i·2^(k-1) for k = 3 .. n-1, where i = 1 exactly when
             (x² - a) / 2^k is odd.
    """
    if n < 1:
        raise ValueError(f"exponent must be >= 1, got {n}")

    q = 1 << n
    if n == 1:
        return QuadraticCongruenceSolution(frozenset({1}), q, q)
    if n == 2:
        if a % 4 != 1:
            return None
        return QuadraticCongruenceSolution(frozenset({1, 3}), q, q)
    if a % 8 != 1:
        return None

    roots = [1, 3]
    for k in range(3, n):
        roots = [x + (1 << (k - 1)) if ((x * x - a) >> k) & 1 else x for x in roots]

    s1, s2 = roots
    return QuadraticCongruenceSolution(frozenset({s1, s2, q - s1, q - s2}), q, q)


def solve_quadratic_congruence_prime_power(a: int, p: int, n: int) -> QuadraticCongruenceSolution | None:
    """
    Roots of x² ≡ a (mod p^n) for any prime p.

    - p ∤ a: the coprime solvers answer directly (modulus = p^n).
    - p^n | a: x ≡ 0 (mod p^⌈n/2⌉).
    - otherwise a = A·p^r with 0 < r < n. Odd r has no roots. For even r,
      x = X·p^(r/2) reduces to X² ≡ A (mod p^(n-r)); the rescaled roots are
      complete modulo p^(n - r/2) and lift to p^n (see
      QuadraticCongruenceSolution.all_solutions).
    """
    if n < 1:
        raise ValueError(f"exponent must be >= 1, got {n}")

    p = int(p)
    modulus = p ** n

    if a % p != 0:
        if p == 2:
            sol = solve_quadratic_congruence_even_prime_power(a, n)
            if sol is None:
                return None
            return QuadraticCongruenceSolution(sol.solutions, sol.modulus, modulus)
        roots = solve_quadratic_congruence_odd_prime_power(a, p, n)
        if roots is None:
            return None
        return QuadraticCongruenceSolution(frozenset(roots), modulus, modulus)

    if a % modulus == 0:
        return QuadraticCongruenceSolution(frozenset({0}), p ** ((n + 1) // 2), modulus)

    r, reduced_a = valuation(a, p, limit=n)
    if r % 2:
        trace("sqrtmod", f"{p}^{r} exactly divides {a}: odd valuation, no roots")
        return None

    m = r // 2
    inner = solve_quadratic_congruence_prime_power(reduced_a, p, n - r)
    if inner is None:
        return None

    scale = p ** m
    trace("sqrtmod", f"a = {reduced_a}·{p}^{r}, solved mod {p}^{n - r}, rescaled by {scale}")
    return QuadraticCongruenceSolution(
        frozenset(s * scale for s in inner.solutions),
        p ** (n - m),
        modulus,
    )


def solve_quadratic_congruence(a: int, m: int) -> QuadraticCongruenceSolution | None:
    """
    Roots of x² ≡ a (mod m) for any m > 1.

    A prime-power m is answered by solve_quadratic_congruence_prime_power().
    Otherwise every prime-power component is solved, its lifted roots are
    expanded, and each combination is joined with the coprime CRT; the
    result lists all roots modulo m.
    """
    if m < 2:
        raise ValueError(f"modulus must be greater than 1, got {m}")

    fac = prime_factors_and_exponents(m, test_limit=0)
    if len(fac) == 1:
        (p, e), = fac.items()
        return solve_quadratic_congruence_prime_power(a, p, e)

    parts: list[tuple[int, list[int]]] = []
    for p, e in fac.items():
        sol = solve_quadratic_congruence_prime_power(a, p, e)
        if sol is None:
            trace("sqrtmod", f"no roots modulo {p}^{e}")
            return None
        parts.append((sol.original_modulus, sol.all_solutions()))

    roots = set()
    for choice in product(*(rs for _, rs in parts)):
        combined = chinese_remainder_theorem_coprime(
            Congruence(r, pe) for r, (pe, _) in zip(choice, parts)
        )
        roots.add(combined.a)

    return QuadraticCongruenceSolution(frozenset(roots), m, m)


def solve_linear_diophantine(a: int, b: int, c: int) -> LinearDiophantineSolution | None:
    """
    Integer solutions of a·x + b·y = c (a, b not both zero).

    With a·s + b·t = g = gcd(a, b), solutions exist iff g | c, and then
    (x0, y0) = (k·s, k·t) for k = c / g; the rest follow at steps of
    (b/g, a/g). Reference: https://math.stackexchange.com/a/20727
    """
    if a == 0 and b == 0:
        raise ValueError("a and b must not both be zero")

    g, s, t = gmpy2.gcdext(a, b)
    if c % g != 0:
        return None

    k = c // g
    return LinearDiophantineSolution(
        base=(int(k * s), int(k * t)),
        coefficients=(int(b // g), int(a // g)),
    )
