# -----------------------------------------------------------------------------
#  contfrac.py
#  Continued fractions of quadratic irrationals, convergents, Pell's equation
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from fractions import Fraction
from itertools import chain, cycle, islice

import gmpy2

from bignumber.runtime import trace
from bignumber.utility import is_square


@dataclass(frozen=True)
class ContinuedFraction:
    """
    [integral; nonrepeating..., (repeating...)]

    An empty ``repeating`` period means the expansion is finite.
    """
    integral: int
    nonrepeating: tuple[int, ...] = ()
    repeating: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "integral", int(self.integral))
        object.__setattr__(self, "nonrepeating", tuple(int(t) for t in self.nonrepeating))
        object.__setattr__(self, "repeating", tuple(int(t) for t in self.repeating))

    @property
    def period(self) -> int:
        return len(self.repeating)

    @property
    def is_finite(self) -> bool:
        return not self.repeating

    def terms(self) -> Iterator[int]:
        """Partial quotients after the integral part; infinite when periodic."""
        if self.repeating:
            return chain(self.nonrepeating, cycle(self.repeating))
        return iter(self.nonrepeating)

    def __str__(self) -> str:
        parts = [str(t) for t in self.nonrepeating]
        if self.repeating:
            parts.append("(" + ", ".join(str(t) for t in self.repeating) + ")")
        if not parts:
            return f"[{self.integral}]"
        return f"[{self.integral}; {', '.join(parts)}]"


# -----------------------------------------------------------------------------
#  Expansions
# -----------------------------------------------------------------------------

def continued_fraction_of_sqrt(n: int) -> ContinuedFraction:
    """
    Expansion of √n.

    A perfect square gives ContinuedFraction(√n) with an empty period.
    Otherwise the PQa recurrence, starting at P = 0, Q = 1,

        P' = a·Q - P,   Q' = (n - P'²) / Q,   a' = ⌊(a0 + P') / Q'⌋

    runs until the first (P, Q, a) triple comes round again; the terms seen
    in between are the period.
    Reference: https://proofwiki.org/wiki/Continued_Fraction_Expansion_of_Irrational_Square_Root/Example/13/Convergents
    """
    if n < 0:
        raise ValueError(f"cannot expand the square root of a negative number ({n})")

    n = int(n)
    a0 = int(gmpy2.isqrt(n))
    if a0 * a0 == n:
        return ContinuedFraction(a0)

    def step(P: int, Q: int, a: int) -> tuple[int, int, int]:
        P = a * Q - P
        Q = (n - P * P) // Q
        return P, Q, (a0 + P) // Q

    first = step(0, 1, a0)
    state = first
    period: list[int] = []
    while True:
        period.append(state[2])
        state = step(*state)
        if state == first:
            break

    return ContinuedFraction(a0, (), tuple(period))


def continued_fraction(a: int, b: int, c: int) -> ContinuedFraction:
    """
    Expansion of the quadratic irrational (a + √b) / c.

    When c does not divide b - a², all three are rescaled by |c| first so the
    recurrence stays integral. Each step takes x = ⌊(a + √b) / c⌋ and moves to
    a' = x·c - a, c' = (b - a'²) / c. The first (a, c) state to recur after
    the integral part splits the terms into the non-repeating prefix and the
    period.
    Reference: https://www.alpertron.com.ar/CONTFRAC.HTM
    """
    if c == 0:
        raise ValueError("denominator c must be nonzero")
    if b < 0:
        raise ValueError(f"cannot expand the square root of a negative number ({b})")
    if is_square(b):
        raise ValueError(f"{b} is a perfect square; (a + √b) / c is rational")

    a, b, c = int(a), int(b), int(c)
    if (b - a * a) % c != 0:
        a, b, c = a * abs(c), b * c * c, c * abs(c)

    root = int(gmpy2.isqrt(b))

    def step(a: int, c: int) -> tuple[int, int, int]:
        # √b is irrational, so ⌊(a + √b) / c⌋ is ⌊(a + ⌊√b⌋ + 1) / c⌋ for c < 0
        x = (a + root + (1 if c < 0 else 0)) // c
        a = x * c - a
        return x, a, (b - a * a) // c

    integral, a, c = step(a, c)

    seen: dict[tuple[int, int], int] = {}
    output: list[int] = []
    while (a, c) not in seen:
        seen[(a, c)] = len(output)
        x, a, c = step(a, c)
        output.append(x)

    start = seen[(a, c)]
    trace("cf", f"prefix {start} term(s), period {len(output) - start}")
    return ContinuedFraction(integral, tuple(output[:start]), tuple(output[start:]))


# -----------------------------------------------------------------------------
#  Convergents
# -----------------------------------------------------------------------------

def get_convergent(n: int, fraction: ContinuedFraction) -> Fraction:
    """
    The n-th convergent (zero-based), computed from scratch by folding the
    first n terms backwards. A finite expansion stops at its last term.
    """
    if n < 0:
        raise ValueError(f"convergent index must be >= 0, got {n}")

    terms = list(islice(fraction.terms(), n))
    if not terms:
        return Fraction(fraction.integral)

    value = Fraction(terms[-1])
    for t in reversed(terms[:-1]):
        value = t + 1 / value
    return fraction.integral + 1 / value


def enumerate_convergents(fraction: ContinuedFraction) -> Iterator[tuple[int, Fraction]]:
    """
    Yield (depth, convergent) for depth = 0, 1, 2, ...

        p_k = a_k·p_(k-1) + p_(k-2),   q_k = a_k·q_(k-1) + q_(k-2)

    Periodic expansions never end; stop by ceasing iteration.
    """
    p_prev, p = 1, fraction.integral
    q_prev, q = 0, 1
    yield 0, Fraction(p, q)

    for depth, t in enumerate(fraction.terms(), start=1):
        p_prev, p = p, t * p + p_prev
        q_prev, q = q, t * q + q_prev
        yield depth, Fraction(p, q)


# -----------------------------------------------------------------------------
#  Pell's equation
# -----------------------------------------------------------------------------

def find_smallest_solution_of_pells_equation(D: int) -> tuple[int, int]:
    """
    Fundamental solution (x, y) of x² - D·y² = 1 for a positive non-square D.

    With r the period length of √D, the solution is the convergent at
    index r - 1 (r even) or 2r - 1 (r odd), so only those indices are
    tested.
    References:
      https://en.wikipedia.org/wiki/Pell%27s_equation#The_smallest_solution_of_Pell_equations
      https://proofwiki.org/wiki/Pell%27s_Equation/Examples/13
    """
    if D <= 0:
        raise ValueError(f"D must be positive, got {D}")
    if is_square(D):
        raise ValueError(f"D must not be a perfect square, got {D}")

    fraction = continued_fraction_of_sqrt(D)
    expansion = fraction.repeating
    r = len(expansion)

    p0, q0 = fraction.integral, 1
    p1, q1 = p0 * expansion[0] + 1, expansion[0]
    if r in (1, 2) and p1 * p1 - D * q1 * q1 == 1:
        return p1, q1

    k = 1
    while True:
        k += 1
        a_k = expansion[(k - 1) % r]
        p0, p1 = p1, a_k * p1 + p0
        q0, q1 = q1, a_k * q1 + q0
        if (k + 1) % r == 0 and p1 * p1 - D * q1 * q1 == 1:
            trace("pell", f"D={D}: period {r}, solved at convergent {k}")
            return p1, q1


def iter_pell_solutions(D: int) -> Iterator[tuple[int, int]]:
    """
    Yield every positive solution of x² - D·y² = 1 in increasing order:

        x_k + y_k·√D = (x_1 + y_1·√D)^k
    """
    x1, y1 = find_smallest_solution_of_pells_equation(D)
    x, y = x1, y1
    while True:
        yield x, y
        x, y = x1 * x + D * y1 * y, x1 * y + y1 * x
