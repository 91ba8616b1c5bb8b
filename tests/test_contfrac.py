# tests/test_contfrac.py
from __future__ import annotations

from fractions import Fraction
from itertools import islice
from math import isqrt

import pytest

from bignumber.contfrac import (
    ContinuedFraction,
    continued_fraction,
    continued_fraction_of_sqrt,
    enumerate_convergents,
    find_smallest_solution_of_pells_equation,
    get_convergent,
    iter_pell_solutions,
)

# ---------- √n ----------------------------------------------------------------

SQRT_CASES = [
    (2, 1, (2,)),
    (3, 1, (1, 2)),
    (7, 2, (1, 1, 1, 4)),
    (13, 3, (1, 1, 1, 1, 6)),
    (23, 4, (1, 3, 1, 8)),
    (61, 7, (1, 4, 3, 1, 2, 2, 1, 3, 4, 1, 14)),
]


@pytest.mark.parametrize("n,a0,period", SQRT_CASES, ids=[f"sqrt{n}" for n, _, _ in SQRT_CASES])
def test_sqrt_expansion(n, a0, period):
    assert continued_fraction_of_sqrt(n) == ContinuedFraction(a0, (), period)


@pytest.mark.parametrize("n", [0, 1, 16, 10**20])
def test_sqrt_of_perfect_square(n):
    cf = continued_fraction_of_sqrt(n)
    assert cf.integral**2 == n
    assert cf.repeating == ()
    assert cf.is_finite


def test_sqrt_of_negative_is_rejected():
    with pytest.raises(ValueError):
        continued_fraction_of_sqrt(-2)


def test_sqrt_period_ends_with_twice_the_integral():
    for n in range(2, 300):
        cf = continued_fraction_of_sqrt(n)
        if cf.repeating:
            assert cf.repeating[-1] == 2 * cf.integral


# ---------- (a + √b) / c ------------------------------------------------------

QUADRATIC_CASES = [
    (1, 5, 2, ContinuedFraction(1, [], [1])),
    (1, 5, 3, ContinuedFraction(1, [], [12, 1, 2, 2, 2, 1])),
    (1, 51, 2, ContinuedFraction(4, [], [14, 7])),
    (1, 51, 3, ContinuedFraction(2, [], [1, 2, 2, 42, 2, 2, 1, 4, 21, 4])),
    (0, 2, 1, ContinuedFraction(1, [], [2])),
    (1, 5, -2, ContinuedFraction(-2, [2], [1])),
]


@pytest.mark.parametrize(
    "a,b,c,expected", QUADRATIC_CASES, ids=[f"({a}+sqrt{b})/{c}" for a, b, c, _ in QUADRATIC_CASES]
)
def test_quadratic_irrational(a, b, c, expected):
    assert continued_fraction(a, b, c) == expected


def test_quadratic_irrational_matches_sqrt():
    for n in (2, 3, 7, 13, 19, 94):
        assert continued_fraction(0, n, 1) == continued_fraction_of_sqrt(n)


@pytest.mark.parametrize("a,b,c", [(1, 5, 0), (1, 9, 2), (1, -5, 2)], ids=["zero_c", "square_b", "negative_b"])
def test_quadratic_irrational_rejects_bad_input(a, b, c):
    with pytest.raises(ValueError):
        continued_fraction(a, b, c)


def test_continued_fraction_accepts_lists():
    cf = ContinuedFraction(4, [1, 2], [3])
    assert cf.nonrepeating == (1, 2)
    assert cf.repeating == (3,)
    assert cf.period == 1
    assert list(islice(cf.terms(), 5)) == [1, 2, 3, 3, 3]
    assert str(cf) == "[4; 1, 2, (3)]"


# ---------- convergents -------------------------------------------------------

CONVERGENT_CASES = [
    (ContinuedFraction(1, [], [2]), {0: 1, 1: Fraction(3, 2), 2: Fraction(7, 5), 3: Fraction(17, 12)}),
    (ContinuedFraction(1, [], [1]), {0: 1, 1: 2}),
    (
        ContinuedFraction(1, [], [12, 1, 2, 2, 2, 1]),
        {
            0: 1,
            1: Fraction(13, 12),
            2: Fraction(14, 13),
            3: Fraction(41, 38),
            4: Fraction(96, 89),
            5: Fraction(233, 216),
            6: Fraction(329, 305),
        },
    ),
    (ContinuedFraction(4, [], [14, 7]), {0: 4, 1: Fraction(57, 14), 2: Fraction(403, 99)}),
    (
        ContinuedFraction(2, [], [1, 2, 2, 42, 2, 2, 1, 4, 21, 4]),
        {
            0: 2,
            1: 3,
            2: Fraction(8, 3),
            3: Fraction(19, 7),
            4: Fraction(806, 297),
            5: Fraction(1631, 601),
            6: Fraction(4068, 1499),
            7: Fraction(5699, 2100),
            8: Fraction(26864, 9899),
            9: Fraction(569843, 209979),
            10: Fraction(2306236, 849815),
        },
    ),
    (ContinuedFraction(-2, [2], [1]), {0: -2, 1: Fraction(-3, 2), 2: Fraction(-5, 3), 3: Fraction(-8, 5)}),
]

CONVERGENT_IDS = [str(cf) for cf, _ in CONVERGENT_CASES]


@pytest.mark.parametrize("fraction,expected", CONVERGENT_CASES, ids=CONVERGENT_IDS)
def test_enumerate_convergents(fraction, expected):
    depth_max = max(expected)
    got = dict(islice(enumerate_convergents(fraction), depth_max + 1))
    for depth, value in expected.items():
        assert got[depth] == value, depth


@pytest.mark.parametrize("fraction,expected", CONVERGENT_CASES, ids=CONVERGENT_IDS)
def test_get_convergent(fraction, expected):
    for depth, value in expected.items():
        assert get_convergent(depth, fraction) == value, depth


def test_get_convergent_agrees_with_enumeration():
    cf = continued_fraction_of_sqrt(94)
    for depth, value in islice(enumerate_convergents(cf), 40):
        assert get_convergent(depth, cf) == value


def test_convergents_of_sqrt2():
    cf = continued_fraction_of_sqrt(2)
    got = [r for _, r in islice(enumerate_convergents(cf), 4)]
    assert got == [1, Fraction(3, 2), Fraction(7, 5), Fraction(17, 12)]


def test_finite_expansion():
    cf = ContinuedFraction(3, [7, 15])
    assert list(enumerate_convergents(cf)) == [(0, 3), (1, Fraction(22, 7)), (2, Fraction(333, 106))]
    assert get_convergent(10, cf) == Fraction(333, 106)
    assert get_convergent(0, ContinuedFraction(5)) == 5


def test_get_convergent_rejects_negative_index():
    with pytest.raises(ValueError):
        get_convergent(-1, ContinuedFraction(1, [], [2]))


# ---------- Pell's equation ---------------------------------------------------

PELL_CASES = [
    (2, (3, 2)),
    (3, (2, 1)),
    (5, (9, 4)),
    (7, (8, 3)),
    (13, (649, 180)),
    (61, (1766319049, 226153980)),
    (109, (158070671986249, 15140424455100)),
]


@pytest.mark.parametrize("D,expected", PELL_CASES, ids=[f"D{d}" for d, _ in PELL_CASES])
def test_smallest_pell_solution(D, expected):
    x, y = find_smallest_solution_of_pells_equation(D)
    assert (x, y) == expected
    assert x * x - D * y * y == 1


def test_pell_brute_force_small_D():
    for D in range(2, 60):
        if isqrt(D) ** 2 == D:
            continue
        x, y = find_smallest_solution_of_pells_equation(D)
        assert x * x - D * y * y == 1
        # nothing smaller
        for yy in range(1, y):
            assert isqrt(1 + D * yy * yy) ** 2 != 1 + D * yy * yy, (D, yy)


@pytest.mark.parametrize("D", [0, -3, 1, 16])
def test_pell_rejects_bad_D(D):
    with pytest.raises(ValueError):
        find_smallest_solution_of_pells_equation(D)


def test_iter_pell_solutions():
    assert list(islice(iter_pell_solutions(2), 4)) == [(3, 2), (17, 12), (99, 70), (577, 408)]
    for x, y in islice(iter_pell_solutions(13), 5):
        assert x * x - 13 * y * y == 1
