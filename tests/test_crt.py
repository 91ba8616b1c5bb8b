# tests/test_crt.py
from __future__ import annotations

import pytest

from bignumber.congruence import Congruence
from bignumber.crt import chinese_remainder_theorem, chinese_remainder_theorem_coprime, crt_pair

# ---------- Congruence --------------------------------------------------------


def test_congruence_equality_is_structural():
    assert Congruence(1, 4) == Congruence(1, 4)
    assert Congruence(1, 4) != Congruence(5, 4)
    assert Congruence(5, 4).reduced() == Congruence(1, 4)
    assert Congruence(1, 4).contains(5)
    assert not Congruence(1, 4).contains(6)


@pytest.mark.parametrize("modulus", [1, 0, -3])
def test_congruence_rejects_small_modulus(modulus):
    with pytest.raises(ValueError):
        Congruence(0, modulus)


def test_congruence_str():
    assert str(Congruence(3, 7)) == "x ≡ 3 (mod 7)"


# ---------- pairwise (Ore) ----------------------------------------------------

PAIR_CASES = [
    (Congruence(2, 3), Congruence(3, 5), Congruence(8, 15)),
    (Congruence(2, 6), Congruence(8, 9), Congruence(8, 18)),     # gcd 3
    (Congruence(3, 4), Congruence(1, 8), None),                  # 3 - 1 not divisible by 4
    (Congruence(1, 4), Congruence(2, 6), None),
    (Congruence(5, 12), Congruence(5, 12), Congruence(5, 12)),
]


@pytest.mark.parametrize("c1,c2,expected", PAIR_CASES, ids=[f"{a.modulus}_{b.modulus}_{e is not None}" for a, b, e in PAIR_CASES])
def test_crt_pair(c1, c2, expected):
    assert crt_pair(c1, c2) == expected


# ---------- systems -----------------------------------------------------------

SYSTEM = [Congruence(3, 4), Congruence(4, 7), Congruence(1, 9), Congruence(0, 11)]


def test_general_system():
    assert chinese_remainder_theorem(SYSTEM) == Congruence(1243, 2772)


def test_coprime_system():
    assert chinese_remainder_theorem_coprime(SYSTEM) == Congruence(1243, 2772)


def test_general_and_coprime_agree():
    moduli = [5, 7, 9, 11, 13, 16]
    for shift in range(25):
        system = [Congruence((shift * 7 + i * 3) % m, m) for i, m in enumerate(moduli)]
        assert chinese_remainder_theorem(system) == chinese_remainder_theorem_coprime(system)


def test_general_system_with_shared_factors():
    result = chinese_remainder_theorem([Congruence(1, 6), Congruence(3, 10), Congruence(13, 15)])
    assert result == Congruence(13, 30)
    assert all(c.contains(13) for c in [Congruence(1, 6), Congruence(3, 10), Congruence(13, 15)])


def test_general_system_without_solution():
    assert chinese_remainder_theorem([Congruence(1, 2), Congruence(1, 3), Congruence(0, 4)]) is None


def test_solution_satisfies_every_congruence():
    result = chinese_remainder_theorem(SYSTEM)
    assert all(c.contains(result.a) for c in SYSTEM)
    assert 0 <= result.a < result.modulus


@pytest.mark.parametrize("solver", [chinese_remainder_theorem, chinese_remainder_theorem_coprime])
def test_singleton_is_returned_unchanged(solver):
    c = Congruence(1243, 2772)
    assert solver([c]) == c
    # not reduced either
    assert solver([Congruence(9, 4)]) == Congruence(9, 4)


@pytest.mark.parametrize("solver", [chinese_remainder_theorem, chinese_remainder_theorem_coprime])
def test_empty_list_is_rejected(solver):
    with pytest.raises(ValueError):
        solver([])


def test_coprime_solver_accepts_generators():
    assert chinese_remainder_theorem_coprime(c for c in SYSTEM) == Congruence(1243, 2772)


def test_coprime_solver_on_shared_factor_raises():
    with pytest.raises(ZeroDivisionError):
        chinese_remainder_theorem_coprime([Congruence(1, 4), Congruence(1, 6)])


def test_large_moduli():
    p, q = 2**61 - 1, 2**89 - 1
    result = chinese_remainder_theorem([Congruence(12345, p), Congruence(67890, q)])
    assert result.modulus == p * q
    assert result.a % p == 12345
    assert result.a % q == 67890
