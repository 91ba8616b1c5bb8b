from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from itertools import count


@dataclass(frozen=True)
class Congruence:
    """
    x ≡ a (mod modulus).

    Equality is structural: Congruence(1, 4) != Congruence(5, 4) even though
    both describe the same residue class.
    """
    a: int
    modulus: int

    def __post_init__(self) -> None:
        if self.modulus < 2:
            raise ValueError(f"modulus must be greater than 1, got {self.modulus}")

    def __str__(self) -> str:
        return f"x ≡ {self.a} (mod {self.modulus})"

    def contains(self, x: int) -> bool:
        return (x - self.a) % self.modulus == 0

    def reduced(self) -> Congruence:
        return Congruence(self.a % self.modulus, self.modulus)


@dataclass(frozen=True)
class QuadraticCongruenceSolution:
    """
    Roots of x² ≡ a (mod original_modulus).

    ``solutions`` is complete modulo ``modulus``. When ``modulus`` is a proper
    divisor of ``original_modulus`` every root also repeats at stride
    ``modulus``; all_solutions() expands that view.
    """
    solutions: frozenset[int]
    modulus: int
    original_modulus: int

    @property
    def is_lifted(self) -> bool:
        return self.modulus != self.original_modulus

    def all_solutions(self) -> list[int]:
        if not self.is_lifted:
            return sorted(self.solutions)
        copies = self.original_modulus // self.modulus
        return sorted(s + k * self.modulus for s in self.solutions for k in range(copies))

    def __str__(self) -> str:
        roots = ", ".join(str(s) for s in sorted(self.solutions))
        if self.is_lifted:
            return f"x ≡ {{{roots}}} (mod {self.modulus}), lifted to mod {self.original_modulus}"
        return f"x ≡ {{{roots}}} (mod {self.modulus})"


@dataclass(frozen=True)
class LinearDiophantineSolution:
    """
    All integer solutions of a·x + b·y = c:

        x = x0 - r·(b/g),  y = y0 + r·(a/g)
    """
    base: tuple[int, int]
    coefficients: tuple[int, int]

    def at(self, r: int) -> tuple[int, int]:
        x0, y0 = self.base
        cx, cy = self.coefficients
        return x0 - r * cx, y0 + r * cy

    def solutions(self) -> Iterator[tuple[int, int, int]]:
        """Yield (r, x, y) for r = 0, 1, 2, ... without end."""
        for r in count():
            x, y = self.at(r)
            yield r, x, y
