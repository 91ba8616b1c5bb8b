# src/bignumber/fmt.py
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from fractions import Fraction

from colorama import Fore, Style

from bignumber.congruence import Congruence, LinearDiophantineSolution, QuadraticCongruenceSolution
from bignumber.contfrac import ContinuedFraction
from bignumber.primes import Primality
from bignumber.utility import dec_digits

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str | None) -> str:
    """Return s with ANSI escape sequences removed."""
    return "" if s is None else ANSI_RE.sub("", s)


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    if not isinstance(n, int):
        return str(n)
    if n == 0:
        return "0"

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def format_factorization(fac: Mapping[int, int]) -> str:
    """
    Turn {p: e, ...} into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for p, e in sorted(fac.items()):
        parts.append(f"{p}^{e}" if e > 1 else f"{p}")
    return " × ".join(parts) if parts else "1"


def format_primality(n: int, verdict: Primality) -> str:
    if verdict is Primality.DEFINITE_PRIME:
        tag = f"{Fore.GREEN}{Style.BRIGHT}prime{Style.RESET_ALL}"
    elif verdict is Primality.PROBABLE_PRIME:
        tag = f"{Fore.YELLOW}{Style.BRIGHT}probable prime{Style.RESET_ALL}"
    else:
        tag = f"{Fore.RED}not prime{Style.RESET_ALL}"
    return f"{abbr_int_fast(n)} is {tag}"


def format_congruence(c: Congruence) -> str:
    return f"x ≡ {Fore.CYAN}{Style.BRIGHT}{c.a}{Style.RESET_ALL} (mod {c.modulus})"


def format_roots(sol: QuadraticCongruenceSolution, a: int) -> list[str]:
    """
    Lines describing the roots of x² ≡ a: the complete residues first,
    then, for a lifted result, every root modulo the original modulus.
    """
    roots = ", ".join(str(s) for s in sorted(sol.solutions))
    lines = [f"x² ≡ {a} (mod {sol.original_modulus}): x ≡ {Fore.CYAN}{Style.BRIGHT}{{{roots}}}{Style.RESET_ALL} (mod {sol.modulus})"]
    if sol.is_lifted:
        expanded = sol.all_solutions()
        lines.append(f"  {len(expanded)} roots mod {sol.original_modulus}: " + ", ".join(str(x) for x in expanded))
    return lines


def format_continued_fraction(cf: ContinuedFraction) -> str:
    """[a0; b1, b2, (r1, r2, ...)] with the period highlighted."""
    parts = [str(t) for t in cf.nonrepeating]
    if cf.repeating:
        period = ", ".join(str(t) for t in cf.repeating)
        parts.append(f"{Fore.MAGENTA}{Style.BRIGHT}({period}){Style.RESET_ALL}")
    if not parts:
        return f"[{cf.integral}]"
    return f"[{cf.integral}; {', '.join(parts)}]"


def format_fraction(r: Fraction) -> str:
    if r.denominator == 1:
        return str(r.numerator)
    return f"{r.numerator}/{r.denominator}"


def format_convergents(items: Iterable[tuple[int, Fraction]]) -> list[str]:
    return [f"  #{depth:<3} {format_fraction(r)}" for depth, r in items]


def format_diophantine(sol: LinearDiophantineSolution) -> str:
    (x0, y0), (cx, cy) = sol.base, sol.coefficients
    return f"x = {x0} - {cx}·r,  y = {y0} + {cy}·r"
