from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("bignumber")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .congruence import Congruence, LinearDiophantineSolution, QuadraticCongruenceSolution
from .config import has_profile, load_settings, read_current_profile
from .contfrac import (
    ContinuedFraction,
    continued_fraction,
    continued_fraction_of_sqrt,
    enumerate_convergents,
    find_smallest_solution_of_pells_equation,
    get_convergent,
    iter_pell_solutions,
)
from .crt import chinese_remainder_theorem, chinese_remainder_theorem_coprime, crt_pair
from .primes import (
    Primality,
    count_primes,
    enumerate_numbers_by_prime_factors,
    enumerate_prime_factors,
    euler_totient,
    exponent_parities,
    has_only_even_exponents,
    is_prime,
    is_squarefree,
    next_prime,
    prime_factorization,
    prime_factorization_with_sieve,
    prime_factors_and_exponents,
    prime_factors_unique,
    prime_sieve,
    radical,
)
from .quadratic import (
    solve_linear_diophantine,
    solve_quadratic_congruence,
    solve_quadratic_congruence_even_prime_power,
    solve_quadratic_congruence_odd_prime,
    solve_quadratic_congruence_odd_prime_power,
    solve_quadratic_congruence_prime_power,
)
from .runtime import APPLY, CFG
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "Congruence",
    "ContinuedFraction",
    "LinearDiophantineSolution",
    "Primality",
    "QuadraticCongruenceSolution",
    "__version__",
    "chinese_remainder_theorem",
    "chinese_remainder_theorem_coprime",
    "continued_fraction",
    "continued_fraction_of_sqrt",
    "count_primes",
    "crt_pair",
    "enumerate_convergents",
    "enumerate_numbers_by_prime_factors",
    "enumerate_prime_factors",
    "euler_totient",
    "exponent_parities",
    "find_smallest_solution_of_pells_equation",
    "get_convergent",
    "has_only_even_exponents",
    "has_profile",
    "is_prime",
    "is_squarefree",
    "iter_pell_solutions",
    "load_settings",
    "next_prime",
    "prime_factorization",
    "prime_factorization_with_sieve",
    "prime_factors_and_exponents",
    "prime_factors_unique",
    "prime_sieve",
    "radical",
    "read_current_profile",
    "solve_linear_diophantine",
    "solve_quadratic_congruence",
    "solve_quadratic_congruence_even_prime_power",
    "solve_quadratic_congruence_odd_prime",
    "solve_quadratic_congruence_odd_prime_power",
    "solve_quadratic_congruence_prime_power",
    "workspace_dir",
]
