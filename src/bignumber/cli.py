# src/bignumber/cli.py

"""
BigNumber - number theory on arbitrary-precision integers

Description:
    Command-line front end for primality testing, factorization, the Chinese
    Remainder Theorem, modular square roots, continued fractions and Pell's
    equation.

usage: see bignumber -h
"""

from __future__ import annotations

import argparse
import sys
import textwrap
from importlib.resources import files as pkg_files
from itertools import islice

from colorama import Fore, Style
from colorama import init as colorama_init

from bignumber import config as CONFIG
from bignumber import __version__ as _ver
from bignumber.congruence import Congruence
from bignumber.contfrac import (
    continued_fraction,
    continued_fraction_of_sqrt,
    enumerate_convergents,
    iter_pell_solutions,
)
from bignumber.crt import chinese_remainder_theorem, chinese_remainder_theorem_coprime
from bignumber.fmt import (
    abbr_int_fast,
    format_congruence,
    format_continued_fraction,
    format_convergents,
    format_diophantine,
    format_factorization,
    format_primality,
    format_roots,
)
from bignumber.primes import (
    is_prime,
    next_prime,
    prime_factors_and_exponents,
    prime_factors_unique,
)
from bignumber.quadratic import solve_linear_diophantine, solve_quadratic_congruence
from bignumber.runtime import APPLY, CFG, ensure_runtime_deps
from bignumber.runtime import current as _rt_current
from bignumber.utility import UserInputError, parse_int
from bignumber.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

EXIT_OK = 0
EXIT_NO_SOLUTION = 1
EXIT_USER_ERROR = 2


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _no_solution(what: str) -> int:
    print(f"{Fore.YELLOW}No solution:{Style.RESET_ALL} {what}")
    return EXIT_NO_SOLUTION


def _parse_congruence(text: str) -> Congruence:
    a, sep, m = text.partition(":")
    if not sep:
        raise UserInputError(f"Invalid input: congruence {text!r} must look like A:M.")
    return Congruence(parse_int(a, "residue"), parse_int(m, "modulus"))


# ---- commands ----

def cmd_isprime(args) -> int:
    n = parse_int(args.n)
    print(format_primality(n, is_prime(n, args.rounds)))
    return EXIT_OK


def cmd_nextprime(args) -> int:
    print(next_prime(parse_int(args.n)))
    return EXIT_OK


def cmd_factor(args) -> int:
    n = parse_int(args.n)
    limit = None if args.limit is None else parse_int(args.limit, "limit")

    if args.unique:
        print(f"{abbr_int_fast(n)}: " + ", ".join(str(p) for p in prime_factors_unique(n)))
        return EXIT_OK

    fac = prime_factors_and_exponents(n, test_limit=limit)
    print(f"{abbr_int_fast(n)} = {format_factorization(fac)}")

    # A bounded search can leave an unfactored part behind
    rest = n
    for p, e in fac.items():
        rest //= p ** e
    if n > 1 and rest > 1:
        print(f"{Fore.YELLOW}Unfactored cofactor:{Style.RESET_ALL} {abbr_int_fast(rest)}")
    return EXIT_OK


def cmd_crt(args) -> int:
    congruences = [_parse_congruence(t) for t in args.congruences]
    if args.coprime:
        try:
            result = chinese_remainder_theorem_coprime(congruences)
        except ZeroDivisionError:
            raise UserInputError("moduli are not pairwise coprime; drop --coprime.") from None
    else:
        result = chinese_remainder_theorem(congruences)

    if result is None:
        return _no_solution("the congruences are inconsistent")
    print(format_congruence(result))
    return EXIT_OK


def cmd_sqrtmod(args) -> int:
    a = parse_int(args.a, "residue")
    m = parse_int(args.m, "modulus")
    sol = solve_quadratic_congruence(a, m)
    if sol is None:
        return _no_solution(f"{a} is not a square modulo {m}")
    for line in format_roots(sol, a):
        print(line)
    return EXIT_OK


def cmd_cf(args) -> int:
    if len(args.values) == 1:
        n = parse_int(args.values[0])
        cf = continued_fraction_of_sqrt(n)
        label = f"√{n}"
    elif len(args.values) == 3:
        a, b, c = (parse_int(v) for v in args.values)
        cf = continued_fraction(a, b, c)
        label = f"({a} + √{b}) / {c}"
    else:
        raise UserInputError("cf takes either N or A B C.")

    print(f"{label} = {format_continued_fraction(cf)}")
    if cf.repeating:
        print(f"  period length {cf.period}")
    return EXIT_OK


def cmd_convergents(args) -> int:
    n = parse_int(args.n)
    count = args.count if args.count is not None else int(CFG("CLI.CONVERGENTS", 8))
    cf = continued_fraction_of_sqrt(n)
    print(f"√{n} = {format_continued_fraction(cf)}")
    for line in format_convergents(islice(enumerate_convergents(cf), max(1, count))):
        print(line)
    return EXIT_OK


def cmd_pell(args) -> int:
    D = parse_int(args.d, "D")
    print(f"x² - {D}·y² = 1")
    for x, y in islice(iter_pell_solutions(D), max(1, args.count)):
        print(f"  x = {Fore.CYAN}{abbr_int_fast(x)}{Style.RESET_ALL}, y = {Fore.CYAN}{abbr_int_fast(y)}{Style.RESET_ALL}")
    return EXIT_OK


def cmd_dioph(args) -> int:
    a, b, c = parse_int(args.a), parse_int(args.b), parse_int(args.c)
    sol = solve_linear_diophantine(a, b, c)
    if sol is None:
        return _no_solution(f"gcd({a}, {b}) does not divide {c}")
    print(f"{a}·x + {b}·y = {c}")
    print(f"  {format_diophantine(sol)}")
    return EXIT_OK


def cmd_profiles(args) -> int:
    if args.use:
        if not CONFIG.has_profile(args.use):
            raise UserInputError(
                f"Unknown profile '{args.use}'. Available: {', '.join(CONFIG.list_all_profiles())}"
            )
        CONFIG.write_current_profile(args.use)
        print(f"Active profile: {args.use}")
        return EXIT_OK

    pairs = CONFIG.list_profiles_with_descriptions()
    if not pairs:
        print("\nAvailable profiles: (none)")
        return EXIT_OK

    current = CONFIG.read_current_profile() or "default"
    lines = []
    for name, desc in pairs:
        mark = "*" if name == current else " "
        lines.append(f"{mark} {name:13} - {desc}")
    print("\nAvailable profiles:\n  " + "\n  ".join(lines))
    return EXIT_OK


def cmd_where(args) -> int:
    print(f"Workspace: {workspace_dir()}")
    print(f"Package:   {pkg_files('bignumber')}")
    return EXIT_OK


def cmd_init(args) -> int:
    if args.overwrite:
        ws, copied = seed_workspace(overwrite=True)
        print(f"Workspace ready at: {ws} (overwrote existing files)")
    else:
        ws, _, copied = ensure_workspace_seeded()
        print(f"Workspace ready at: {ws}")
    print(f"Copied -> profiles: {copied.get('profiles', 0)}")
    return EXIT_OK


# ---- argparse ----

def _build_parser() -> argparse.ArgumentParser:
    epilog = textwrap.dedent("""\
    integers:
      Plain digits (underscores allowed) or powers such as 2^127-1 and 10**30+7.

    exit codes:
      0  success
      1  no solution exists
      2  invalid input or profile
    """)

    p = argparse.ArgumentParser(
        prog="bignumber",
        description=f"BigNumber v{_ver} - number theory on arbitrary-precision integers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("--profile", default=None, help="Settings profile to use (default: last used, else 'default')")
    p.add_argument("--debug", action="store_true", help="Print internal trace info on stderr")

    sub = p.add_subparsers(dest="command", metavar="command", required=True)

    s = sub.add_parser("isprime", help="Test primality")
    s.add_argument("n")
    s.add_argument("--rounds", type=int, default=None, help="Miller-Rabin rounds above the deterministic bound")
    s.set_defaults(func=cmd_isprime)

    s = sub.add_parser("nextprime", help="Smallest prime greater than N")
    s.add_argument("n")
    s.set_defaults(func=cmd_nextprime)

    s = sub.add_parser("factor", help="Prime factorization by trial division")
    s.add_argument("n")
    s.add_argument("--limit", default=None, help="Largest trial divisor (0 = unbounded)")
    s.add_argument("--unique", action="store_true", help="Only list the distinct prime factors")
    s.set_defaults(func=cmd_factor)

    s = sub.add_parser("crt", help="Solve x ≡ A (mod M) for several A:M pairs")
    s.add_argument("congruences", nargs="+", metavar="A:M")
    s.add_argument("--coprime", action="store_true", help="Moduli are pairwise coprime")
    s.set_defaults(func=cmd_crt)

    s = sub.add_parser("sqrtmod", help="Solve x² ≡ A (mod M)")
    s.add_argument("a")
    s.add_argument("m")
    s.set_defaults(func=cmd_sqrtmod)

    s = sub.add_parser("cf", help="Continued fraction of √N or (A + √B) / C")
    s.add_argument("values", nargs="+", metavar="N | A B C")
    s.set_defaults(func=cmd_cf)

    s = sub.add_parser("convergents", help="Convergents of √N")
    s.add_argument("n")
    s.add_argument("--count", type=int, default=None, help="How many to print (default CLI.CONVERGENTS)")
    s.set_defaults(func=cmd_convergents)

    s = sub.add_parser("pell", help="Solutions of x² - D·y² = 1")
    s.add_argument("d", metavar="D")
    s.add_argument("--count", type=int, default=1, help="How many solutions to print")
    s.set_defaults(func=cmd_pell)

    s = sub.add_parser("dioph", help="Solve A·x + B·y = C in integers")
    s.add_argument("a")
    s.add_argument("b")
    s.add_argument("c")
    s.set_defaults(func=cmd_dioph)

    s = sub.add_parser("profiles", help="List profiles, or pick the active one")
    s.add_argument("--use", default=None, metavar="NAME", help="Remember NAME as the active profile")
    s.set_defaults(func=cmd_profiles)

    s = sub.add_parser("where", help="Show the workspace and package paths")
    s.set_defaults(func=cmd_where)

    s = sub.add_parser("init", help="Create the workspace and copy the packaged profiles")
    s.add_argument("--overwrite", action="store_true", help="Replace existing profile files")
    s.set_defaults(func=cmd_init)

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return EXIT_USER_ERROR
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = "--debug" in (argv if argv is not None else sys.argv)
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _select_profile_name(explicit: str | None) -> str:
    """
    Precedence:
      1) explicit --profile
      2) last used (from workspace)
      3) 'default'
    """
    if explicit:
        if not CONFIG.has_profile(explicit):
            raise UserInputError(
                f"Unknown profile '{explicit}'. Available: {', '.join(CONFIG.list_all_profiles())}"
            )
        return explicit
    last = CONFIG.read_current_profile()
    if last and CONFIG.has_profile(last):
        return last
    return "default"


def _main_impl(argv=None) -> int:
    colorama_init()

    parser = _build_parser()
    args = parser.parse_args(argv)

    if not ensure_runtime_deps(strict=True):
        return 1

    ensure_workspace_seeded()

    profile_name = _select_profile_name(args.profile)
    if CONFIG.has_profile(profile_name):
        APPLY(CONFIG.load_settings(profile_name))

    # --debug wins over the profile
    rt = _rt_current()
    if args.debug:
        rt.debug = True
        print(f"[debug] active profile: {rt.profile_name}", file=sys.stderr)

    try:
        return args.func(args)
    except ValueError as e:
        raise UserInputError(str(e)) from None


if __name__ == "__main__":
    raise SystemExit(main())
