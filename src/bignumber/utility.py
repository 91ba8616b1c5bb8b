# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from math import isqrt

_INT_RE = re.compile(r"^[+-]?\d[\d_]*$")
_POW_RE = re.compile(r"^([+-]?\d[\d_]*)\s*(?:\^|\*\*)\s*(\d[\d_]*)\s*(?:([+-])\s*(\d[\d_]*))?$")

# Guard for b^e inputs so a typo cannot ask for a billion-digit number.
MAX_EXPONENT = 100_000


class UserInputError(Exception):
    pass


def is_square(x: int) -> bool:
    if x < 0:
        return False
    r = isqrt(x)
    return r * r == x


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(n)
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2))
    est = (n.bit_length() * 30103) // 100000
    p10 = 10 ** est
    if n < p10:
        while n < p10:
            est -= 1
            p10 //= 10
    else:
        p10 *= 10
        while n >= p10:
            est += 1
            p10 *= 10
    return est + 1


def valuation(n: int, p: int, limit: int | None = None) -> tuple[int, int]:
    """
    Return (r, n / p^r) where r is the largest exponent with p^r | n.
    When ``limit`` is given the count stops at ``limit``.
    Precondition: n != 0, p > 1.
    """
    r = 0
    while n % p == 0 and (limit is None or r < limit):
        n //= p
        r += 1
    return r, n


def parse_int(text: str, label: str = "number") -> int:
    """
    Parse a decimal integer, allowing underscores and the forms b^e, b**e,
    b^e+c and b^e-c.
    """
    s = (text or "").strip().replace(" ", "")
    if _INT_RE.match(s):
        return int(s.replace("_", ""))

    m = _POW_RE.match(s)
    if m:
        base = int(m.group(1).replace("_", ""))
        exp = int(m.group(2).replace("_", ""))
        if exp > MAX_EXPONENT:
            raise UserInputError(f"{label}: exponent {exp} exceeds {MAX_EXPONENT}.")
        value = base ** exp
        if m.group(3):
            offset = int(m.group(4).replace("_", ""))
            value = value + offset if m.group(3) == "+" else value - offset
        return value

    raise UserInputError(f"Invalid input: {label} {text!r} is not an integer.")
