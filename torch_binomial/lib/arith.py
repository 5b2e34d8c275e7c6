from __future__ import annotations

from typing import Optional

from .dtypes import IntType


def gcd(n: int, d: int) -> int:
    """Euclidean greatest common divisor of two non-negative integers."""

    while d != 0:
        n, d = d, n % d
    return n


def checked_mul(a: int, b: int, width: IntType) -> Optional[int]:
    product = a * b
    if not width.contains(product):
        return None
    return product


def mul_div(f1: int, f2: int, d: int, width: IntType) -> Optional[int]:
    """Return ``f1 * f2 / d`` in ``width``, or ``None`` if the product overflows.

    ``f1 * f2`` must be divisible by ``d``. Dividing ``f1`` and ``d`` by their
    common factor first keeps both multiplication operands as small as the
    quotient allows, so the step only fails when the quotient itself does not
    fit.
    """

    g = gcd(f1, d)
    return checked_mul(f1 // g, f2 // (d // g), width)


def mul_div_signed(f1: int, f2: int, d: int, width: IntType) -> Optional[int]:
    """Signed counterpart of :func:`mul_div`; ``d`` is positive.

    All divisions are exact, so floor division agrees with truncation and the
    sign of ``f1`` and ``f2`` carries through unchanged.
    """

    g = gcd(abs(f1), d)
    return checked_mul(f1 // g, f2 // (d // g), width)
