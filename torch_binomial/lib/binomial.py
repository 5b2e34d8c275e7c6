from __future__ import annotations

from typing import List, Optional, Union

import torch

from .arith import mul_div, mul_div_signed
from .dtypes import F32, F64, ISIZE, USIZE, FloatType, IntType, NumericType, resolve_dtype
from .stats import ReductionStats

Number = Union[int, float]
DTypeLike = Union[str, NumericType, torch.dtype]


def choose_unsigned(n: int, k: int, width: IntType = USIZE, stats: Optional[ReductionStats] = None) -> Optional[int]:
    """``n choose k`` for unsigned ``n`` and ``k``; ``None`` on overflow of ``width``."""

    if k > n:
        if stats is not None:
            stats.mark_shortcut("zero")
        return 0
    if n - k < k:
        if stats is not None:
            stats.mark_shortcut("symmetry")
        k = n - k

    res = 1
    for i in range(k):
        if stats is not None:
            stats.incr_steps()
        res = mul_div(res, n - i, i + 1, width)
        if res is None:
            if stats is not None:
                stats.mark_overflow()
            return None
    return res


def choose_signed(n: int, k: int, width: IntType = ISIZE, stats: Optional[ReductionStats] = None) -> Optional[int]:
    """``n choose k`` for signed ``n``, using ``n(n-1)...(n-k+1) / k!``.

    Negative ``k`` gives zero. Negative ``n`` gives alternating signs, e.g.
    ``(-3) choose k`` runs ``1, -3, 6, -10, 15, -21``. There is no symmetry
    shortcut since ``choose(n, k) != choose(n, n - k)`` once ``n`` is negative.
    """

    if k < 0:
        if stats is not None:
            stats.mark_shortcut("zero")
        return 0

    res = 1
    for i in range(k):
        if stats is not None:
            stats.incr_steps()
        factor = n - i
        res = mul_div_signed(res, factor, i + 1, width) if width.contains(factor) else None
        if res is None:
            if stats is not None:
                stats.mark_overflow()
            return None
    return res


def choose_float(n: float, k: int, ftype: FloatType = F64, stats: Optional[ReductionStats] = None) -> float:
    """Generalised coefficient for real ``n``, always computed in double precision.

    Each step divides by ``i + 1`` before multiplying by ``n - i`` to limit
    growth of the running value. Overflow is not reported: ``inf`` and ``nan``
    are returned as they come.
    """

    if ftype is F32:
        # Cast between tensors so out-of-range doubles saturate to inf.
        n = torch.tensor(float(n), dtype=torch.float64).to(torch.float32).item()
    res = 1.0
    for i in range(k):
        if stats is not None:
            stats.incr_steps()
        res /= float(i + 1)
        res *= float(n) - float(i)
    return res


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_int_operand(value: object, numeric: IntType, label: str) -> int:
    if not _is_int(value):
        raise TypeError(f"{label} must be an int for dtype {numeric.name}, got {type(value).__name__}")
    if not numeric.contains(value):
        raise ValueError(
            f"{label}={value} is out of range for {numeric.name} "
            f"[{numeric.min_value}, {numeric.max_value}]"
        )
    return value


def _check_real_operand(value: Union[int, float], numeric: FloatType) -> float:
    try:
        return float(value)
    except OverflowError:
        raise ValueError(f"n={value} is out of range for {numeric.name}") from None


def _check_count(k: object) -> int:
    if isinstance(k, float):
        if not k.is_integer():
            raise ValueError(f"k must be integral, got {k}")
        k = int(k)
    return _check_int_operand(k, USIZE, "k")


def _unwrap_scalar(value: object, label: str) -> object:
    if isinstance(value, torch.Tensor):
        if value.dim() != 0:
            raise TypeError(f"{label} must be a scalar; use choose_tensor for tensors of shape {tuple(value.shape)}")
        return value.item()
    return value


def _infer_dtype(n: object, k: object) -> NumericType:
    if isinstance(n, float):
        return F64
    if _is_int(n) and _is_int(k):
        return USIZE if n >= 0 and k >= 0 else ISIZE
    raise TypeError(f"Cannot infer a numeric type for n={n!r}, k={k!r}")


def choose(
    n: Union[Number, torch.Tensor],
    k: Union[Number, torch.Tensor],
    dtype: Optional[DTypeLike] = None,
    stats: Optional[ReductionStats] = None,
) -> Optional[Number]:
    """Binomial coefficient ``n choose k`` for a fixed-width numeric type.

    Integer types return an ``int`` in their widened result type (``usize``
    for unsigned, ``isize`` for signed, or the type itself for 128-bit types),
    or ``None`` if the coefficient does not fit. Float types return a
    double-precision ``float`` and never ``None``.

    Without ``dtype`` the type comes from a 0-dim tensor ``n``, or else ``f64``
    for a float ``n``, ``usize`` for non-negative ints and ``isize`` otherwise.
    """

    if dtype is None and isinstance(n, torch.Tensor):
        dtype = n.dtype
    n = _unwrap_scalar(n, "n")
    k = _unwrap_scalar(k, "k")
    numeric = _infer_dtype(n, k) if dtype is None else resolve_dtype(dtype)

    if isinstance(numeric, FloatType):
        if isinstance(n, bool) or not isinstance(n, (int, float)):
            raise TypeError(f"n must be a real number for dtype {numeric.name}, got {type(n).__name__}")
        count = _check_count(k)
        n = _check_real_operand(n, numeric)
        if stats is not None:
            stats.set_dtype(numeric.widened().name)
        return choose_float(n, count, numeric, stats)

    n = _check_int_operand(n, numeric, "n")
    k = _check_int_operand(k, numeric, "k")
    width = numeric.widened()
    if stats is not None:
        stats.set_dtype(width.name)
    if width.signed:
        return choose_signed(n, k, width, stats)
    return choose_unsigned(n, k, width, stats)


def choose_exact(
    n: Union[Number, torch.Tensor],
    k: Union[Number, torch.Tensor],
    dtype: Optional[DTypeLike] = None,
) -> Number:
    """Like :func:`choose` but raises ``OverflowError`` instead of returning ``None``."""

    value = choose(n, k, dtype)
    if value is None:
        name = resolve_dtype(dtype).widened().name if dtype is not None else "the inferred type"
        raise OverflowError(f"{n} choose {k} does not fit in {name}")
    return value


def binomial_row(n: int, dtype: Optional[DTypeLike] = None) -> List[Optional[int]]:
    """Row ``n`` of Pascal's triangle; entries that overflow are ``None``."""

    if not _is_int(n) or n < 0:
        raise ValueError(f"Row index must be a non-negative int, got {n!r}")
    numeric = USIZE if dtype is None else resolve_dtype(dtype)
    if isinstance(numeric, FloatType):
        raise TypeError("binomial_row requires an integer dtype")
    return [choose(n, k, numeric) for k in range(n + 1)]
