from __future__ import annotations

from typing import Tuple, Union

import torch

from .binomial import choose
from .dtypes import FloatType, resolve_dtype


def _float_choose(n: torch.Tensor, k: torch.Tensor) -> torch.Tensor:
    if k.is_floating_point():
        if not torch.all(k == torch.round(k)):
            raise ValueError("k must hold integral counts")
    k = k.to(torch.int64)
    if torch.any(k < 0):
        raise ValueError("k must be non-negative for floating point n")

    # Round half precision inputs through float32 before promotion.
    if n.dtype in (torch.float16, torch.bfloat16):
        n = n.to(torch.float32)
    n = n.to(torch.float64)
    res = torch.ones_like(n)
    k_max = int(k.max().item()) if k.numel() > 0 else 0
    for i in range(k_max):
        step = res / float(i + 1) * (n - float(i))
        res = torch.where(k > i, step, res)
    return res


def choose_tensor(
    n: torch.Tensor, k: Union[torch.Tensor, int]
) -> Tuple[torch.Tensor, torch.Tensor]:
    """Elementwise ``n choose k`` over broadcast tensors.

    The dtype of ``n`` picks the family the same way :func:`choose` does.
    Returns ``(values, valid)``: floating point inputs give ``float64`` values
    that are all valid; integer inputs give values in the native signed or
    unsigned dtype, with ``0`` and ``valid == False`` where the coefficient
    overflowed.
    """

    if not isinstance(k, torch.Tensor):
        k = torch.tensor(k, device=n.device)
    if n.dtype == torch.bool or n.is_complex():
        raise TypeError(f"Unsupported tensor dtype {n.dtype}")
    n, k = torch.broadcast_tensors(n, k)
    numeric = resolve_dtype(n.dtype)

    if isinstance(numeric, FloatType):
        values = _float_choose(n, k)
        return values, torch.ones(values.shape, dtype=torch.bool, device=n.device)

    if k.is_floating_point() or k.dtype == torch.bool:
        raise TypeError(f"k must be an integer tensor for n of dtype {n.dtype}")
    width = numeric.widened()
    results = [choose(a, b, numeric) for a, b in zip(n.reshape(-1).tolist(), k.reshape(-1).tolist())]
    valid = torch.tensor([r is not None for r in results], dtype=torch.bool, device=n.device)
    values = torch.tensor(
        [0 if r is None else r for r in results], dtype=width.dtype, device=n.device
    )
    return values.reshape(n.shape), valid.reshape(n.shape)
