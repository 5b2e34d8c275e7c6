"""Core binomial coefficient modules."""

from .binomial import binomial_row, choose, choose_exact, choose_float, choose_signed, choose_unsigned
from .boundary import overflow_boundary, run_boundary_logged
from .cli import main as cli_main
from .config import RuntimeConfig
from .dtypes import NATIVE_BITS, REGISTRY, FloatType, IntType, resolve_dtype
from .stats import ReductionStats
from .tensor_ops import choose_tensor

__all__ = [
    "choose",
    "choose_exact",
    "choose_unsigned",
    "choose_signed",
    "choose_float",
    "binomial_row",
    "choose_tensor",
    "overflow_boundary",
    "run_boundary_logged",
    "RuntimeConfig",
    "ReductionStats",
    "IntType",
    "FloatType",
    "REGISTRY",
    "NATIVE_BITS",
    "resolve_dtype",
    "cli_main",
]
