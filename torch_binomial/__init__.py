from .lib.binomial import binomial_row, choose, choose_exact
from .lib.boundary import overflow_boundary
from .lib.cli import main as cli_main
from .lib.config import RuntimeConfig
from .lib.stats import ReductionStats
from .lib.tensor_ops import choose_tensor

__all__ = [
    "choose",
    "choose_exact",
    "binomial_row",
    "choose_tensor",
    "overflow_boundary",
    "ReductionStats",
    "RuntimeConfig",
    "cli_main",
]
