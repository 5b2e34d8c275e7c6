from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .dtypes import REGISTRY, FloatType, NumericType, resolve_dtype


@dataclass
class RuntimeConfig:
    """Holds runtime configuration options for the command line front ends."""

    dtype: Optional[str] = None
    row: bool = False
    k_max: int = 1
    log_path: Optional[str] = None
    boundary: bool = False

    def numeric_type(self) -> Optional[NumericType]:
        if self.dtype is None:
            return None
        return resolve_dtype(self.dtype)

    def is_float(self) -> bool:
        return isinstance(self.numeric_type(), FloatType)

    def validate(self) -> None:
        if self.dtype is not None and self.dtype.lower() not in REGISTRY:
            raise ValueError(f"dtype must be one of {{{', '.join(REGISTRY)}}}")
        if self.k_max < 1:
            raise ValueError("k_max must be >= 1")
        if self.row and self.is_float():
            raise ValueError("row output requires an integer dtype")
        if self.boundary and (self.dtype is None or self.is_float()):
            raise ValueError("boundary scans require an integer dtype")
