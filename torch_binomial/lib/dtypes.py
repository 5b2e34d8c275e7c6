from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Dict, Optional, Union

import torch

NATIVE_BITS = sys.maxsize.bit_length() + 1


@dataclass(frozen=True)
class IntType:
    """Fixed-width integer type used to bound coefficient arithmetic."""

    name: str
    bits: int
    signed: bool
    dtype: Optional[torch.dtype] = None

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def contains(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def widened(self) -> "IntType":
        """Type the coefficient is computed in and returned as."""
        if self.bits > NATIVE_BITS:
            return self
        return ISIZE if self.signed else USIZE


@dataclass(frozen=True)
class FloatType:
    name: str
    bits: int
    dtype: torch.dtype

    def widened(self) -> "FloatType":
        return F64


NumericType = Union[IntType, FloatType]

_NATIVE_SIGNED_DTYPE = torch.int64 if NATIVE_BITS == 64 else torch.int32
_NATIVE_UNSIGNED_DTYPE = torch.uint64 if NATIVE_BITS == 64 else torch.uint32

U8 = IntType("u8", 8, False, torch.uint8)
U16 = IntType("u16", 16, False, torch.uint16)
U32 = IntType("u32", 32, False, torch.uint32)
U64 = IntType("u64", 64, False, torch.uint64)
U128 = IntType("u128", 128, False)
USIZE = IntType("usize", NATIVE_BITS, False, _NATIVE_UNSIGNED_DTYPE)

I8 = IntType("i8", 8, True, torch.int8)
I16 = IntType("i16", 16, True, torch.int16)
I32 = IntType("i32", 32, True, torch.int32)
I64 = IntType("i64", 64, True, torch.int64)
I128 = IntType("i128", 128, True)
ISIZE = IntType("isize", NATIVE_BITS, True, _NATIVE_SIGNED_DTYPE)

F32 = FloatType("f32", 32, torch.float32)
F64 = FloatType("f64", 64, torch.float64)

REGISTRY: Dict[str, NumericType] = {
    t.name: t
    for t in (U8, U16, U32, U64, U128, USIZE, I8, I16, I32, I64, I128, ISIZE, F32, F64)
}

# Half precision tensors go through the single precision path.
_TORCH_TO_TYPE: Dict[torch.dtype, NumericType] = {
    torch.uint8: U8,
    torch.uint16: U16,
    torch.uint32: U32,
    torch.uint64: U64,
    torch.int8: I8,
    torch.int16: I16,
    torch.int32: I32,
    torch.int64: I64,
    torch.float16: F32,
    torch.bfloat16: F32,
    torch.float32: F32,
    torch.float64: F64,
}


def resolve_dtype(dtype: Union[str, NumericType, torch.dtype]) -> NumericType:
    """Map a registry name, descriptor or ``torch.dtype`` onto a descriptor."""

    if isinstance(dtype, (IntType, FloatType)):
        return dtype
    if isinstance(dtype, torch.dtype):
        try:
            return _TORCH_TO_TYPE[dtype]
        except KeyError:
            raise TypeError(f"Unsupported torch dtype for binomial coefficients: {dtype}") from None
    if isinstance(dtype, str):
        try:
            return REGISTRY[dtype.lower()]
        except KeyError:
            raise ValueError(
                f"Unknown dtype {dtype!r}; expected one of {{{', '.join(REGISTRY)}}}"
            ) from None
    raise TypeError(f"dtype must be a name, a numeric type or a torch.dtype, got {type(dtype).__name__}")
