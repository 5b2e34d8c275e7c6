from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class ReductionStats:
    """What a single ``choose`` call did on its way to the result."""

    dtype: str = ""
    steps: int = 0
    shortcut: Optional[str] = None
    overflowed: bool = False

    def set_dtype(self, name: str) -> None:
        self.dtype = name

    def incr_steps(self) -> None:
        self.steps += 1

    def mark_shortcut(self, name: str) -> None:
        self.shortcut = name

    def mark_overflow(self) -> None:
        self.overflowed = True

    def summary(self) -> str:
        return (
            "Statistics:\n"
            f"Computed as: {self.dtype}\n"
            f"Multiply-divide steps: {self.steps}\n"
            f"Shortcut: {self.shortcut or 'none'}\n"
            f"Overflowed: {'yes' if self.overflowed else 'no'}\n"
        )
