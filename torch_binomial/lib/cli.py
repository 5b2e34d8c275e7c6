from __future__ import annotations

import argparse
import sys
from typing import Union

from .binomial import binomial_row, choose
from .config import RuntimeConfig
from .dtypes import REGISTRY


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fixed-width binomial coefficients")
    parser.add_argument("n", help="Upper argument; a float for f32/f64")
    parser.add_argument("k", nargs="?", default=None, help="Lower argument (omit with --row)")
    parser.add_argument(
        "-t",
        "--dtype",
        default=None,
        choices=list(REGISTRY),
        help="Numeric type of n and k (inferred from n when omitted)",
    )
    parser.add_argument("-r", "--row", action="store_true", help="Print row n of Pascal's triangle")
    return parser


def _parse_number(text: str, config: RuntimeConfig) -> Union[int, float]:
    if config.is_float():
        return float(text)
    try:
        return int(text)
    except ValueError:
        if config.dtype is not None:
            raise
        return float(text)


def _parse_count(text: str, n: Union[int, float]) -> Union[int, float]:
    if isinstance(n, float):
        return float(text)
    return int(text)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = RuntimeConfig(dtype=args.dtype, row=args.row)
    try:
        config.validate()
        n = _parse_number(args.n, config)
    except ValueError as exc:
        parser.error(str(exc))

    if config.row:
        try:
            row = binomial_row(n, config.dtype)
        except (TypeError, ValueError) as exc:
            parser.error(str(exc))
        print(" ".join("overflow" if value is None else str(value) for value in row))
        return 1 if None in row else 0

    if args.k is None:
        parser.error("k is required unless --row is given")
    try:
        k = _parse_count(args.k, n)
        value = choose(n, k, config.dtype)
    except (TypeError, ValueError) as exc:
        parser.error(str(exc))

    if value is None:
        print("overflow")
        return 1

    print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
