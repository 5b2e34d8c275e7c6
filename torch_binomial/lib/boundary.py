from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import Dict, Optional

from tqdm import tqdm

from .binomial import DTypeLike, choose
from .config import RuntimeConfig
from .dtypes import REGISTRY, FloatType, resolve_dtype


def log_factory(output_path: Path):
    output_path.parent.mkdir(parents=True, exist_ok=True)
    log_handle = output_path.open("w", encoding="utf-8")

    def _log(message: str) -> None:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{timestamp}] {message}"
        print(line, flush=True)
        log_handle.write(line + "\n")
        log_handle.flush()

    return _log, log_handle


def overflow_boundary(k: int, dtype: DTypeLike) -> Optional[int]:
    """Largest ``n >= k`` representable in ``dtype`` for which ``n choose k`` fits.

    For fixed ``k`` the coefficient grows with ``n``, so once a value of ``n``
    overflows every larger one does too. The search doubles the distance
    from ``k`` until it overflows, then bisects.

    Returns ``None`` when not even ``n == k`` fits. That happens on the signed
    path, which has no symmetry shortcut and passes through
    ``k choose k // 2`` on the way to ``1``.
    """

    numeric = resolve_dtype(dtype)
    if isinstance(numeric, FloatType):
        raise ValueError("overflow_boundary requires an integer dtype")
    if k < 0 or not numeric.contains(k):
        raise ValueError(f"k={k} is out of range for {numeric.name}")

    def fits(n: int) -> bool:
        return choose(n, k, numeric) is not None

    if not fits(k):
        return None

    limit = numeric.max_value
    if fits(limit):
        return limit

    lo = k
    step = 1
    hi = k + step
    while hi < limit and fits(hi):
        lo = hi
        step *= 2
        hi = k + step
    hi = min(hi, limit)

    while hi - lo > 1:
        mid = (lo + hi) // 2
        if fits(mid):
            lo = mid
        else:
            hi = mid
    return lo


def run_boundary_logged(dtype: DTypeLike, k_max: int, log_path: Path) -> Dict[int, Optional[int]]:
    numeric = resolve_dtype(dtype)
    config = RuntimeConfig(dtype=numeric.name, k_max=k_max, log_path=str(log_path), boundary=True)
    config.validate()
    log, handle = log_factory(log_path)

    log("Starting overflow boundary scan")
    log(f"Input type: {numeric.name}")
    log(f"Result type: {numeric.widened().name}")
    log(f"Counts: 1..{k_max}")

    start_time = time.perf_counter()
    boundaries: Dict[int, Optional[int]] = {}
    log_interval = max(1, k_max // 10)

    try:
        with tqdm(
            total=k_max,
            desc="Boundary scan",
            unit="k",
            file=sys.stdout,
            leave=True,
            dynamic_ncols=True,
        ) as progress_bar:
            for k in range(1, k_max + 1):
                if not numeric.contains(k):
                    log(f"Stopping at k={k}: out of range for {numeric.name}")
                    break
                k_start = time.perf_counter()
                boundaries[k] = overflow_boundary(k, numeric)
                k_duration = time.perf_counter() - k_start

                progress_bar.update(1)
                max_n = "none" if boundaries[k] is None else boundaries[k]
                progress_bar.set_postfix({"max_n": max_n, "k_s": f"{k_duration:.4f}"})

                if k_max <= 20 or k % log_interval == 0 or k == k_max:
                    if boundaries[k] is None:
                        log(f"k={k} | no n fits | time={k_duration:.4f}s")
                    else:
                        log(f"k={k} | max n={boundaries[k]} | time={k_duration:.4f}s")

        duration = time.perf_counter() - start_time
        log(f"Completed scan in {duration:.4f} seconds")
    finally:
        handle.close()
    return boundaries


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Find the largest n whose coefficient fits, per k")
    parser.add_argument("-t", "--dtype", required=True, choices=list(REGISTRY))
    parser.add_argument("-k", "--k_max", type=int, default=34, help="Scan counts 1..k_max")
    parser.add_argument(
        "--log", type=Path, default=Path("logs/boundary_scan.log"), help="Log file destination"
    )
    args = parser.parse_args(argv)

    config = RuntimeConfig(dtype=args.dtype, k_max=args.k_max, log_path=str(args.log), boundary=True)
    try:
        config.validate()
    except ValueError as exc:
        parser.error(str(exc))

    run_boundary_logged(config.dtype, config.k_max, args.log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
