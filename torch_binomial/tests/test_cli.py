from __future__ import annotations

from pathlib import Path

import pytest

from torch_binomial.lib.binomial import choose
from torch_binomial.lib.boundary import main as boundary_main
from torch_binomial.lib.boundary import overflow_boundary, run_boundary_logged
from torch_binomial.lib.cli import main
from torch_binomial.lib.config import RuntimeConfig
from torch_binomial.lib.dtypes import NATIVE_BITS

native_64 = pytest.mark.skipif(NATIVE_BITS != 64, reason="assumes a 64-bit native width")


def test_cli_prints_coefficient(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["15", "7"]) == 0
    assert capsys.readouterr().out.strip() == "6435"


def test_cli_signed_dtype(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["-3", "3", "--dtype", "i8"]) == 0
    assert capsys.readouterr().out.strip() == "-10"


def test_cli_float_dtype(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["6", "2", "--dtype", "f64"]) == 0
    assert capsys.readouterr().out.strip() == "15.0"


def test_cli_row(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["6", "--row", "--dtype", "u8"]) == 0
    assert capsys.readouterr().out.strip() == "1 6 15 20 15 6 1"


@native_64
def test_cli_overflow(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["68", "34"]) == 1
    assert capsys.readouterr().out.strip() == "overflow"


@pytest.mark.parametrize(
    "argv",
    [
        ["300", "2", "--dtype", "u8"],
        ["5"],
        ["6", "--row", "--dtype", "f32"],
        ["x", "2", "--dtype", "u16"],
    ],
)
def test_cli_rejects_bad_input(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2


def test_config_validation() -> None:
    RuntimeConfig(dtype="u8", row=True).validate()
    with pytest.raises(ValueError):
        RuntimeConfig(dtype="u9").validate()
    with pytest.raises(ValueError):
        RuntimeConfig(dtype="f64", row=True).validate()
    with pytest.raises(ValueError):
        RuntimeConfig(dtype="usize", k_max=0).validate()
    with pytest.raises(ValueError):
        RuntimeConfig(dtype=None, boundary=True).validate()
    with pytest.raises(ValueError):
        RuntimeConfig(dtype="f32", boundary=True).validate()


@native_64
def test_overflow_boundary_native() -> None:
    assert overflow_boundary(34, "usize") == 67
    assert overflow_boundary(33, "isize") == 66
    assert overflow_boundary(1, "usize") == (1 << 64) - 1


def test_overflow_boundary_limited_by_input_type() -> None:
    assert overflow_boundary(1, "u8") == 255
    assert overflow_boundary(2, "i8") == 127
    assert overflow_boundary(65, "u128") == 131


def test_overflow_boundary_rejects_float() -> None:
    with pytest.raises(ValueError):
        overflow_boundary(2, "f64")


def test_run_boundary_logged(tmp_path: Path) -> None:
    log_path = tmp_path / "logs" / "scan.log"
    boundaries = run_boundary_logged("u8", 3, log_path)
    assert boundaries == {1: 255, 2: 255, 3: 255}
    text = log_path.read_text(encoding="utf-8")
    assert "Starting overflow boundary scan" in text
    assert "k=2 | max n=255" in text
    assert "Completed scan" in text


def test_boundary_main(tmp_path: Path) -> None:
    log_path = tmp_path / "scan.log"
    assert boundary_main(["--dtype", "i8", "--k_max", "2", "--log", str(log_path)]) == 0
    assert log_path.exists()


def test_boundary_main_rejects_float(tmp_path: Path) -> None:
    with pytest.raises(SystemExit):
        boundary_main(["--dtype", "f64", "--log", str(tmp_path / "scan.log")])


def test_cli_float_dtype_accepts_integral_float_count(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["6", "2.0", "--dtype", "f64"]) == 0
    assert capsys.readouterr().out.strip() == "15.0"


def test_cli_float_dtype_rejects_fractional_count() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["6", "2.5", "--dtype", "f64"])
    assert excinfo.value.code == 2


@native_64
def test_overflow_boundary_signed_when_nothing_fits() -> None:
    assert overflow_boundary(66, "isize") == 66
    assert overflow_boundary(67, "isize") is None
    assert overflow_boundary(70, "isize") is None
    assert overflow_boundary(100, "i8") is None


@native_64
def test_overflow_boundary_result_always_fits() -> None:
    for dtype in ("i8", "isize", "u8", "usize"):
        for k in (1, 30, 66, 67, 100):
            boundary = overflow_boundary(k, dtype)
            if boundary is not None:
                assert choose(boundary, k, dtype) is not None


@native_64
def test_run_boundary_logged_reports_no_fit_and_stops(tmp_path: Path) -> None:
    log_path = tmp_path / "scan.log"
    boundaries = run_boundary_logged("i8", 128, log_path)
    assert boundaries[66] == 66
    assert boundaries[72] is None
    assert boundaries[127] is None
    assert 128 not in boundaries
    text = log_path.read_text(encoding="utf-8")
    assert "k=72 | no n fits" in text
    assert "Stopping at k=128: out of range for i8" in text
