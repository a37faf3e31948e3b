from __future__ import annotations

import numpy as np
import pytest

from polyquad.config import IntegrationConfig
from polyquad.pipeline import run
from polyquad.quadrature.grid import grid_step, sample_grid
from polyquad.quadrature.rules import rectangular, trapezoidal
from polyquad.utils.polynomial import poly_eval

F32 = np.float32


def _poly_loop(coeffs: list[float], x: np.float32) -> np.float32:
    out = F32(coeffs[0])
    power = x
    for c in coeffs[1:]:
        term = F32(F32(c) * power)
        out = F32(out + term)
        power = F32(power * x)
    return out


def _grid_loop(coeffs: list[float], xmin: float, xmax: float, intervals: int) -> np.ndarray:
    gap = F32(F32(F32(xmax) - F32(xmin)) / F32(intervals))
    x = F32(xmin)
    values = []
    for _ in range(intervals + 1):
        values.append(_poly_loop(coeffs, x))
        x = F32(x + gap)
    return np.array(values, dtype=np.float32)


def _rectangular_loop(values: np.ndarray, step: np.float32) -> tuple[np.float32, np.float32]:
    left = F32(step * values[0])
    right = F32(0.0)
    for v in values[1:-1]:
        term = F32(step * v)
        left = F32(left + term)
        right = F32(right + term)
    right = F32(right + F32(step * values[-1]))
    return left, right


def _trapezoidal_loop(values: np.ndarray, step: np.float32) -> np.float32:
    h = F32(step / F32(2.0))
    integ = F32(0.0)
    for lo, hi in zip(values[:-1], values[1:]):
        integ = F32(integ + F32(h * F32(hi + lo)))
    return integ


CASES = [
    ([-10.0, 1.0, 0.0, 2.0], 0.0, 5.0, 1000),
    ([-10.0, 1.0, 0.0, 2.0], -1.0, 3.0, 333),
    ([0.3, -1.7, 0.2, 0.9], -1.0, 3.0, 333),
    ([1.1, 0.7], 0.1, 0.9, 7),
]


@pytest.mark.parametrize("coeffs, xmin, xmax, intervals", CASES)
def test_grid_matches_sequential_loop(coeffs: list[float], xmin: float, xmax: float, intervals: int) -> None:
    expected = _grid_loop(coeffs, xmin, xmax, intervals)
    values = np.asarray(sample_grid(coeffs, xmin, xmax, intervals))
    assert values.tobytes() == expected.tobytes()


@pytest.mark.parametrize("coeffs, xmin, xmax, intervals", CASES)
def test_rules_match_sequential_loop(coeffs: list[float], xmin: float, xmax: float, intervals: int) -> None:
    expected_grid = _grid_loop(coeffs, xmin, xmax, intervals)
    step = grid_step(xmin, xmax, intervals)
    assert F32(step) == F32(F32(F32(xmax) - F32(xmin)) / F32(intervals))

    left, right = _rectangular_loop(expected_grid, F32(step))
    res = rectangular(expected_grid, step)
    assert F32(res.left) == left
    assert F32(res.right) == right
    assert F32(trapezoidal(expected_grid, step)) == _trapezoidal_loop(expected_grid, F32(step))


@pytest.mark.parametrize("x", [0.3, -1.25, 2.7182817])
def test_poly_eval_matches_sequential_loop(x: float) -> None:
    coeffs = [0.3, -1.7, 0.2, 0.9, -0.011]
    assert F32(poly_eval(coeffs, x)) == _poly_loop(coeffs, F32(x))


def test_reference_run_numbers() -> None:
    report = run(IntegrationConfig())
    assert float(report.rectangular.left) == 274.37274169921875
    assert float(report.rectangular.right) == 275.64776611328125
    assert float(report.trapezoidal) == 275.01007080078125
