"""
Sample grid: the polynomial evaluated at evenly spaced points.

    gap    = (xmax - xmin) / intervals
    values = [p(xmin), p(xmin + gap), ..., p(xmax)]      (intervals + 1 values)

The x position is advanced by adding gap to the previous position, not by
computing xmin + k*gap, so the drift of x over many intervals is the drift of
repeated addition. Callers that want identical numbers must keep that order.
"""

from functools import partial

import jax
from jax import numpy as jnp, lax

from polyquad.quadrature.errors import AllocationFailure, InvalidRange
from polyquad.utils.polynomial import Polynomial, as_polynomial, poly_eval


def grid_step(xmin: float, xmax: float, intervals: int, dtype=jnp.float32) -> jnp.ndarray:
    """Spacing between two consecutive sample points, rounded to `dtype`."""
    _check_intervals(intervals)
    return (jnp.asarray(xmax, dtype=dtype) - jnp.asarray(xmin, dtype=dtype)) / jnp.asarray(intervals, dtype=dtype)


def sample_grid(coeffs: Polynomial, xmin: float, xmax: float, intervals: int) -> jnp.ndarray:
    """
    Evaluate the polynomial on intervals+1 evenly spaced points of [xmin, xmax].

    Input:
        coeffs:    ascending-power coefficients (see polyquad.utils.polynomial)
        xmin/xmax: integration range
        intervals: number of sub-intervals, >= 1
    Output:
        1-D array of length intervals+1, in ascending x order

    Raises InvalidRange when intervals < 1 and AllocationFailure when the
    buffer cannot be allocated.
    """
    _check_intervals(intervals)
    coeffs = as_polynomial(coeffs)
    gap = grid_step(xmin, xmax, intervals, dtype=coeffs.dtype)
    try:
        values = _sample_grid(coeffs, jnp.asarray(xmin, dtype=coeffs.dtype), gap, int(intervals))
        # surface allocation errors here rather than in the first consumer
        return values.block_until_ready()
    except MemoryError as exc:
        raise AllocationFailure(f"cannot allocate a grid of {intervals + 1} samples") from exc
    except jax.errors.JaxRuntimeError as exc:
        # device allocators report exhaustion as a runtime error, not MemoryError
        if not str(exc).startswith("RESOURCE_EXHAUSTED"):
            raise
        raise AllocationFailure(f"cannot allocate a grid of {intervals + 1} samples") from exc


def _check_intervals(intervals: int) -> None:
    if int(intervals) < 1:
        raise InvalidRange(f"need at least one interval, got {intervals}")


@partial(jax.jit, static_argnames=("intervals",))
def _sample_grid(coeffs: Polynomial, xmin: jnp.ndarray, gap: jnp.ndarray, intervals: int) -> jnp.ndarray:
    def body(x, _):
        # sample at x, then move on: x += gap
        return x + gap, poly_eval(coeffs, x)

    _, values = lax.scan(body, xmin, None, length=intervals + 1)
    return values
