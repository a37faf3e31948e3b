"""
Quadrature rules over a sample grid.

Both rules take the grid values (p(x0), ..., p(xn), evenly spaced) and the
spacing between two samples:

  - rectangular: two sums, one using the left point of every interval as its
    height and one using the right point
  - trapezoidal: the mean of both endpoint heights for every interval

The left/right pair brackets the integral only when the function is monotonic
on each interval. For anything else they are just two estimates and their
order says nothing about where the integral lies.
"""

from __future__ import annotations

import jax
from flax import struct
from jax import numpy as jnp

from polyquad.quadrature.errors import InvalidInput


@struct.dataclass
class RectangularResult:
    """
    Result of the rectangular rule.

    Fields:
      left:  stepsize * (values[0] + ... + values[n-1])   (first point of each interval)
      right: stepsize * (values[1] + ... + values[n])     (second point of each interval)
    """
    left: jnp.ndarray
    right: jnp.ndarray

    def as_tuple(self) -> tuple[float, float]:
        return float(self.left), float(self.right)


def _as_samples(values) -> jnp.ndarray:
    values = jnp.asarray(values)
    if not jnp.issubdtype(values.dtype, jnp.floating):
        values = values.astype(jnp.float32)
    if values.ndim != 1:
        raise InvalidInput(f"sample values must be 1-D, got shape {values.shape}")
    if values.shape[0] < 2:
        raise InvalidInput(f"need at least 2 sample values, got {values.shape[0]}")
    return values


def rectangular(values: jnp.ndarray, stepsize: float) -> RectangularResult:
    """
    Rectangular rule, left and right variants computed together.

    Accumulation order:
        left  = stepsize*values[0]
        right = 0
        for i in 1..n-1:
            left  += stepsize*values[i]
            right += stepsize*values[i]
        right += stepsize*values[n]

    With a single interval the loop is empty and the result is
    (stepsize*values[0], stepsize*values[1]).
    """
    values = _as_samples(values)
    left, right = _rectangular(values, jnp.asarray(stepsize, dtype=values.dtype))
    return RectangularResult(left=left, right=right)


def _running_sum(init: jnp.ndarray, terms: jnp.ndarray) -> jnp.ndarray:
    # plain adds only: the products are computed before the loop, never fused into it
    total, _ = jax.lax.scan(lambda acc, t: (acc + t, None), init, terms)
    return total


@jax.jit
def _rectangular(values: jnp.ndarray, stepsize: jnp.ndarray):
    terms = stepsize * values

    # first point only counts for the left sum, last point only for the right one
    inner = terms[1:-1]
    left = _running_sum(terms[0], inner)
    right = _running_sum(jnp.zeros((), dtype=values.dtype), inner)
    return left, right + terms[-1]


def trapezoidal(values: jnp.ndarray, stepsize: float) -> jnp.ndarray:
    """
    Trapezoidal rule:

        integ = sum_i h * (values[i+1] + values[i]),   h = stepsize / 2

    h is computed once and reused for every term; every term is rounded on
    its own before it is added to the running sum.
    """
    values = _as_samples(values)
    return _trapezoidal(values, jnp.asarray(stepsize, dtype=values.dtype))


@jax.jit
def _trapezoidal(values: jnp.ndarray, stepsize: jnp.ndarray) -> jnp.ndarray:
    h = stepsize / 2
    terms = h * (values[1:] + values[:-1])
    return _running_sum(jnp.zeros((), dtype=values.dtype), terms)
