"""
One integration run: coefficients -> sample grid -> rectangular + trapezoidal.

The grid is built once and the same array is handed to both rules. It lives
only as long as `run` does.
"""

from __future__ import annotations

import logging

from flax import struct
from jax import numpy as jnp

from polyquad.config import IntegrationConfig
from polyquad.quadrature.grid import grid_step, sample_grid
from polyquad.quadrature.rules import RectangularResult, rectangular, trapezoidal
from polyquad.utils import Stopwatch
from polyquad.utils.polynomial import as_polynomial

logger = logging.getLogger(__name__)


@struct.dataclass
class IntegrationReport:
    config: IntegrationConfig = struct.field(pytree_node=False)
    stepsize: jnp.ndarray
    rectangular: RectangularResult
    trapezoidal: jnp.ndarray
    elapsed_s: float = struct.field(pytree_node=False, default=0.0)


def run(config: IntegrationConfig) -> IntegrationReport:
    """Integrate the configured polynomial with both rules.

    Raises InvalidRange / InvalidInput for a bad configuration and
    AllocationFailure when the grid cannot be allocated; nothing is caught here.
    """
    logger.debug(
        "integrating %s over [%g, %g] with %d intervals",
        config.coefficients, config.xmin, config.xmax, config.intervals,
    )
    sw = Stopwatch()

    coeffs = as_polynomial(config.coefficients)
    stepsize = grid_step(config.xmin, config.xmax, config.intervals, dtype=coeffs.dtype)
    values = sample_grid(coeffs, config.xmin, config.xmax, config.intervals)

    rect = rectangular(values, stepsize)
    trap = trapezoidal(values, stepsize)
    elapsed = sw.get_time()

    logger.info(
        "rectangular=[%f, %f] trapezoidal=%f (%d samples, %.3f ms)",
        float(rect.left), float(rect.right), float(trap), values.shape[0], elapsed * 1000.0,
    )
    return IntegrationReport(
        config=config,
        stepsize=stepsize,
        rectangular=rect,
        trapezoidal=trap,
        elapsed_s=elapsed,
    )
