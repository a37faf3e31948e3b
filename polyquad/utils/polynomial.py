from typing import Optional, Sequence

from jax import numpy as jnp, lax

from polyquad.quadrature.errors import InvalidInput

# We represent a polynomial by a 1D array of coefficients in *ascending* powers:
#   coeffs = [c0, c1, ..., cn]  <=>  p(x) = c0 + c1*x + ... + cn*x^n
# Note this is the reverse of the jnp.polyval convention.
Polynomial = jnp.ndarray


def as_polynomial(coefficients: Sequence[float], dtype: Optional[jnp.dtype] = None) -> Polynomial:
    """
    Convert coefficients (ascending powers) into a Polynomial.

    Floating-point arrays keep their dtype unless `dtype` is given; anything
    else (python lists, integer arrays) becomes float32, so every later sum is
    rounded in single precision.
    """
    coeffs = jnp.asarray(coefficients, dtype=dtype)
    if not jnp.issubdtype(coeffs.dtype, jnp.floating):
        coeffs = coeffs.astype(jnp.float32)

    if coeffs.ndim != 1:
        raise InvalidInput(f"polynomial coefficients must be 1-D, got shape {coeffs.shape}")
    if coeffs.shape[0] < 1:
        raise InvalidInput("polynomial needs at least one coefficient")
    return coeffs


def poly_eval(coeffs: Polynomial, x: float) -> jnp.ndarray:
    """
    Evaluate p(x) = c0 + c1*x + ... + cn*x^n.

    Implementation idea:
        Start the accumulator at c0 and keep a running power of x:
            x^1 = x
            x^{i+1} = x^i * x
        For i = 1..n add ci * x^i, then update the power.
        The power is built by repeated multiplication (no pow), and the terms
        are added in order of increasing degree, so the result is rounded
        exactly like the plain loop would round it.

    Input:
        coeffs: ascending-power coefficients, at least one
        x:      point of evaluation (cast to the dtype of coeffs)
    Output:
        a 0-d array with p(x)
    """
    coeffs = as_polynomial(coeffs)
    x = jnp.asarray(x, dtype=coeffs.dtype)

    def next_power(power, _):
        # x^i -> x^(i+1), emitting x^i
        return power * x, power

    _, powers = lax.scan(next_power, x, None, length=coeffs.shape[0] - 1)
    terms = coeffs[1:] * powers

    # out += ci * x^i, one rounded term at a time
    out, _ = lax.scan(lambda acc, t: (acc + t, None), coeffs[0], terms)
    return out
