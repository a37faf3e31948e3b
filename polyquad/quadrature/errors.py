"""
Exceptions raised by the quadrature core.

None of them are transient: each one ends the operation it was raised in and
is left for the driver to report.
"""


class QuadratureError(Exception):
    """Base class for every error raised by polyquad."""


class AllocationFailure(QuadratureError):
    """The sample grid buffer could not be acquired."""


class InvalidRange(QuadratureError, ValueError):
    """The sample grid was asked for fewer than one interval."""


class InvalidInput(QuadratureError, ValueError):
    """An array handed to the core has the wrong shape (too short, empty or not 1-D)."""
