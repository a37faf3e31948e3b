from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Tuple

from flax import struct

# the reference run: -10 + x + 2x^3 on [0, 5], 1000 intervals
DEFAULT_COEFFICIENTS: Tuple[float, ...] = (-10.0, 1.0, 0.0, 2.0)
DEFAULT_XMIN = 0.0
DEFAULT_XMAX = 5.0
DEFAULT_INTERVALS = 1000


@struct.dataclass
class IntegrationConfig:
    """Everything a run needs: the polynomial, the range and how finely to split it.

    ``coefficients`` are in ascending powers (``c0 + c1*x + ...``). All fields
    are static, so a config can be closed over by jitted code without turning
    into tracers.
    """

    coefficients: Tuple[float, ...] = struct.field(pytree_node=False, default=DEFAULT_COEFFICIENTS)
    xmin: float = struct.field(pytree_node=False, default=DEFAULT_XMIN)
    xmax: float = struct.field(pytree_node=False, default=DEFAULT_XMAX)
    intervals: int = struct.field(pytree_node=False, default=DEFAULT_INTERVALS)

    @property
    def size(self) -> int:
        """Number of sample points, one more than the number of intervals."""
        return self.intervals + 1

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> IntegrationConfig:
        """Build a config from a plain dict (e.g. a parsed JSON file); missing keys keep their defaults."""
        if not isinstance(data, Mapping):
            raise ValueError(f"configuration must be a mapping, got {type(data).__name__}")
        unknown = sorted(str(k) for k in set(data) - {"coefficients", "xmin", "xmax", "intervals"})
        if unknown:
            raise ValueError(f"unknown configuration keys: {', '.join(unknown)}")

        cfg = cls()
        try:
            if "coefficients" in data:
                coefficients = data["coefficients"]
                if isinstance(coefficients, (str, bytes)) or not isinstance(coefficients, Sequence):
                    raise ValueError(f"coefficients must be a list of numbers, got {coefficients!r}")
                cfg = cfg.replace(coefficients=tuple(float(c) for c in coefficients))
            if "xmin" in data:
                cfg = cfg.replace(xmin=float(data["xmin"]))
            if "xmax" in data:
                cfg = cfg.replace(xmax=float(data["xmax"]))
            if "intervals" in data:
                cfg = cfg.replace(intervals=int(data["intervals"]))
        except TypeError as exc:
            raise ValueError(f"malformed configuration: {exc}") from exc
        return cfg

    def to_dict(self) -> dict:
        return {
            "coefficients": list(self.coefficients),
            "xmin": self.xmin,
            "xmax": self.xmax,
            "intervals": self.intervals,
        }
