"""
Small helpers shared by the pipeline and the command line driver.

  - Stopwatch: wall-clock timer used to report how long a run took
"""

import time
from dataclasses import dataclass


@dataclass
class Stopwatch:
    """
    A simple stopwatch.

    Usage:
      sw = Stopwatch()
      ... run something ...
      sw.get_time()        # seconds since creation
    """
    last_time: float = None  # timestamp the stopwatch was started at

    def __post_init__(self):
        self.last_time = time.perf_counter()

    def get_time(self) -> float:
        """Seconds elapsed since the stopwatch was created."""
        return time.perf_counter() - self.last_time
