import time
from typing import Callable, Optional

Clock = Callable[[], float]


class HighPrecisionTimer:
    """High-precision timer for performance measurements."""

    def __init__(self, clock: Clock = time.perf_counter):
        self.clock = clock
        self.start_time: Optional[float] = None
        self.elapsed_time: Optional[float] = None

    def start(self):
        """Start timing."""
        self.start_time = self.clock()
        self.elapsed_time = None

    def elapsed(self) -> float:
        """Seconds since start() without stopping the timer."""
        if self.start_time is None:
            raise RuntimeError("Timer not started")
        return self.clock() - self.start_time

    def elapsed_ms(self) -> float:
        return self.elapsed() * 1000.0

    def stop(self) -> float:
        """Stop timing and return elapsed time in seconds."""
        self.elapsed_time = self.elapsed()
        return self.elapsed_time
