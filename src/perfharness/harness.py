"""
Measurement harness.

Runs an operation through an untimed, time-bounded warm-up and then a timed
phase of a fixed number of iterations, and prints the mean time per
iteration as ``<description>: <mean> ms/per run``.

Operation failures are not caught: an exception raised during warm-up or the
timed phase aborts the run and nothing is reported. There is no timeout; an
operation that never returns blocks the run forever.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from .utils.affinity import EnvironmentStabilizer
from .utils.timer import Clock, HighPrecisionTimer

DEFAULT_WARMUP_MS = 1500

Output = Callable[[str], None]


def format_ms(value: float) -> str:
    """Format milliseconds with up to 5 fractional digits, trailing zeros dropped."""
    text = f"{value:.5f}".rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


@dataclass(frozen=True)
class Measurement:
    """Result of one timed phase."""

    description: str
    iterations: int
    elapsed_seconds: float

    @property
    def mean_ms(self) -> float:
        return self.elapsed_seconds * 1000.0 / self.iterations

    def __str__(self) -> str:
        return f"{self.description}: {format_ms(self.mean_ms)} ms/per run"


def validate_parameters(iterations: int, warmup_ms: float) -> None:
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise ValueError(f"iterations must be an integer, got {iterations!r}")
    if iterations <= 0:
        raise ValueError(f"iterations must be positive, got {iterations}")
    if not warmup_ms >= 0:
        raise ValueError(f"warmup_ms must be non-negative, got {warmup_ms}")


class PerformanceHarness:
    """
    Times zero-argument operations.

    Args:
        stabilizer: Environment hints applied before each run and undone after
                    it. Defaults to a no-op stabilizer.
        clock: Monotonic clock returning seconds, used for both warm-up and
               the timed phase.
        output: Sink receiving the report line of each completed run.
    """

    def __init__(
        self,
        stabilizer: Optional[EnvironmentStabilizer] = None,
        clock: Clock = time.perf_counter,
        output: Output = print,
    ) -> None:
        self.stabilizer = stabilizer or EnvironmentStabilizer()
        self.clock = clock
        self.output = output

    def run(
        self,
        operation: Callable[[], object],
        description: str,
        iterations: int,
        warmup_ms: float = DEFAULT_WARMUP_MS,
    ) -> None:
        """Measure a synchronous operation and report its mean time per run."""
        validate_parameters(iterations, warmup_ms)

        self.stabilizer.stabilize()
        try:
            self._warmup(operation, warmup_ms)

            timer = HighPrecisionTimer(self.clock)
            timer.start()
            for _ in range(iterations):
                operation()
            elapsed = timer.stop()
        finally:
            self.stabilizer.restore()

        self._report(Measurement(description, iterations, elapsed))

    async def run_async(
        self,
        operation: Callable[[], Awaitable[object]],
        description: str,
        iterations: int,
        warmup_ms: float = DEFAULT_WARMUP_MS,
    ) -> None:
        """
        Measure an asynchronous operation.

        Each invocation is awaited to completion before the next one starts,
        so the result is one-at-a-time latency rather than throughput.
        """
        validate_parameters(iterations, warmup_ms)

        self.stabilizer.stabilize()
        try:
            await self._warmup_async(operation, warmup_ms)

            timer = HighPrecisionTimer(self.clock)
            timer.start()
            for _ in range(iterations):
                await operation()
            elapsed = timer.stop()
        finally:
            self.stabilizer.restore()

        self._report(Measurement(description, iterations, elapsed))

    def _warmup(self, operation: Callable[[], object], warmup_ms: float) -> None:
        if warmup_ms <= 0:
            return
        timer = HighPrecisionTimer(self.clock)
        timer.start()
        while timer.elapsed_ms() < warmup_ms:
            operation()

    async def _warmup_async(self, operation: Callable[[], Awaitable[object]], warmup_ms: float) -> None:
        if warmup_ms <= 0:
            return
        timer = HighPrecisionTimer(self.clock)
        timer.start()
        while timer.elapsed_ms() < warmup_ms:
            await operation()

    def _report(self, measurement: Measurement) -> None:
        self.output(str(measurement))


def run(
    operation: Callable[[], object],
    description: str,
    iterations: int,
    warmup_ms: float = DEFAULT_WARMUP_MS,
) -> None:
    """Measure `operation` with a default harness (no stabilization, stdout)."""
    PerformanceHarness().run(operation, description, iterations, warmup_ms)


async def run_async(
    operation: Callable[[], Awaitable[object]],
    description: str,
    iterations: int,
    warmup_ms: float = DEFAULT_WARMUP_MS,
) -> None:
    await PerformanceHarness().run_async(operation, description, iterations, warmup_ms)
