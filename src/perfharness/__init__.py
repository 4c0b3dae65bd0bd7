from .harness import (
    DEFAULT_WARMUP_MS,
    Measurement,
    PerformanceHarness,
    format_ms,
    run,
    run_async,
)
from .utils.affinity import EnvironmentStabilizer, ProcessStabilizer

__all__ = [
    'DEFAULT_WARMUP_MS',
    'Measurement',
    'PerformanceHarness',
    'format_ms',
    'run',
    'run_async',
    'EnvironmentStabilizer',
    'ProcessStabilizer',
]
