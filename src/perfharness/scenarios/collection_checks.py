"""
Emptiness checks on a small list.

Compares the ways of asking "does this list have anything in it": the
builtin any(), len() against zero, truthiness, and counting by iteration.
Each case bumps a counter when the check succeeds so the work is not
optimized into nothing.
"""

from typing import Callable, List, Tuple

from ..harness import PerformanceHarness

Case = Tuple[str, Callable[[], None]]


class CollectionChecks:
    """Builds the emptiness-check cases over a list of `list_size` strings."""

    SAMPLE_ITEM = "test data"

    def __init__(self, list_size: int = 40):
        self.items: List[str] = self.create_sample_list(list_size)
        self.hits = 0

    @classmethod
    def create_sample_list(cls, size: int) -> List[str]:
        return [cls.SAMPLE_ITEM] * size

    def check_any(self) -> None:
        if any(self.items):
            self.hits += 1

    def check_counted(self) -> None:
        if sum(1 for _ in self.items) > 0:
            self.hits += 1

    def check_len(self) -> None:
        if len(self.items) > 0:
            self.hits += 1

    def check_truthy(self) -> None:
        if self.items:
            self.hits += 1

    def cases(self) -> List[Case]:
        return [
            ("any() (plus increment)", self.check_any),
            ("sum(1 for _) > 0 (plus increment)", self.check_counted),
            ("len() > 0 (plus increment)", self.check_len),
            ("truthiness (plus increment)", self.check_truthy),
        ]


def run_collection_checks(
    harness: PerformanceHarness,
    iterations: int,
    warmup_ms: float,
    list_size: int = 40,
) -> CollectionChecks:
    """Run every case through `harness`; returns the checks so callers can inspect hits."""
    checks = CollectionChecks(list_size)
    for description, operation in checks.cases():
        harness.run(operation, description, iterations, warmup_ms)
    return checks
