"""
Helpers for stabilizing the process before a timed measurement.

Pinning and priority changes are hints to the host scheduler. They need
privileges on some platforms and are unavailable on others (macOS exposes no
public per-core pinning API), so every step here is best-effort: failures are
logged once through the injected logger and the measurement carries on.
"""

from __future__ import annotations

import gc
import platform
from typing import Callable, Iterable, List, Optional

import psutil


Logger = Callable[[str], None]

# Nice value used on POSIX; Windows takes a priority class instead.
HIGH_PRIORITY = psutil.HIGH_PRIORITY_CLASS if psutil.WINDOWS else -10


class EnvironmentStabilizer:
    """No-op stabilizer. Subclasses apply platform hints before a run."""

    def stabilize(self) -> None:
        """Prepare the process for a timed run."""

    def restore(self) -> None:
        """Undo whatever stabilize() changed."""


class ProcessStabilizer(EnvironmentStabilizer):
    """
    Collects garbage, pins the process to a single core and raises its
    scheduling priority using psutil.

    When no core is given the process is moved off the core it was observed
    running on, to the first other core it is allowed to use. Prior affinity
    and nice value are captured so restore() can put them back.
    """

    def __init__(
        self,
        enabled: bool = True,
        core_id: Optional[int] = None,
        raise_priority: bool = True,
        collect_garbage: bool = True,
        restore_on_exit: bool = True,
        logger: Optional[Logger] = None,
        process: Optional[psutil.Process] = None,
    ) -> None:
        self.enabled = enabled
        self.core_id = core_id
        self.raise_priority = raise_priority
        self.collect_garbage = collect_garbage
        self.restore_on_exit = restore_on_exit
        self.logger = logger or (lambda msg: None)
        self._process = process
        self._saved_affinity: Optional[List[int]] = None
        self._saved_nice: Optional[int] = None
        self._warned: set = set()

    def stabilize(self) -> None:
        if not self.enabled:
            return

        if self.collect_garbage:
            # Second pass picks up objects released by finalizers of the first.
            gc.collect()
            gc.collect()

        process = self._get_process()
        if process is None:
            return
        self.pin(process)
        if self.raise_priority:
            self.raise_process_priority(process)

    def restore(self) -> None:
        if not self.enabled or not self.restore_on_exit or self._process is None:
            return

        if self._saved_affinity is not None:
            try:
                self._process.cpu_affinity(self._saved_affinity)
            except (psutil.Error, OSError, ValueError) as exc:
                self._log_once(f"Could not restore cpu affinity: {exc}")
            self._saved_affinity = None

        if self._saved_nice is not None:
            try:
                self._process.nice(self._saved_nice)
            except (psutil.Error, OSError) as exc:
                self._log_once(f"Could not restore process priority: {exc}")
            self._saved_nice = None

    @staticmethod
    def choose_core(allowed: Iterable[int], current: Optional[int]) -> Optional[int]:
        """
        Pick a core other than the one the process currently runs on.

        Returns None when fewer than two cores are allowed. Without an
        observed current core the second allowed core is used.
        """
        ordered = sorted(allowed)
        if len(ordered) < 2:
            return None
        if current is None:
            return ordered[1]
        for core in ordered:
            if core != current:
                return core
        return None

    def pin(self, process: psutil.Process) -> bool:
        """
        Bind the process to a single core.

        Returns True if the affinity was changed, False otherwise.
        """
        if not hasattr(process, "cpu_affinity"):
            if platform.system() == "Darwin":  # pragma: no cover - macOS specific
                self._log_once(
                    "macOS does not expose strict per-core pinning. "
                    "Ensure background load is minimized for consistent results."
                )
            else:
                self._log_once("CPU affinity controls unavailable on this platform.")
            return False

        try:
            allowed = list(process.cpu_affinity())
            core = self.core_id
            if core is None:
                core = self.choose_core(allowed, self._observed_core(process))
            if core is None:
                self._log_once("Only one core available; leaving affinity unchanged.")
                return False
            process.cpu_affinity([core])
        except psutil.AccessDenied:
            self._log_once("cpu_affinity requires elevated permissions.")
            return False
        except (psutil.Error, OSError, ValueError) as exc:
            self._log_once(f"cpu_affinity failed: {exc}")
            return False

        self._saved_affinity = allowed
        return True

    def raise_process_priority(self, process: psutil.Process) -> bool:
        """Raise the process scheduling priority. Returns True on success."""
        try:
            current = process.nice()
            # Lower nice means higher priority; never demote an already boosted process.
            if not psutil.WINDOWS and current <= HIGH_PRIORITY:
                return False
            process.nice(HIGH_PRIORITY)
        except psutil.AccessDenied:
            self._log_once("Raising process priority requires elevated permissions.")
            return False
        except (psutil.Error, OSError) as exc:
            self._log_once(f"Raising process priority failed: {exc}")
            return False

        self._saved_nice = current
        return True

    def _observed_core(self, process: psutil.Process) -> Optional[int]:
        if not hasattr(process, "cpu_num"):
            return None
        try:
            return process.cpu_num()
        except (psutil.Error, OSError):
            return None

    def _get_process(self) -> Optional[psutil.Process]:
        if self._process is None:
            try:
                self._process = psutil.Process()
            except psutil.Error as exc:
                self._log_once(f"Could not inspect current process: {exc}")
                return None
        return self._process

    def _log_once(self, message: str) -> None:
        if message not in self._warned:
            self.logger(message)
            self._warned.add(message)
