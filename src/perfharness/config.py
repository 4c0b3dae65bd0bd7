"""
Loading of the runner configuration (config/harness.json).

The harness itself takes plain arguments; this file only feeds the scripts
that drive whole suites of measurements.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .harness import DEFAULT_WARMUP_MS
from .utils.affinity import EnvironmentStabilizer, Logger, ProcessStabilizer

project_root = Path(__file__).resolve().parent.parent.parent
DEFAULT_CONFIG_PATH = project_root / "config" / "harness.json"


@dataclass
class StabilizerConfig:
    enabled: bool = True
    core_id: Optional[int] = None
    raise_priority: bool = True
    collect_garbage: bool = True
    restore_on_exit: bool = True


@dataclass
class HarnessConfig:
    iterations: int = 10_000_000
    warmup_ms: float = DEFAULT_WARMUP_MS
    list_size: int = 40
    stabilizer: StabilizerConfig = field(default_factory=StabilizerConfig)


def _typed(section: Dict[str, Any], key: str, expected: type, default: Any) -> Any:
    value = section.get(key, default)
    if value is None and default is None:
        return None
    if expected is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, bool) != (expected is bool) or not isinstance(value, expected):
        raise ValueError(f"Config key '{key}' must be {expected.__name__}, got {value!r}")
    return value


def parse_config(raw: Dict[str, Any]) -> HarnessConfig:
    """Build a HarnessConfig from an already decoded JSON document."""
    harness = raw.get("harness", {})
    stabilizer = raw.get("stabilizer", {})
    checks = raw.get("collection_checks", {})
    defaults = HarnessConfig()
    stab_defaults = StabilizerConfig()

    config = HarnessConfig(
        iterations=_typed(harness, "iterations", int, defaults.iterations),
        warmup_ms=_typed(harness, "warmup_ms", float, defaults.warmup_ms),
        list_size=_typed(checks, "list_size", int, defaults.list_size),
        stabilizer=StabilizerConfig(
            enabled=_typed(stabilizer, "enabled", bool, stab_defaults.enabled),
            core_id=_typed(stabilizer, "core_id", int, stab_defaults.core_id),
            raise_priority=_typed(stabilizer, "raise_priority", bool, stab_defaults.raise_priority),
            collect_garbage=_typed(stabilizer, "collect_garbage", bool, stab_defaults.collect_garbage),
            restore_on_exit=_typed(stabilizer, "restore_on_exit", bool, stab_defaults.restore_on_exit),
        ),
    )

    if config.iterations <= 0:
        raise ValueError(f"Config key 'iterations' must be positive, got {config.iterations}")
    if not config.warmup_ms >= 0:
        raise ValueError(f"Config key 'warmup_ms' must be non-negative, got {config.warmup_ms}")
    if config.list_size < 0:
        raise ValueError(f"Config key 'list_size' must be non-negative, got {config.list_size}")
    return config


def load_config(config_path: Optional[str] = None) -> HarnessConfig:
    if config_path is None:
        config_path = str(DEFAULT_CONFIG_PATH)

    with open(config_path, "r", encoding="utf-8") as fh:
        raw = json.load(fh)

    return parse_config(raw)


def build_stabilizer(config: HarnessConfig, logger: Optional[Logger] = None) -> EnvironmentStabilizer:
    settings = config.stabilizer
    if not settings.enabled:
        return EnvironmentStabilizer()
    return ProcessStabilizer(
        enabled=True,
        core_id=settings.core_id,
        raise_priority=settings.raise_priority,
        collect_garbage=settings.collect_garbage,
        restore_on_exit=settings.restore_on_exit,
        logger=logger,
    )
