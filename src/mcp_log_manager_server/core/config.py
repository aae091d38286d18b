"""Engine configuration and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace


def _default_max_workers() -> int:
    cpu_count = os.cpu_count() or 1
    return min(32, cpu_count)


@dataclass(frozen=True, slots=True)
class EngineConfig:
    # Lines read per batch while scanning a file.
    batch_size: int = 1000
    # Files scanned at the same time by the aggregator.
    max_workers: int = field(default_factory=_default_max_workers)
    upload_max_concurrency: int = 4
    upload_timeout: float = 30.0
    encoding: str = "utf-8"
    decode_errors: str = "replace"


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{name} must be >= 1")
    return value


def _env_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0")
    return value


def resolve_engine_config(cfg: EngineConfig | None = None) -> EngineConfig:
    """Return config with optional env overrides applied."""
    if cfg is None:
        cfg = EngineConfig()

    overrides: dict[str, object] = {}
    batch_size = _env_int("LOG_MANAGER_BATCH_SIZE")
    if batch_size is not None:
        overrides["batch_size"] = batch_size
    max_workers = _env_int("LOG_MANAGER_MAX_WORKERS")
    if max_workers is not None:
        overrides["max_workers"] = max_workers
    upload_concurrency = _env_int("LOG_MANAGER_UPLOAD_CONCURRENCY")
    if upload_concurrency is not None:
        overrides["upload_max_concurrency"] = upload_concurrency
    upload_timeout = _env_float("LOG_MANAGER_UPLOAD_TIMEOUT")
    if upload_timeout is not None:
        overrides["upload_timeout"] = upload_timeout

    if not overrides:
        return cfg
    return replace(cfg, **overrides)
