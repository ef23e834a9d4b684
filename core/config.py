from __future__ import annotations

import os
from dataclasses import dataclass

from core.cache import DEFAULT_CAPACITY, DEFAULT_TTL_SECONDS
from core.errors import InvalidArgument
from core.sweeper import DEFAULT_SWEEP_INTERVAL_SECONDS


@dataclass(frozen=True)
class CacheSettings:
    capacity: int = DEFAULT_CAPACITY
    default_ttl_seconds: float = DEFAULT_TTL_SECONDS
    sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS

    @classmethod
    def from_env(cls) -> "CacheSettings":
        """Lê CACHE_CAPACITY, CACHE_DEFAULT_TTL_SECONDS e CACHE_SWEEP_INTERVAL_SECONDS."""
        return cls(
            capacity=_positive("CACHE_CAPACITY", DEFAULT_CAPACITY, int),
            default_ttl_seconds=_positive("CACHE_DEFAULT_TTL_SECONDS", DEFAULT_TTL_SECONDS, float),
            sweep_interval_seconds=_positive(
                "CACHE_SWEEP_INTERVAL_SECONDS", DEFAULT_SWEEP_INTERVAL_SECONDS, float
            ),
        )


def _positive(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        raise InvalidArgument(f"{name} inválido: {raw!r}")
    if value <= 0:
        raise InvalidArgument(f"{name} deve ser positivo, recebido {raw!r}")
    return value
