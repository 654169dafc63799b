# backend/app/services/cache_policy.py
import time

from backend.app.core import config
from backend.app.models.resource_kind import ResourceKind


def now_ms() -> int:
    return int(time.time() * 1000)


def freshness_window_ms(kind: ResourceKind) -> int | None:
    """Maximum age of a cached batch, or None when the kind never expires."""
    if kind is ResourceKind.WEATHER:
        return config.WEATHER_CACHE_MAX_AGE_MS
    return None


def is_stale(batch: list, window_ms: int, now: int | None = None) -> bool:
    """
    True when the batch is older than window_ms.

    The batch shares one created_at, so the first row stands for all of them.
    """
    if not batch:
        raise ValueError("Cannot judge the age of an empty batch")
    if now is None:
        now = now_ms()
    return now - batch[0].created_at > window_ms


def needs_refresh(kind: ResourceKind, batch: list, now: int | None = None) -> bool:
    window_ms = freshness_window_ms(kind)
    if window_ms is None:
        return False
    return is_stale(batch, window_ms, now)
