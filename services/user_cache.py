from __future__ import annotations

from typing import Any, Optional

from core.cache import TTLCache

TTL_USER_PROFILE_SECONDS = 600
TTL_FEED_SECONDS = 180
TTL_NOTIFICATIONS_SECONDS = 120
TTL_ANALYTICS_SECONDS = 1800

ANALYTICS_DASHBOARD_KEY = "analytics:dashboard"


def user_profile_key(user_id: str) -> str:
    return f"user:{user_id}"


def feed_key(user_id: str) -> str:
    return f"feed:{user_id}"


def notifications_key(user_id: str) -> str:
    return f"notifications:{user_id}"


def cache_user_profile(cache: TTLCache, user_id: str, user_data: Any, ttl_seconds: float = TTL_USER_PROFILE_SECONDS) -> None:
    cache.set(user_profile_key(user_id), user_data, ttl_seconds)


def get_cached_user_profile(cache: TTLCache, user_id: str) -> Optional[Any]:
    return cache.get(user_profile_key(user_id))


def cache_feed(cache: TTLCache, user_id: str, feed_data: Any, ttl_seconds: float = TTL_FEED_SECONDS) -> None:
    cache.set(feed_key(user_id), feed_data, ttl_seconds)


def get_cached_feed(cache: TTLCache, user_id: str) -> Optional[Any]:
    return cache.get(feed_key(user_id))


def cache_notifications(
    cache: TTLCache, user_id: str, notifications: Any, ttl_seconds: float = TTL_NOTIFICATIONS_SECONDS
) -> None:
    cache.set(notifications_key(user_id), notifications, ttl_seconds)


def get_cached_notifications(cache: TTLCache, user_id: str) -> Optional[Any]:
    return cache.get(notifications_key(user_id))


def cache_analytics(cache: TTLCache, data: Any, ttl_seconds: float = TTL_ANALYTICS_SECONDS) -> None:
    cache.set(ANALYTICS_DASHBOARD_KEY, data, ttl_seconds)


def get_cached_analytics(cache: TTLCache) -> Optional[Any]:
    return cache.get(ANALYTICS_DASHBOARD_KEY)


def invalidate_user_cache(cache: TTLCache, user_id: str) -> int:
    """Remove perfil, feed e notificações do usuário; retorna quantas chaves saíram."""
    keys = (user_profile_key(user_id), feed_key(user_id), notifications_key(user_id))
    return sum(1 for key in keys if cache.delete(key))
