"""Invalidation hooks called by write-path handlers.

Patterns are plain substrings (``TTLCache.invalidate_matching``), so a trailing
``:`` keeps ``kliq-feed:1:`` from also matching user ``12``.
"""

from __future__ import annotations

import logging

from core.cache import TTLCache

logger = logging.getLogger("mykliq-api")


def _invalidate(cache: TTLCache, pattern: str) -> int:
    removed = cache.invalidate_matching(pattern)
    logger.debug("cache_invalidate", extra={"pattern": pattern, "removed": removed})
    return removed


def invalidate_user_feeds(cache: TTLCache, user_id: str) -> int:
    # TODO: friends' feeds also show this user's content; invalidate them once the friends lookup is wired in
    return _invalidate(cache, f"kliq-feed:{user_id}:")


def invalidate_notification_cache(cache: TTLCache, user_id: str) -> int:
    return _invalidate(cache, f"notifications:{user_id}:")


def invalidate_stories_cache(cache: TTLCache, user_id: str) -> int:
    return _invalidate(cache, f"stories:{user_id}:")


def invalidate_post_caches(cache: TTLCache, user_id: str) -> int:
    return invalidate_user_feeds(cache, user_id)


def invalidate_poll_caches(cache: TTLCache, user_id: str) -> int:
    return invalidate_user_feeds(cache, user_id)


def invalidate_event_caches(cache: TTLCache, user_id: str) -> int:
    return invalidate_user_feeds(cache, user_id) + _invalidate(cache, f"events:{user_id}:")


def invalidate_all_feeds(cache: TTLCache) -> int:
    return _invalidate(cache, "kliq-feed:") + _invalidate(cache, "posts")


def invalidate_mood_boost(cache: TTLCache) -> int:
    return _invalidate(cache, "mood-boost")
