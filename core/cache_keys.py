"""Cache key construction for API responses.

User-specific endpoints get the user id in the key so one user's cached
response is never served to another.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

USER_SPECIFIC_ENDPOINTS = (
    "/api/kliq-feed",
    "/api/posts",
    "/api/notifications",
    "/api/stories",
    "/api/friends",
    "/api/messages",
    "/api/events",
    "/api/polls",
    "/api/user",
    "/api/filters",
    "/api/ads/targeted",
    "/api/mood-boost",
    "/api/sports/updates",
    "/api/kliq-koins",
    "/api/social/accounts",
    "/api/calendar",
    "/api/auth/user",
    "/api/scrapbook",
    "/api/meetups",
    "/api/actions",
    "/api/highlights",
    "/api/invite",
    "/api/profile",
)

PUBLIC_ENDPOINTS = (
    "/api/memes",
    "/api/moviecons",
    "/api/gifs",
    "/api/health",
    "/api/version",
)


def is_user_specific_endpoint(endpoint: str) -> bool:
    if endpoint.startswith(PUBLIC_ENDPOINTS):
        return False
    if endpoint.startswith(USER_SPECIFIC_ENDPOINTS):
        return True
    # anything else under /api/ is treated as private
    return endpoint.startswith("/api/")


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _body_part(body: Any) -> str:
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        try:
            return _compact_json(json.loads(body))
        except ValueError:
            return body
    return _compact_json(body)


def build_cache_key(
    endpoint: str,
    *,
    method: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
    body: Any = None,
    user_id: Optional[str] = None,
) -> str:
    parts = [endpoint]

    if user_id and is_user_specific_endpoint(endpoint):
        parts.append(f"uid:{user_id}")

    if method:
        parts.append(f"method:{method}")

    if headers:
        sorted_headers = ",".join(f"{name}:{headers[name]}" for name in sorted(headers))
        parts.append(f"headers:{sorted_headers}")

    if body is not None and body != "":
        parts.append(f"body:{_body_part(body)}")

    return "|".join(parts)
