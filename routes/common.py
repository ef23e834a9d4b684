from __future__ import annotations
from typing import Optional
from fastapi import Header, Request
from core.cache import TTLCache
from core.security import require_api_key

def get_cache(request: Request) -> TTLCache:
    """Dependência que entrega o cache criado no lifespan da aplicação."""
    return request.app.state.cache

def get_admin(authorization: Optional[str] = Header(default=None)) -> str:
    """Dependência para rotas administrativas via API Key."""
    return require_api_key(authorization=authorization)
