from __future__ import annotations
import logging
import os
from fastapi import APIRouter, Depends, Request
from core.cache import TTLCache
from schemas.cache import CacheStatsResponse, InvalidateRequest, RemovedResponse
from .common import get_admin, get_cache

router = APIRouter()
logger = logging.getLogger("mykliq-api")

@router.get("/")
async def root():
    """Endpoint raiz para verificações de uptime."""
    return {
        "ok": True,
        "service": "mykliq-cache",
        "version": "1.0.0",
        "env": {"log_level": os.getenv("LOG_LEVEL", "INFO")},
    }

@router.get("/health")
async def health_check():
    """Endpoint simples de health check."""
    return {"ok": True}

@router.get("/v1/system/cache/stats", response_model=CacheStatsResponse)
async def cache_stats(cache: TTLCache = Depends(get_cache)):
    """Tamanho e capacidade atuais do cache, para monitoramento."""
    return {"ok": True, "data": cache.stats().to_dict()}

@router.post("/v1/system/cache/invalidate", response_model=RemovedResponse)
async def cache_invalidate(
    body: InvalidateRequest,
    cache: TTLCache = Depends(get_cache),
    _admin: str = Depends(get_admin),
):
    """Remove todas as chaves que contêm o padrão informado."""
    removed = cache.invalidate_matching(body.pattern)
    logger.info("cache_invalidate", extra={"pattern": body.pattern, "removed": removed})
    return {"ok": True, "removed": removed}

@router.post("/v1/system/cache/sweep", response_model=RemovedResponse)
async def cache_sweep(request: Request, _admin: str = Depends(get_admin)):
    """Executa uma varredura de expirados fora do ciclo do timer."""
    removed = request.app.state.sweeper.run_once()
    return {"ok": True, "removed": removed}
