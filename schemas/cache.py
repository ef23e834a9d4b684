from __future__ import annotations
from pydantic import BaseModel, Field

class CacheStatsData(BaseModel):
    """Tamanho, capacidade e contadores do cache em memória."""
    size: int = Field(..., ge=0)
    capacity: int = Field(..., ge=1)
    hits: int = Field(0, ge=0)
    misses: int = Field(0, ge=0)
    evictions: int = Field(0, ge=0)
    expirations: int = Field(0, ge=0)

class CacheStatsResponse(BaseModel):
    ok: bool = True
    data: CacheStatsData

class InvalidateRequest(BaseModel):
    """Padrão de invalidação: remove toda chave que contém o texto."""
    pattern: str = Field(..., min_length=1, description="Substring, ex.: kliq-feed:42:")

class RemovedResponse(BaseModel):
    ok: bool = True
    removed: int = Field(..., ge=0)
