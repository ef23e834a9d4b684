import os
import time
import uuid
import json
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.cache import TTLCache
from core.config import CacheSettings
from core.errors import CacheError, KliqError, build_error
from core.sweeper import CacheSweeper
from routes import system

# -----------------------------
# Load env
# -----------------------------
load_dotenv()

# -----------------------------
# Logging (structured-ish)
# -----------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logger = logging.getLogger("mykliq-api")
logger.setLevel(LOG_LEVEL)
handler = logging.StreamHandler()
handler.setLevel(LOG_LEVEL)

class JsonFormatter(logging.Formatter):
    EXTRA_KEYS = (
        "request_id", "path", "status", "latency_ms",
        "pattern", "removed", "size", "capacity",
    )

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "ts": datetime.now(timezone.utc).isoformat(),
            "msg": record.getMessage(),
        }
        for k in self.EXTRA_KEYS:
            if hasattr(record, k):
                payload[k] = getattr(record, k)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

handler.setFormatter(JsonFormatter())
logger.handlers = [handler]

# -----------------------------
# Lifespan: cache + sweeper
# -----------------------------
def build_cache(settings: CacheSettings) -> TTLCache:
    return TTLCache(
        capacity=settings.capacity,
        default_ttl_seconds=settings.default_ttl_seconds,
    )

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = CacheSettings.from_env()
    app.state.cache = build_cache(settings)
    app.state.sweeper = CacheSweeper(app.state.cache, settings.sweep_interval_seconds)
    app.state.sweeper.start()
    logger.info("cache_started", extra={"capacity": settings.capacity})
    try:
        yield
    finally:
        await app.state.sweeper.stop()
        logger.info("cache_stopped", extra={"size": len(app.state.cache)})

# -----------------------------
# App
# -----------------------------
app = FastAPI(
    title="MyKliq Cache API",
    description="Cache em memória com TTL, capacidade limitada e invalidação por padrão",
    version="1.0.0",
    lifespan=lifespan,
)

# -----------------------------
# CORS
# -----------------------------
origins = os.getenv("ALLOWED_ORIGINS", "*")
allowed = [o.strip() for o in origins.split(",")] if origins != "*" else ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------------
# Middleware: request_id + logging
# -----------------------------
@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    start = time.time()

    request.state.request_id = request_id

    try:
        response = await call_next(request)
        latency_ms = int((time.time() - start) * 1000)

        logger.info("request", extra={
            "request_id": request_id,
            "path": request.url.path,
            "status": response.status_code,
            "latency_ms": latency_ms,
        })

        response.headers["X-Request-Id"] = request_id
        return response

    except Exception:
        latency_ms = int((time.time() - start) * 1000)
        logger.error("unhandled_exception", exc_info=True, extra={
            "request_id": request_id,
            "path": request.url.path,
            "status": 500,
            "latency_ms": latency_ms,
        })
        err = build_error(500, "Erro interno no servidor.")
        return JSONResponse(
            status_code=500,
            content={"detail": err.message, "error": err.to_response(), "request_id": request_id},
        )

# -----------------------------
# Exception handlers
# -----------------------------
def _error_payload(request: Request, err: KliqError) -> dict:
    request_id = getattr(request.state, "request_id", None)
    payload = {"detail": err.message, "error": err.to_response()}
    if request_id:
        payload["request_id"] = request_id
    return payload

async def http_exception_handler(request: Request, exc: HTTPException):
    logger.warning("http_exception", extra={
        "request_id": getattr(request.state, "request_id", None),
        "path": request.url.path,
        "status": exc.status_code,
    })
    err = build_error(exc.status_code, str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=_error_payload(request, err))

async def cache_error_handler(request: Request, exc: CacheError):
    logger.warning("cache_error", extra={
        "request_id": getattr(request.state, "request_id", None),
        "path": request.url.path,
        "status": exc.status_code,
    })
    return JSONResponse(status_code=exc.status_code, content=_error_payload(request, exc.to_error()))

def install_error_handlers(target: FastAPI) -> None:
    target.add_exception_handler(HTTPException, http_exception_handler)
    target.add_exception_handler(CacheError, cache_error_handler)

install_error_handlers(app)

# -----------------------------
# Routes
# -----------------------------
app.include_router(system.router)
