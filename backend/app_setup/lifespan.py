"""
Lifespan FastAPI: initialisation/arrêt des ressources partagées.
- Crée le client Supabase unique (app.state.store), vérifie l'accès, le ferme à l'arrêt.
- Initialise FastAPILimiter (Redis).
- Variables d’environnement supportées:
  - DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS=1: désactive complètement le rate limiting (tests)
  - LOCAL_RATE_LIMIT_FALLBACK=1: active un fallback local si l’init échoue
"""
import os
import logging
import redis.asyncio as redis
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi_limiter import FastAPILimiter

from backend.infra import supabase_client
from backend.infra import store as store_helpers

async def _init_rate_limiter(app: FastAPI, logger: logging.Logger) -> None:
    if os.getenv("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS") == "1":
        app.state.rate_limit_enabled = False
        logger.info("Rate limiting disabled by DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS")
        return
    try:
        redis_url = os.getenv("RATE_LIMIT_REDIS_URL", "redis://127.0.0.1:6379/0")
        r = redis.from_url(redis_url, encoding="utf-8", decode_responses=True)
        await FastAPILimiter.init(r)
        app.state.rate_limit_enabled = True
        logger.info("Rate limiting enabled")
    except Exception as e:
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            app.state.rate_limit_enabled = True
            logger.warning(f"Rate limiting falling back to local in-memory due to init error: {e}")
        else:
            app.state.rate_limit_enabled = False
            logger.warning(f"Rate limiting disabled due to init error: {e}")

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    - Le client Supabase est obligatoire: une configuration absente fait échouer le démarrage.
    - Une base injoignable au démarrage est seulement signalée (les requêtes échoueront en 500).
    - En cas d’échec de Redis et sans fallback, le rate limiting est désactivé proprement.
    """
    logger = logging.getLogger("uvicorn.error")
    client = supabase_client.create_store_client()
    app.state.store = client
    try:
        store_helpers.ping(client)
        logger.info("Supabase joignable")
    except Exception as e:
        logger.warning(f"Supabase injoignable au démarrage: {e}")

    await _init_rate_limiter(app, logger)
    try:
        yield
    finally:
        supabase_client.close_store_client(client)
        app.state.store = None
