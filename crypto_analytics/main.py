"""
Crypto Analytics — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crypto_analytics.config import CORS_ORIGINS, configure_logging
from crypto_analytics.data.store import DataStore
from crypto_analytics.api.dependencies import configured_store, set_store
from crypto_analytics.api.router_meta import router as meta_router
from crypto_analytics.api.router_coins import router as coins_router
from crypto_analytics.api.router_charts import router as charts_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the dataset at startup, reusing a store that was already configured."""
    configure_logging()
    store = configured_store() or DataStore()
    store.ensure_loaded()
    set_store(store)

    if store.row_count() > 0:
        logger.info("Crypto Analytics ready — %s coins from %s",
                    f"{store.row_count():,}", store.dataset.source)
    else:
        logger.warning("Crypto Analytics ready — no data yet; requests will retry the load")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Crypto Analytics API",
        description="Read-only market analytics over a cryptocurrency CSV snapshot",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(coins_router)
    app.include_router(charts_router)
    return app


app = create_app()
