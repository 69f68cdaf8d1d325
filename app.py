import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from middleware.rate_limit import FixedWindowRateLimiter
from services.florist_one import FloristOneClient, has_florist_one_credentials
from utils.cache import DeliveryDateCache, create_cache_store
from utils.error_handler import register_exception_handlers
from web.cart_router import cart_router
from web.checkout_router import checkout_router
from web.delivery_router import delivery_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    # Startup
    if has_florist_one_credentials():
        app.state.vendor_client = FloristOneClient.from_config()
        logging.info("[Startup] Florist One credentials found, carts are live")
    else:
        app.state.vendor_client = None
        logging.warning("[Startup] Florist One credentials not configured, carts are mocked")

    store, redis = create_cache_store()
    app.state.delivery_date_cache = DeliveryDateCache(store)
    app.state.rate_limiter = FixedWindowRateLimiter()

    yield

    # Shutdown
    if app.state.vendor_client is not None:
        await app.state.vendor_client.close()
    if redis is not None:
        await redis.aclose()
    logging.warning('Bye!')


def create_app() -> FastAPI:
    app = FastAPI(title="Florist storefront API", lifespan=lifespan)

    if config.CORS_ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.CORS_ALLOWED_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type"],
        )
        logging.info(f"[Startup] CORS middleware enabled for origins: {config.CORS_ALLOWED_ORIGINS}")
    else:
        logging.debug("[Startup] CORS middleware disabled (no allowed origins configured)")

    register_exception_handlers(app)
    app.include_router(cart_router)
    app.include_router(checkout_router)
    app.include_router(delivery_router)

    # Health check endpoint (for container monitoring)
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "mode": "live" if app.state.vendor_client is not None else "mock"}

    return app


app = create_app()
