# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from app.core.config import get_settings
from app.core.exceptions import APIError, handle_api_error
from app.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from app.models import seller as _seller_models  # noqa: F401
from app.models import product as _product_models  # noqa: F401
from app.models import order as _order_models  # noqa: F401


# Routers
from app.routers.auth import router as auth_router
from app.routers.sellers import router as sellers_router
from app.routers.products import router as products_router
from app.routers.orders import router as orders_router
from app.routers.analytics import router as analytics_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create missing tables before serving; a database that cannot be
    reached aborts startup.
    """
    logger.info("Creating tables for sellers, products and orders")
    try:
        create_db_and_tables()
    except Exception:
        logger.exception("Database unavailable at startup")
        raise
    logger.info("Storefront console ready (analytics timezone %s)", settings.ANALYTICS_TIMEZONE)
    yield
    logger.info("Storefront console stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(APIError, handle_api_error)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(auth_router, prefix=settings.API_V1_STR)
app.include_router(sellers_router, prefix=settings.API_V1_STR)
app.include_router(products_router, prefix=settings.API_V1_STR)
app.include_router(orders_router, prefix=settings.API_V1_STR)
app.include_router(analytics_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "storefront-console"}
