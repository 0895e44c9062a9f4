"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import users, websocket
from src.api.exception_handlers import setup_exception_handlers
from src.config import get_settings
from src.database import init_db

settings = get_settings()
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def configure_logging() -> None:
    """Configure console logging at the configured level."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    # Quiet down noisy third-party loggers
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    configure_logging()
    init_db()
    logger.info(f"User directory API started ({settings.environment})")
    yield


app = FastAPI(
    title="User Directory API",
    description="CRUD over users with live change notifications",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)

# Register routers
app.include_router(users.router)
app.include_router(websocket.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
