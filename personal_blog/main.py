"""
FastAPI Application Entry Point.

Путь: personal_blog/main.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from personal_blog import __version__
from personal_blog.api.errors import register_exception_handlers
from personal_blog.api.routes import articles
from personal_blog.api.routes import auth
from personal_blog.api.routes import tags
from personal_blog.infrastructure.config.database import get_engine
from personal_blog.infrastructure.config.logging_config import setup_logging
from personal_blog.infrastructure.config.settings import get_settings
from personal_blog.infrastructure.persistence.migrations import init_database

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    await init_database(get_engine())
    logger.info(f"[App] Personal Blog API {__version__} started")
    yield
    await get_engine().dispose()


app = FastAPI(
    title="Personal Blog API",
    description="Персональный блог: статьи, теги, поиск",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routes
app.include_router(auth.router, prefix="/api/v1")
app.include_router(articles.router, prefix="/api/v1")
app.include_router(tags.router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Personal Blog API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "articles": "/api/v1/articles",
    }
