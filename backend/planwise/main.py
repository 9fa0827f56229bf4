"""Main module of the FastAPI application.

This module sets up the FastAPI application and the middleware to log incoming requests
and unhandled exceptions.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from planwise.api.middleware import (
    add_request_id,
    exception_logging_middleware,
    log_requests,
    planwise_exception_handler,
    validation_exception_handler,
)
from planwise.api.router import TrailingSlashRouter
from planwise.api.v1.api import api_router
from planwise.core.config import settings
from planwise.core.exceptions import PlanwiseException
from planwise.core.logging import logger
from planwise.db.init_db import create_tables, init_db
from planwise.db.session import AsyncSessionLocal, async_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events.

    Creates the tables and the bootstrap superuser when RUN_DB_INIT is set.
    """
    if settings.RUN_DB_INIT:
        logger.info("Initializing database...")
        await create_tables(async_engine)
        async with AsyncSessionLocal() as db:
            await init_db(db)

    yield

    await async_engine.dispose()


# Create FastAPI app with our custom router and disable FastAPI's built-in redirects
app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url="/openapi.json",
    lifespan=lifespan,
    router=TrailingSlashRouter(),
    redirect_slashes=False,
)

app.include_router(api_router)

# Register middleware directly
app.middleware("http")(add_request_id)
app.middleware("http")(log_requests)
app.middleware("http")(exception_logging_middleware)

# Register exception handlers
app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(ValidationError)(validation_exception_handler)
app.exception_handler(PlanwiseException)(planwise_exception_handler)

CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://localhost:8080",
]

if settings.ADDITIONAL_CORS_ORIGINS:
    if settings.ENVIRONMENT == "local":
        CORS_ORIGINS.append("*")  # Allow all origins in local environment
    else:
        CORS_ORIGINS.extend(settings.cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
