"""API routes for the FastAPI application."""

from planwise.api.router import TrailingSlashRouter
from planwise.api.v1.endpoints import health, plans, subscriptions

# Use our custom router that handles trailing slashes
api_router = TrailingSlashRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(plans.router, prefix="/plans", tags=["plans"])
api_router.include_router(subscriptions.router, prefix="/subscriptions", tags=["subscriptions"])
