"""Main API v1 router that combines all endpoint routers."""

from fastapi import APIRouter

from better_qdrant.api.v1.endpoints import collections, health, search, tools

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(health.router)
api_router.include_router(collections.router)
api_router.include_router(search.router)
api_router.include_router(tools.router)
