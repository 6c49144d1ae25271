"""Health check endpoint."""

from fastapi import APIRouter

from better_qdrant.core.exceptions import TransportError
from better_qdrant.core.logging import get_logger
from better_qdrant.dependencies import QdrantServiceDep, SettingsDep
from better_qdrant.schemas.health import HealthResponse

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Returns the health status of the API and its vector store",
)
async def health_check(settings: SettingsDep, qdrant_service: QdrantServiceDep) -> HealthResponse:
    """Check API health and Qdrant reachability.

    Args:
        settings: Injected application settings.
        qdrant_service: Injected Qdrant service.

    Returns:
        HealthResponse: Health status information.
    """
    try:
        await qdrant_service.list_collections()
        vector_store = "ok"
    except TransportError as exc:
        logger.warning("Vector store unreachable: %s", exc.message)
        vector_store = "unreachable"

    return HealthResponse(
        status="healthy" if vector_store == "ok" else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        vector_store=vector_store,
    )
