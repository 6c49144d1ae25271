"""Health check schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: Literal["healthy", "degraded"] = Field(..., description="Health status")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Environment name")
    vector_store: Literal["ok", "unreachable"] = Field(
        ..., description="Whether Qdrant answered a collection listing"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "healthy",
                    "version": "0.1.1",
                    "environment": "development",
                    "vector_store": "ok",
                }
            ]
        }
    }
