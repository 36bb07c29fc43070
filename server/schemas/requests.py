"""Pydantic request models (DTOs) for FastAPI endpoints.

The guide body is validated by ``server.utils.validate_request`` so that
error messages are exact; this model documents the shape in OpenAPI.
"""

from typing import Any

from pydantic import BaseModel, Field


class GuideRequestDTO(BaseModel):
    message: str = Field(..., description="User question, at most 5000 characters")
    conversationHistory: list[dict[str, Any]] = Field(
        default_factory=list, description="Prior turns as {role, content}; only the last 20 are used"
    )
    userContext: str | None = Field(None, description="Verified profile text")
    preferencesContext: str | None = Field(None, description="Stored preferences rendered as text")
