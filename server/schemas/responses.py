"""Pydantic response models (DTOs) for FastAPI endpoints."""

from pydantic import BaseModel


class ErrorDTO(BaseModel):
    error: str


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
    retrieval_profile: str
    warnings: list[str] = []
