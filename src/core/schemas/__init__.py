"""Core schemas for API responses."""

from src.core.schemas.responses import ApiResponse, ErrorResponse, HealthResponse

__all__ = ["ApiResponse", "ErrorResponse", "HealthResponse"]
