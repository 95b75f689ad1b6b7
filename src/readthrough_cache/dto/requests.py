"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ReadCacheRequest(BaseModel):
    """Request DTO for reading through the cache."""

    key: str = Field(..., description="The key to read, typically a relative file path", min_length=1)
