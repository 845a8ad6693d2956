"""Pydantic schemas for record server endpoints."""

from typing import List

from pydantic import BaseModel, Field


class ManifestRequest(BaseModel):
    """Request model for committing a blob manifest."""
    partition_count: int = Field(ge=0)
    size: int = Field(ge=0)


class ManifestResponse(BaseModel):
    """Response model for a blob manifest."""
    blob_id: str
    partition_count: int
    size: int


class PartitionIndexResponse(BaseModel):
    """Response model for a blob's partition listing."""
    indices: List[int]


class StatusResponse(BaseModel):
    """Response model for the root status endpoint."""
    status: str
    max_record_size: int


class ErrorResponse(BaseModel):
    """Response model for errors."""
    detail: str
    code: str
