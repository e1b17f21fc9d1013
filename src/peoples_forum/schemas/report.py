# src/peoples_forum/schemas/report.py
"""Moderation-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReportCreate(BaseModel):
    """Schema for reporting an abusive comment."""

    comment_id: int = Field(..., ge=1, description="Comment being reported")
    reason: str = Field(..., min_length=1, max_length=1000, description="Why it is abusive")


class ReportResponse(BaseModel):
    """Schema for report information returned by the API."""

    id: int
    comment_id: int
    reporter_email: str
    reason: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ResolutionResponse(BaseModel):
    """Entities removed when a report was resolved."""

    report_id: int
    comment_id: int
    reports_deleted: int
    comments_deleted: int
