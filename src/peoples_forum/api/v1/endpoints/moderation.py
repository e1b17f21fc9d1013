"""Moderation-related endpoints for the forum API."""

from __future__ import annotations

from fastapi import APIRouter, status

from peoples_forum.api.v1.dependencies import AdminDep, ClaimsDep, StoreDep
from peoples_forum.models import Report
from peoples_forum.schemas.report import ReportCreate, ReportResponse, ResolutionResponse
from peoples_forum.services.moderation import ModerationCoordinator, file_report, list_reports

router = APIRouter(prefix="/reports", tags=["moderation"])


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def report_comment(payload: ReportCreate, claims: ClaimsDep, store: StoreDep) -> Report:
    """Report an abusive comment."""
    return file_report(store, claims, payload)


@router.get("", response_model=list[ReportResponse])
async def get_reports(_admin: AdminDep, store: StoreDep) -> list[Report]:
    """List open reports, newest first (admin only)."""
    return list_reports(store)


@router.delete("/{report_id}", response_model=ResolutionResponse)
async def resolve_report(report_id: int, _admin: AdminDep, store: StoreDep) -> ResolutionResponse:
    """Resolve a report by removing it and the reported comment together (admin only)."""
    result = ModerationCoordinator(store).resolve_report(report_id)
    return ResolutionResponse(
        report_id=result.report_id,
        comment_id=result.comment_id,
        reports_deleted=result.reports_deleted,
        comments_deleted=result.comments_deleted,
    )
