# src/peoples_forum/services/moderation.py
"""Moderation services for the forum."""

import logging
from dataclasses import dataclass

from peoples_forum.core.errors import NotFound
from peoples_forum.core.security import TokenClaims
from peoples_forum.models import Comment, Report
from peoples_forum.repositories.store import StoreAdapter
from peoples_forum.schemas.report import ReportCreate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionResult:
    """Counts of entities removed while resolving a report."""

    report_id: int
    comment_id: int
    reports_deleted: int
    comments_deleted: int


class ModerationCoordinator:
    """Keeps reports and the comments they target consistent.

    Resolving a report removes the report and its comment as one unit: either
    both rows are gone afterwards or both are still present.
    """

    def __init__(self, store: StoreAdapter) -> None:
        """Bind the coordinator to a request-scoped store."""
        self.store = store

    def resolve_report(self, report_id: int) -> ResolutionResult:
        """Delete a report and the comment it targets atomically.

        Args:
            report_id: ID of the report being resolved

        Returns:
            How many reports and comments were removed

        Raises:
            NotFound: If the report does not exist, or was removed by a
                concurrent resolution before this one committed; nothing
                is touched.
            StoreUnavailable: If the transaction could not commit; both rows
                are left as they were.
        """
        report = self.store.get_or_404(Report, report_id)
        comment_id = report.comment_id

        def _remove(tx: StoreAdapter) -> tuple[int, int]:
            reports_deleted = tx.delete_by_id(Report, report_id)
            if not reports_deleted:
                # Resolved by someone else since the lookup.
                raise NotFound.for_entity("Report")
            # Other reports on the same comment would dangle once it is gone.
            reports_deleted += tx.delete_where(Report, Report.comment_id == comment_id)
            comments_deleted = tx.delete_by_id(Comment, comment_id)
            return reports_deleted, comments_deleted

        reports_deleted, comments_deleted = self.store.with_transaction(_remove)
        logger.info(
            "Resolved report %s: removed %d report(s), %d comment(s)",
            report_id,
            reports_deleted,
            comments_deleted,
        )
        return ResolutionResult(
            report_id=report_id,
            comment_id=comment_id,
            reports_deleted=reports_deleted,
            comments_deleted=comments_deleted,
        )


def file_report(store: StoreAdapter, claims: TokenClaims, payload: ReportCreate) -> Report:
    """Record an abuse report against an existing comment.

    Raises:
        NotFound: If the comment does not exist.
    """
    store.get_or_404(Comment, payload.comment_id)
    report = Report(
        comment_id=payload.comment_id,
        reporter_email=claims.email,
        reason=payload.reason,
    )
    store.insert(report)
    store.commit()
    return report


def list_reports(store: StoreAdapter) -> list[Report]:
    """Return open reports, newest first."""
    return store.find_many(Report, order_by=(Report.created_at.desc(), Report.id.desc()))
