"""Repository for ContentReport database operations."""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skillswap.errors import RepositoryError
from skillswap.models.content_report import ContentReport, ReviewStatus
from skillswap.database.models import ContentReportDB, enum_to_value

logger = logging.getLogger(__name__)


class ContentReportRepository:
    """Repository for the content moderation queue."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, report_id: str) -> Optional[ContentReport]:
        """Get report by ID."""
        try:
            report_db = self.db.query(ContentReportDB).filter(ContentReportDB.id == report_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load content report {report_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to load content report {report_id}") from e
        return report_db.to_pydantic() if report_db else None

    def list_by_status(self, status: ReviewStatus) -> List[ContentReport]:
        """Get reports with the given review status, oldest first."""
        try:
            reports_db = self.db.query(ContentReportDB).filter(
                ContentReportDB.status == enum_to_value(status)
            ).order_by(ContentReportDB.created_at).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list content reports: {type(e).__name__}: {str(e)}")
            raise RepositoryError("Failed to list content reports") from e
        return [report_db.to_pydantic() for report_db in reports_db]

    def list_all(self) -> List[ContentReport]:
        """Get all reports, newest first."""
        try:
            reports_db = self.db.query(ContentReportDB).order_by(desc(ContentReportDB.created_at)).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list content reports: {type(e).__name__}: {str(e)}")
            raise RepositoryError("Failed to list content reports") from e
        return [report_db.to_pydantic() for report_db in reports_db]

    def create(self, report: ContentReport) -> ContentReport:
        """File a new report."""
        try:
            report_db = ContentReportDB.from_pydantic(report)
            self.db.add(report_db)
            self.db.commit()
            self.db.refresh(report_db)
            logger.debug(f"Created content report {report.id} for user {report.user_id}")
            return report_db.to_pydantic()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create content report {report.id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to create content report {report.id}") from e

    def review(self, report_id: str, status: ReviewStatus, reviewed_at: datetime) -> Optional[ContentReport]:
        """Conditionally move a pending report to `status`.

        Returns:
            The post-write report, or None if it was not pending
        """
        try:
            affected = (
                self.db.query(ContentReportDB)
                .filter(
                    ContentReportDB.id == report_id,
                    ContentReportDB.status == ReviewStatus.PENDING.value,
                )
                .update(
                    {ContentReportDB.status: enum_to_value(status), ContentReportDB.reviewed_at: reviewed_at},
                    synchronize_session=False,
                )
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to review content report {report_id}: {type(e).__name__}: {str(e)}")
            raise RepositoryError(f"Failed to review content report {report_id}") from e
        if not affected:
            return None
        logger.debug(f"Reviewed content report {report_id}: {enum_to_value(status)}")
        return self.get(report_id)
