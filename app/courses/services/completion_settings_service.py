import logging

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.courses.models import VideoCompletionSettings

logger = logging.getLogger(__name__)


class CompletionSettingsService:
    """Reads and writes the single-row completion threshold."""

    @staticmethod
    def _get_row(db: Session) -> VideoCompletionSettings | None:
        return (
            db.query(VideoCompletionSettings)
            .order_by(VideoCompletionSettings.created_at)
            .first()
        )

    @staticmethod
    def get_threshold(db: Session) -> int:
        row = CompletionSettingsService._get_row(db)
        if row is None:
            return settings.DEFAULT_COMPLETION_THRESHOLD
        return row.completion_threshold

    @staticmethod
    def set_threshold(completion_threshold: int, db: Session) -> int:
        """Store a new threshold. Lectures already completed stay completed."""
        if not 0 <= completion_threshold <= 100:
            raise ValidationError(
                "Completion threshold must be between 0 and 100",
                field="completion_threshold",
            )

        row = CompletionSettingsService._get_row(db)
        if row is None:
            row = VideoCompletionSettings(completion_threshold=completion_threshold)
            db.add(row)
        else:
            row.completion_threshold = completion_threshold

        db.commit()
        logger.info("Video completion threshold set to %d%%", completion_threshold)
        return completion_threshold
