from uuid import UUID

from sqlalchemy.orm import Session

from app.core.config import settings
from app.courses.models import HomeworkStatus, HomeworkSubmission


class HomeworkService:
    @staticmethod
    def has_qualifying_submission(
        user_id: UUID,
        course_id: UUID,
        lecture_id: UUID,
        db: Session,
        require_approval: bool | None = None,
    ) -> bool:
        """Whether the learner's homework for a lecture counts as done.

        Rejected submissions never count. Plain submissions count unless
        approval is required.
        """
        if require_approval is None:
            require_approval = settings.HOMEWORK_REQUIRES_APPROVAL

        accepted = [HomeworkStatus.APPROVED]
        if not require_approval:
            accepted.append(HomeworkStatus.SUBMITTED)

        submission = (
            db.query(HomeworkSubmission.id)
            .filter(
                HomeworkSubmission.user_id == user_id,
                HomeworkSubmission.course_id == course_id,
                HomeworkSubmission.lecture_id == lecture_id,
                HomeworkSubmission.status.in_(accepted),
            )
            .first()
        )
        return submission is not None
