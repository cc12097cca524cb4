import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Enum, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base


class HomeworkStatus(str, enum.Enum):
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class HomeworkSubmission(Base):
    """A learner's homework for a lecture, written by the homework collaborator."""

    __tablename__ = "homework_submissions"
    __table_args__ = (
        Index("ix_homework_submissions_user_lecture", "user_id", "course_id", "lecture_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    course_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("courses.id", ondelete="CASCADE"))
    lecture_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("lectures.id", ondelete="CASCADE"))
    status: Mapped[HomeworkStatus] = mapped_column(
        Enum(HomeworkStatus, values_callable=lambda obj: [e.value for e in obj]),
        default=HomeworkStatus.SUBMITTED,
    )
    answer: Mapped[str | None] = mapped_column(default=None)
    file_url: Mapped[str | None] = mapped_column(default=None)
    submitted_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    reviewed_at: Mapped[datetime | None] = mapped_column(default=None)

    lecture = relationship("Lecture", back_populates="homework_submissions")

    def __repr__(self) -> str:
        return f"<HomeworkSubmission(id={self.id}, lecture_id={self.lecture_id}, status={self.status})>"  # noqa: E501
