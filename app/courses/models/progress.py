import uuid
from datetime import UTC, datetime

from sqlalchemy import ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base


class LectureProgress(Base):
    __tablename__ = "lecture_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", "lecture_id", name="uq_user_course_lecture"),
        Index("ix_lecture_progress_user_course", "user_id", "course_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), index=True
    )
    lecture_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("lectures.id", ondelete="CASCADE"), index=True
    )
    last_position_seconds: Mapped[float] = mapped_column(default=0.0)
    watch_percentage: Mapped[int] = mapped_column(default=0)
    watch_duration_seconds: Mapped[int] = mapped_column(default=0)
    total_duration_seconds: Mapped[int] = mapped_column(default=0)
    completed: Mapped[bool] = mapped_column(default=False)
    watch_count: Mapped[int] = mapped_column(default=0)
    completed_at: Mapped[datetime | None] = mapped_column(default=None)
    last_sampled_at: Mapped[datetime | None] = mapped_column(default=None)
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC)
    )

    lecture = relationship("Lecture", back_populates="progress_records")

    def __repr__(self) -> str:
        return f"<LectureProgress(id={self.id}, user_id={self.user_id}, lecture_id={self.lecture_id}, watched={self.watch_percentage}%)>"  # noqa: E501
