import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.session import Base


class VideoCompletionSettings(Base):
    """Single-row table holding the process-wide completion threshold."""

    __tablename__ = "video_completion_settings"
    __table_args__ = (
        CheckConstraint(
            "completion_threshold >= 0 AND completion_threshold <= 100",
            name="ck_completion_threshold_range",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    completion_threshold: Mapped[int] = mapped_column(default=80)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
