import uuid
from datetime import datetime

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    title: Mapped[str] = mapped_column()
    # Denormalised, maintained best-effort by the outline reconciler
    lecture_count: Mapped[int] = mapped_column(default=0)
    # Initiation time of the last applied outline submission
    outline_requested_at: Mapped[datetime | None] = mapped_column(default=None)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    sections = relationship(
        "Section",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="Section.position",
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, title={self.title})>"


class Section(Base):
    __tablename__ = "sections"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    course_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column()
    position: Mapped[int] = mapped_column(default=0)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    course = relationship("Course", back_populates="sections")
    lectures = relationship(
        "Lecture",
        back_populates="section",
        cascade="all, delete-orphan",
        order_by="Lecture.position",
    )

    def __repr__(self) -> str:
        return f"<Section(id={self.id}, title={self.title}, position={self.position})>"


class Lecture(Base):
    __tablename__ = "lectures"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4, index=True)
    section_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("sections.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column()
    description: Mapped[str | None] = mapped_column(default=None)
    position: Mapped[int] = mapped_column(default=0)
    duration: Mapped[int | None] = mapped_column(default=None)
    video_url: Mapped[str | None] = mapped_column(default=None)
    is_free: Mapped[bool] = mapped_column(default=False)
    has_homework: Mapped[bool] = mapped_column(default=False)
    requires_homework_completion: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    section = relationship("Section", back_populates="lectures")
    progress_records = relationship(
        "LectureProgress", back_populates="lecture", cascade="all, delete-orphan"
    )
    homework_submissions = relationship(
        "HomeworkSubmission", back_populates="lecture", cascade="all, delete-orphan"
    )

    @property
    def is_text_only(self) -> bool:
        return not self.video_url

    def __repr__(self) -> str:
        return f"<Lecture(id={self.id}, title={self.title}, section_id={self.section_id})>"
