"""Store access for the curriculum tree and progress records."""

from uuid import UUID

from sqlalchemy.orm import Session

from app.core.repository import BaseRepository
from app.courses.models import Course, Lecture, LectureProgress, Section


class CourseRepository(BaseRepository[Course]):
    def __init__(self, db: Session):
        super().__init__(db, Course)

    def set_lecture_count(self, course: Course, lecture_count: int) -> None:
        if course.lecture_count != lecture_count:
            course.lecture_count = lecture_count
            self.db.flush()


class SectionRepository(BaseRepository[Section]):
    def __init__(self, db: Session):
        super().__init__(db, Section)

    def list_for_course(self, course_id: UUID) -> list[Section]:
        return (
            self.db.query(Section)
            .filter(Section.course_id == course_id)
            .order_by(Section.position)
            .all()
        )

    def ids_for_course(self, course_id: UUID) -> set[UUID]:
        rows = self.db.query(Section.id).filter(Section.course_id == course_id).all()
        return {row[0] for row in rows}

    def foreign_ids(self, course_id: UUID, section_ids: set[UUID]) -> list[UUID]:
        """Ids among ``section_ids`` that belong to a different course."""
        if not section_ids:
            return []
        rows = (
            self.db.query(Section.id)
            .filter(Section.id.in_(section_ids), Section.course_id != course_id)
            .all()
        )
        return [row[0] for row in rows]


class LectureRepository(BaseRepository[Lecture]):
    def __init__(self, db: Session):
        super().__init__(db, Lecture)

    def list_for_section(self, section_id: UUID) -> list[Lecture]:
        return (
            self.db.query(Lecture)
            .filter(Lecture.section_id == section_id)
            .order_by(Lecture.position)
            .all()
        )

    def list_for_course(self, course_id: UUID) -> list[Lecture]:
        return (
            self.db.query(Lecture)
            .join(Section, Lecture.section_id == Section.id)
            .filter(Section.course_id == course_id)
            .order_by(Section.position, Lecture.position)
            .all()
        )

    def ids_for_section(self, section_id: UUID) -> set[UUID]:
        rows = self.db.query(Lecture.id).filter(Lecture.section_id == section_id).all()
        return {row[0] for row in rows}

    def foreign_ids(self, course_id: UUID, lecture_ids: set[UUID]) -> list[UUID]:
        """Ids among ``lecture_ids`` whose section belongs to a different course."""
        if not lecture_ids:
            return []
        rows = (
            self.db.query(Lecture.id)
            .join(Section, Lecture.section_id == Section.id)
            .filter(Lecture.id.in_(lecture_ids), Section.course_id != course_id)
            .all()
        )
        return [row[0] for row in rows]

    def get_in_course(self, course_id: UUID, lecture_id: UUID) -> Lecture | None:
        return (
            self.db.query(Lecture)
            .join(Section, Lecture.section_id == Section.id)
            .filter(Lecture.id == lecture_id, Section.course_id == course_id)
            .first()
        )


class ProgressRepository(BaseRepository[LectureProgress]):
    def __init__(self, db: Session):
        super().__init__(db, LectureProgress)

    def get_by_key(
        self, user_id: UUID, course_id: UUID, lecture_id: UUID
    ) -> LectureProgress | None:
        return (
            self.db.query(LectureProgress)
            .filter(
                LectureProgress.user_id == user_id,
                LectureProgress.course_id == course_id,
                LectureProgress.lecture_id == lecture_id,
            )
            .first()
        )

    def get_or_create(self, user_id: UUID, course_id: UUID, lecture_id: UUID) -> LectureProgress:
        progress = self.get_by_key(user_id, course_id, lecture_id)
        if progress is None:
            progress = LectureProgress(
                user_id=user_id,
                course_id=course_id,
                lecture_id=lecture_id,
                completed=False,
                watch_count=0,
            )
            self.db.add(progress)
        return progress

    def list_for_course(self, user_id: UUID, course_id: UUID) -> list[LectureProgress]:
        return (
            self.db.query(LectureProgress)
            .filter(LectureProgress.user_id == user_id, LectureProgress.course_id == course_id)
            .all()
        )
