from uuid import UUID

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.courses.models import Course, Lecture
from app.courses.repositories import LectureRepository
from app.db.session import get_db


class RequireCourse:
    """Dependency class resolving the ``course_id`` path parameter to a Course."""

    def __call__(self, course_id: UUID, db: Session = Depends(get_db)) -> Course:
        course = db.get(Course, course_id)
        if not course:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Course not found",
            )
        return course


class RequireCourseLecture:
    """Dependency class checking that ``lecture_id`` belongs to ``course_id``."""

    def __call__(
        self, course_id: UUID, lecture_id: UUID, db: Session = Depends(get_db)
    ) -> Lecture:
        lecture = LectureRepository(db).get_in_course(course_id, lecture_id)
        if not lecture:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Lecture not found in this course",
            )
        return lecture
