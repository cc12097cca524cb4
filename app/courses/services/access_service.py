"""Sequential lecture gating.

A lecture is locked while its immediate predecessor in the same section
requires completion and has not been completed. Earlier lectures are not
checked: finishing lecture N-1 opens lecture N even if N-2 was skipped.
Any lookup failure denies access.
"""

import enum
import logging
from dataclasses import dataclass
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.courses.exceptions import GateResolutionError
from app.courses.models import Lecture
from app.courses.repositories import LectureRepository, SectionRepository
from app.courses.services.homework_service import HomeworkService
from app.courses.services.progress_service import ProgressService

logger = logging.getLogger(__name__)


class AccessStatus(str, enum.Enum):
    ALLOWED = "allowed"
    LOCKED = "locked"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class LectureAccess:
    status: AccessStatus
    lecture_id: UUID | None = None
    locked_by: UUID | None = None

    @property
    def allowed(self) -> bool:
        return self.status == AccessStatus.ALLOWED


class AccessService:
    @staticmethod
    def can_access_lecture(
        user_id: UUID, course_id: UUID, section_id: UUID, lecture_index: int, db: Session
    ) -> bool:
        return AccessService.check_lecture_access(
            user_id, course_id, section_id, lecture_index, db
        ).allowed

    @staticmethod
    def check_lecture_access(
        user_id: UUID, course_id: UUID, section_id: UUID, lecture_index: int, db: Session
    ) -> LectureAccess:
        """Decide whether the learner may open the lecture at ``lecture_index``.

        Returns:
            ALLOWED, LOCKED (with the blocking predecessor id) or NOT_FOUND.
        """
        if lecture_index == 0:
            return LectureAccess(AccessStatus.ALLOWED)
        if lecture_index < 0:
            return LectureAccess(AccessStatus.NOT_FOUND)

        try:
            return AccessService._resolve(user_id, course_id, section_id, lecture_index, db)
        except SQLAlchemyError:
            error = GateResolutionError(section_id)
            logger.warning("%s (section %s)", error.message, section_id, exc_info=True)
            return LectureAccess(AccessStatus.NOT_FOUND)

    @staticmethod
    def _resolve(
        user_id: UUID, course_id: UUID, section_id: UUID, lecture_index: int, db: Session
    ) -> LectureAccess:
        section = SectionRepository(db).get_by_id(section_id)
        if section is None or section.course_id != course_id:
            return LectureAccess(AccessStatus.NOT_FOUND)

        lectures = LectureRepository(db).list_for_section(section_id)
        if lecture_index >= len(lectures):
            return LectureAccess(AccessStatus.NOT_FOUND)

        lecture = lectures[lecture_index]
        predecessor = lectures[lecture_index - 1]

        if not predecessor.requires_homework_completion:
            return LectureAccess(AccessStatus.ALLOWED, lecture_id=lecture.id)

        if AccessService.is_lecture_satisfied(user_id, course_id, predecessor, db):
            return LectureAccess(AccessStatus.ALLOWED, lecture_id=lecture.id)

        return LectureAccess(AccessStatus.LOCKED, lecture_id=lecture.id, locked_by=predecessor.id)

    @staticmethod
    def is_lecture_satisfied(user_id: UUID, course_id: UUID, lecture: Lecture, db: Session) -> bool:
        """Video completed, or homework handed in for lectures that carry homework."""
        if ProgressService.get_progress(user_id, course_id, db).get(lecture.id, False):
            return True
        if lecture.has_homework:
            return HomeworkService.has_qualifying_submission(user_id, course_id, lecture.id, db)
        return False
