"""Outline reconciliation: make the stored section/lecture tree match a desired tree.

Both levels use the same primitive: upsert every desired node by id, then
delete the stored ids missing from the desired id set. All upserts of a
call are committed before any deletion runs, so a lecture moved to another
section is re-parented before its old section is pruned.

Concurrent reconciliations of one course are last-writer-wins per row;
only a submission initiated before the last applied one is rejected.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.datetime_utils import clamp_to_now, ensure_utc
from app.core.exceptions import NotFoundError
from app.courses.exceptions import (
    AggregateUpdateError,
    OutlineValidationError,
    StaleOutlineError,
    StoreWriteError,
)
from app.courses.models import Course, Section
from app.courses.repositories import CourseRepository, LectureRepository, SectionRepository
from app.courses.schemas.outline import SectionInput
from app.courses.services.positions import normalize_positions

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    course_id: UUID
    sections_created: int = 0
    sections_updated: int = 0
    sections_deleted: int = 0
    lectures_created: int = 0
    lectures_updated: int = 0
    lectures_deleted: int = 0
    lecture_count: int = 0
    lecture_count_updated: bool = True

    @property
    def changed(self) -> bool:
        return any(
            (
                self.sections_created,
                self.sections_updated,
                self.sections_deleted,
                self.lectures_created,
                self.lectures_updated,
                self.lectures_deleted,
            )
        )


class OutlineService:
    @staticmethod
    def get_course(course_id: UUID, db: Session) -> Course:
        course = CourseRepository(db).get_by_id(course_id)
        if course is None:
            raise NotFoundError("Course not found", resource="course")
        return course

    @staticmethod
    def get_outline(course_id: UUID, db: Session) -> list[Section]:
        """Sections of a course in position order, lectures ordered within each."""
        return SectionRepository(db).list_for_course(course_id)

    @staticmethod
    def reconcile_outline(
        course_id: UUID,
        desired_sections: list[SectionInput],
        db: Session,
        requested_at: datetime | None = None,
    ) -> ReconcileResult:
        """Persist ``desired_sections`` as the complete outline of a course.

        Args:
            course_id: Course whose outline is replaced.
            desired_sections: Sections in display order, lectures nested in order.
            db: Database session.
            requested_at: When the caller initiated the submission; defaults to now.

        Returns:
            Counts of what was created, updated and deleted.

        Raises:
            NotFoundError: The course does not exist.
            OutlineValidationError: The tree is malformed; nothing was written.
            StaleOutlineError: A later submission was already applied.
            StoreWriteError: A write failed; retrying with the same tree is safe.
        """
        course = OutlineService.get_course(course_id, db)
        OutlineService._validate(course_id, desired_sections, db)

        requested_at = clamp_to_now(requested_at)
        if course.outline_requested_at is not None and requested_at < ensure_utc(
            course.outline_requested_at
        ):
            raise StaleOutlineError(course_id)

        normalize_positions(desired_sections)
        for section_in in desired_sections:
            normalize_positions(section_in.lectures)

        result = ReconcileResult(course_id=course_id)
        section_ids, lecture_ids = OutlineService._apply_upserts(
            course, desired_sections, requested_at, result, db
        )
        OutlineService._apply_deletions(course_id, section_ids, lecture_ids, result, db)
        OutlineService._refresh_lecture_count(course, desired_sections, result, db)

        logger.info(
            "Reconciled outline of course %s: sections +%d ~%d -%d, lectures +%d ~%d -%d",
            course_id,
            result.sections_created,
            result.sections_updated,
            result.sections_deleted,
            result.lectures_created,
            result.lectures_updated,
            result.lectures_deleted,
        )
        return result

    @staticmethod
    def _validate(course_id: UUID, desired_sections: list[SectionInput], db: Session) -> None:
        section_ids: set[UUID] = set()
        lecture_ids: set[UUID] = set()

        for section_number, section_in in enumerate(desired_sections, start=1):
            if not section_in.title.strip():
                raise OutlineValidationError(
                    f"Section {section_number} has an empty title",
                    node_type="section",
                    node_id=section_in.id,
                )
            if section_in.id is not None:
                if section_in.id in section_ids:
                    raise OutlineValidationError(
                        "Section id appears more than once",
                        node_type="section",
                        node_id=section_in.id,
                    )
                section_ids.add(section_in.id)

            for lecture_number, lecture_in in enumerate(section_in.lectures, start=1):
                if not lecture_in.title.strip():
                    raise OutlineValidationError(
                        f"Lecture {lecture_number} of section {section_number} has an empty title",
                        node_type="lecture",
                        node_id=lecture_in.id,
                    )
                if lecture_in.id is not None:
                    if lecture_in.id in lecture_ids:
                        raise OutlineValidationError(
                            "Lecture id appears more than once",
                            node_type="lecture",
                            node_id=lecture_in.id,
                        )
                    lecture_ids.add(lecture_in.id)

        foreign_sections = SectionRepository(db).foreign_ids(course_id, section_ids)
        if foreign_sections:
            raise OutlineValidationError(
                "Section belongs to another course",
                node_type="section",
                node_id=foreign_sections[0],
            )
        foreign_lectures = LectureRepository(db).foreign_ids(course_id, lecture_ids)
        if foreign_lectures:
            raise OutlineValidationError(
                "Lecture belongs to another course",
                node_type="lecture",
                node_id=foreign_lectures[0],
            )

    @staticmethod
    def _apply_upserts(
        course: Course,
        desired_sections: list[SectionInput],
        requested_at: datetime,
        result: ReconcileResult,
        db: Session,
    ) -> tuple[set[UUID], set[UUID]]:
        sections = SectionRepository(db)
        lectures = LectureRepository(db)
        section_ids: set[UUID] = set()
        lecture_ids: set[UUID] = set()
        node_type: str = "course"
        node_ref: UUID | str | None = course.id

        try:
            course.outline_requested_at = requested_at

            for section_in in desired_sections:
                node_type, node_ref = "section", section_in.id or section_in.title
                section_outcome = sections.upsert(
                    section_in.id,
                    course_id=course.id,
                    title=section_in.title.strip(),
                    position=section_in.position,
                )
                section = section_outcome.instance
                section_ids.add(section.id)
                if section_outcome.created:
                    result.sections_created += 1
                elif section_outcome.changed:
                    result.sections_updated += 1

                for lecture_in in section_in.lectures:
                    node_type, node_ref = "lecture", lecture_in.id or lecture_in.title
                    lecture_outcome = lectures.upsert(
                        lecture_in.id,
                        section_id=section.id,
                        title=lecture_in.title.strip(),
                        description=lecture_in.description,
                        position=lecture_in.position,
                        duration=lecture_in.duration,
                        video_url=lecture_in.video_url,
                        is_free=lecture_in.is_free,
                        has_homework=lecture_in.has_homework,
                        requires_homework_completion=lecture_in.requires_homework_completion,
                    )
                    lecture_ids.add(lecture_outcome.instance.id)
                    if lecture_outcome.created:
                        result.lectures_created += 1
                    elif lecture_outcome.changed:
                        result.lectures_updated += 1

            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Outline upsert failed at %s %s: %s", node_type, node_ref, e)
            raise StoreWriteError(
                f"Failed to save {node_type}", node_type=node_type, node_id=node_ref
            ) from e

        return section_ids, lecture_ids

    @staticmethod
    def _apply_deletions(
        course_id: UUID,
        section_ids: set[UUID],
        lecture_ids: set[UUID],
        result: ReconcileResult,
        db: Session,
    ) -> None:
        sections = SectionRepository(db)
        lectures = LectureRepository(db)
        node_type: str = "section"
        node_ref: UUID | None = None

        try:
            for stale_section_id in sections.ids_for_course(course_id) - section_ids:
                node_type, node_ref = "section", stale_section_id
                section = sections.get_by_id(stale_section_id)
                if section is None:
                    continue
                result.lectures_deleted += len(section.lectures)
                sections.delete(section)
                result.sections_deleted += 1

            for section_id in section_ids:
                for stale_lecture_id in lectures.ids_for_section(section_id) - lecture_ids:
                    node_type, node_ref = "lecture", stale_lecture_id
                    if lectures.delete_by_id(stale_lecture_id):
                        result.lectures_deleted += 1

            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Outline deletion failed at %s %s: %s", node_type, node_ref, e)
            raise StoreWriteError(
                f"Failed to delete {node_type}", node_type=node_type, node_id=node_ref
            ) from e

    @staticmethod
    def _refresh_lecture_count(
        course: Course,
        desired_sections: list[SectionInput],
        result: ReconcileResult,
        db: Session,
    ) -> None:
        result.lecture_count = sum(len(section_in.lectures) for section_in in desired_sections)
        try:
            CourseRepository(db).set_lecture_count(course, result.lecture_count)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            error = AggregateUpdateError(result.course_id)
            logger.warning("%s (course %s)", error.message, result.course_id, exc_info=True)
            result.lecture_count_updated = False
