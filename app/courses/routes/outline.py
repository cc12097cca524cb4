"""Course outline routes: admin editing and the learner curriculum."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user, require_admin
from app.auth.models.user import User
from app.courses.dependencies import RequireCourse
from app.courses.models import Course, Section
from app.courses.schemas.outline import (
    CurriculumLecture,
    CurriculumResponse,
    CurriculumSection,
    LectureResponse,
    OutlineResponse,
    OutlineUpdateRequest,
    ReconcileResponse,
    SectionResponse,
)
from app.courses.services.outline_service import OutlineService
from app.courses.services.progress_service import ProgressService
from app.db.session import get_db

router = APIRouter()


def _section_response(section: Section) -> SectionResponse:
    return SectionResponse(
        id=str(section.id),
        course_id=str(section.course_id),
        title=section.title,
        position=section.position,
        created_at=section.created_at,
        updated_at=section.updated_at,
        lectures=[
            LectureResponse(
                id=str(lecture.id),
                section_id=str(lecture.section_id),
                title=lecture.title,
                description=lecture.description,
                position=lecture.position,
                duration=lecture.duration,
                video_url=lecture.video_url,
                is_free=lecture.is_free,
                has_homework=lecture.has_homework,
                requires_homework_completion=lecture.requires_homework_completion,
                created_at=lecture.created_at,
                updated_at=lecture.updated_at,
            )
            for lecture in section.lectures
        ],
    )


@router.get("/admin/courses/{course_id}/outline", response_model=OutlineResponse)
async def get_course_outline(
    course: Course = Depends(RequireCourse()),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> OutlineResponse:
    """Get the ordered outline of a course (admin only)."""
    sections = OutlineService.get_outline(course.id, db)
    return OutlineResponse(
        course_id=str(course.id),
        lecture_count=course.lecture_count,
        sections=[_section_response(s) for s in sections],
    )


@router.put("/admin/courses/{course_id}/outline", response_model=ReconcileResponse)
async def reconcile_course_outline(
    course_id: UUID,
    request: OutlineUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
) -> ReconcileResponse:
    """Replace the outline of a course with the submitted tree (admin only).

    Sections and lectures keep their ids; anything not submitted is deleted.
    """
    result = OutlineService.reconcile_outline(
        course_id, request.sections, db, requested_at=request.requested_at
    )
    sections = OutlineService.get_outline(course_id, db)

    return ReconcileResponse(
        course_id=str(course_id),
        sections_created=result.sections_created,
        sections_updated=result.sections_updated,
        sections_deleted=result.sections_deleted,
        lectures_created=result.lectures_created,
        lectures_updated=result.lectures_updated,
        lectures_deleted=result.lectures_deleted,
        lecture_count=result.lecture_count,
        lecture_count_updated=result.lecture_count_updated,
        outline=[_section_response(s) for s in sections],
    )


@router.get("/courses/{course_id}/curriculum", response_model=CurriculumResponse)
async def get_course_curriculum(
    course: Course = Depends(RequireCourse()),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CurriculumResponse:
    """Get the course outline with the learner's completion badges."""
    sections = OutlineService.get_outline(course.id, db)
    completed = ProgressService.get_progress(current_user.id, course.id, db)

    return CurriculumResponse(
        course_id=str(course.id),
        title=course.title,
        lecture_count=course.lecture_count,
        sections=[
            CurriculumSection(
                id=str(section.id),
                title=section.title,
                position=section.position,
                lectures=[
                    CurriculumLecture(
                        id=str(lecture.id),
                        title=lecture.title,
                        position=lecture.position,
                        duration=lecture.duration,
                        is_free=lecture.is_free,
                        has_homework=lecture.has_homework,
                        requires_homework_completion=lecture.requires_homework_completion,
                        completed=completed.get(lecture.id, False),
                    )
                    for lecture in section.lectures
                ],
            )
            for section in sections
        ],
    )
