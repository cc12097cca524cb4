from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user
from app.auth.models.user import User
from app.courses.schemas.access import LectureAccessResponse
from app.courses.services.access_service import AccessService
from app.db.session import get_db

router = APIRouter()


@router.get(
    "/courses/{course_id}/sections/{section_id}/lectures/{lecture_index}/access",
    response_model=LectureAccessResponse,
)
async def check_lecture_access(
    course_id: UUID,
    section_id: UUID,
    lecture_index: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> LectureAccessResponse:
    """Check whether the learner may open a lecture before navigating to it."""
    access = AccessService.check_lecture_access(
        current_user.id, course_id, section_id, lecture_index, db
    )

    return LectureAccessResponse(
        status=access.status.value,
        allowed=access.allowed,
        lecture_id=str(access.lecture_id) if access.lecture_id else None,
        locked_by=str(access.locked_by) if access.locked_by else None,
    )
