from dataclasses import asdict
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user
from app.auth.models.user import User
from app.courses.dependencies import RequireCourse, RequireCourseLecture
from app.courses.models import LectureProgress
from app.courses.repositories import LectureRepository
from app.courses.schemas.progress import (
    CourseProgressSummary,
    LectureProgressResponse,
    PlayerSessionCreate,
    PlayerSessionResponse,
    WatchSampleRequest,
    WatchSampleResponse,
)
from app.courses.services.completion_settings_service import CompletionSettingsService
from app.courses.services.player_sessions import PlayerSessionRegistry, get_player_registry
from app.courses.services.progress_service import ProgressService, ProgressTracker
from app.db.session import get_db

router = APIRouter()


def _progress_response(progress: LectureProgress) -> LectureProgressResponse:
    return LectureProgressResponse(
        id=str(progress.id),
        user_id=str(progress.user_id),
        course_id=str(progress.course_id),
        lecture_id=str(progress.lecture_id),
        last_position_seconds=progress.last_position_seconds,
        watch_percentage=progress.watch_percentage,
        watch_duration_seconds=progress.watch_duration_seconds,
        total_duration_seconds=progress.total_duration_seconds,
        completed=progress.completed,
        watch_count=progress.watch_count,
        completed_at=progress.completed_at,
        updated_at=progress.updated_at,
    )


@router.post(
    "/progress/players",
    response_model=PlayerSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def open_player(
    request: PlayerSessionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    registry: PlayerSessionRegistry = Depends(get_player_registry),
) -> PlayerSessionResponse:
    """Open a player for a lecture. Samples are throttled per player."""
    lecture = LectureRepository(db).get_in_course(request.course_id, request.lecture_id)
    if not lecture:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lecture not found in this course",
        )

    tracker = ProgressTracker(completion_threshold=CompletionSettingsService.get_threshold)
    session = registry.open(current_user.id, request.course_id, lecture.id, tracker)
    progress = ProgressService.get_lecture_progress(
        current_user.id, request.course_id, lecture.id, db
    )

    return PlayerSessionResponse(
        player_id=session.id,
        course_id=str(request.course_id),
        lecture_id=str(lecture.id),
        last_position_seconds=progress.last_position_seconds if progress else 0.0,
        watch_percentage=progress.watch_percentage if progress else 0,
        completed=progress.completed if progress else False,
        completion_threshold=tracker.current_threshold(db),
    )


@router.post("/progress/players/{player_id}/samples", response_model=WatchSampleResponse)
async def record_watch_sample(
    player_id: str,
    request: WatchSampleRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    registry: PlayerSessionRegistry = Depends(get_player_registry),
) -> WatchSampleResponse:
    """Report the player's current time. Samples inside the throttle window are dropped."""
    session = registry.get(player_id, current_user.id)
    outcome = session.tracker.record_sample(
        db,
        user_id=current_user.id,
        course_id=session.course_id,
        lecture_id=session.lecture_id,
        current_time_seconds=request.current_time_seconds,
        total_duration_seconds=request.total_duration_seconds,
        sampled_at=request.sampled_at,
    )
    return WatchSampleResponse(**asdict(outcome))


@router.delete("/progress/players/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_player(
    player_id: str,
    current_user: User = Depends(get_current_user),
    registry: PlayerSessionRegistry = Depends(get_player_registry),
) -> None:
    registry.close(player_id, current_user.id)


@router.get(
    "/progress/courses/{course_id}",
    response_model=CourseProgressSummary,
    dependencies=[Depends(RequireCourse())],
)
async def get_course_progress(
    course_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> CourseProgressSummary:
    """Get user's progress summary for a course."""
    summary = ProgressService.get_course_progress_summary(current_user.id, course_id, db)
    return CourseProgressSummary(**summary)


@router.get(
    "/progress/courses/{course_id}/lectures/{lecture_id}",
    response_model=LectureProgressResponse,
    dependencies=[Depends(RequireCourseLecture())],
)
async def get_lecture_progress(
    course_id: UUID,
    lecture_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> LectureProgressResponse:
    progress = ProgressService.get_lecture_progress(current_user.id, course_id, lecture_id, db)
    if not progress:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No progress found for this lecture",
        )
    return _progress_response(progress)


@router.post(
    "/progress/courses/{course_id}/lectures/{lecture_id}/complete",
    response_model=LectureProgressResponse,
    dependencies=[Depends(RequireCourseLecture())],
)
async def mark_lecture_complete(
    course_id: UUID,
    lecture_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> LectureProgressResponse:
    """Mark a lecture as complete once enough of its video was watched."""
    progress = ProgressService.mark_lecture_complete(
        user_id=current_user.id,
        course_id=course_id,
        lecture_id=lecture_id,
        completion_threshold=CompletionSettingsService.get_threshold(db),
        db=db,
    )
    return _progress_response(progress)


@router.post(
    "/progress/courses/{course_id}/lectures/{lecture_id}/reset",
    response_model=LectureProgressResponse,
    dependencies=[Depends(RequireCourseLecture())],
)
async def reset_lecture_progress(
    course_id: UUID,
    lecture_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> LectureProgressResponse:
    progress = ProgressService.reset_lecture_progress(current_user.id, course_id, lecture_id, db)
    return _progress_response(progress)
