import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import cast
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.datetime_utils import clamp_to_now, ensure_utc
from app.core.exceptions import NotFoundError, ValidationError
from app.courses.exceptions import ProgressWriteError
from app.courses.models import LectureProgress
from app.courses.repositories import LectureRepository, ProgressRepository

logger = logging.getLogger(__name__)

ThresholdSource = int | Callable[[Session], int]


def compute_watch_percentage(current_time_seconds: float, total_duration_seconds: float) -> int:
    """floor(current / total * 100), clamped to 0..100; 0 for an unknown duration."""
    if total_duration_seconds <= 0:
        return 0
    percentage = math.floor(current_time_seconds * 100 / total_duration_seconds)
    return max(0, min(100, percentage))


@dataclass
class SampleOutcome:
    persisted: bool
    watch_percentage: int
    completed: bool = False
    just_completed: bool = False
    watch_count: int = 0
    throttled: bool = False
    stale: bool = False


class ProgressTracker:
    """Watch-progress writer for one player instance.

    Persists at most one sample per ``update_interval_ms``; samples in
    between are dropped. The throttle window lives and dies with the
    instance. A record that reached the completion threshold stays
    completed whatever later samples report.
    """

    def __init__(
        self,
        completion_threshold: ThresholdSource,
        update_interval_ms: int | None = None,
        clock: Callable[[], float] = time.monotonic,
        on_complete: Callable[[LectureProgress], None] | None = None,
    ):
        self._completion_threshold = completion_threshold
        self.update_interval_ms = (
            settings.PROGRESS_UPDATE_THRESHOLD_MS
            if update_interval_ms is None
            else update_interval_ms
        )
        self._clock = clock
        self._on_complete = on_complete
        self._last_update_at: float | None = None
        # Lectures whose viewing has already been counted by this player
        self._counted_lectures: set[UUID] = set()

    def current_threshold(self, db: Session) -> int:
        if callable(self._completion_threshold):
            return self._completion_threshold(db)
        return self._completion_threshold

    def _throttled(self, now: float) -> bool:
        return (
            self._last_update_at is not None
            and (now - self._last_update_at) * 1000 < self.update_interval_ms
        )

    def record_sample(
        self,
        db: Session,
        user_id: UUID,
        course_id: UUID,
        lecture_id: UUID,
        current_time_seconds: float,
        total_duration_seconds: float,
        sampled_at: datetime | None = None,
    ) -> SampleOutcome:
        """Upsert the (user, course, lecture) record from one player time update."""
        percentage = compute_watch_percentage(current_time_seconds, total_duration_seconds)

        now = self._clock()
        if self._throttled(now):
            return SampleOutcome(persisted=False, throttled=True, watch_percentage=percentage)

        sampled_at = clamp_to_now(sampled_at)
        just_completed = False
        count_viewing = False

        try:
            threshold = self.current_threshold(db)
            progress = ProgressRepository(db).get_or_create(user_id, course_id, lecture_id)

            if progress.last_sampled_at is not None and sampled_at < ensure_utc(
                progress.last_sampled_at
            ):
                logger.debug("Ignoring stale sample for lecture %s", lecture_id)
                return SampleOutcome(
                    persisted=False,
                    stale=True,
                    watch_percentage=progress.watch_percentage,
                    completed=progress.completed,
                    watch_count=progress.watch_count,
                )

            progress.last_position_seconds = float(current_time_seconds)
            progress.watch_percentage = percentage
            progress.watch_duration_seconds = math.floor(current_time_seconds)
            progress.total_duration_seconds = math.floor(total_duration_seconds)
            progress.last_sampled_at = sampled_at

            if percentage >= threshold:
                if not progress.completed:
                    progress.completed = True
                    progress.completed_at = datetime.now(UTC)
                    just_completed = True
                if lecture_id not in self._counted_lectures:
                    progress.watch_count = (progress.watch_count or 0) + 1
                    count_viewing = True

            db.commit()
            db.refresh(progress)
        except SQLAlchemyError:
            db.rollback()
            error = ProgressWriteError(lecture_id)
            logger.warning("%s (lecture %s)", error.message, lecture_id, exc_info=True)
            return SampleOutcome(persisted=False, watch_percentage=percentage)

        # Only a persisted sample opens a new throttle window
        self._last_update_at = now

        if count_viewing:
            self._counted_lectures.add(lecture_id)

        if just_completed:
            logger.info(
                "User %s completed lecture %s at %d%% (threshold %d%%)",
                user_id,
                lecture_id,
                percentage,
                threshold,
            )
            if self._on_complete is not None:
                self._on_complete(progress)

        return SampleOutcome(
            persisted=True,
            watch_percentage=progress.watch_percentage,
            completed=progress.completed,
            just_completed=just_completed,
            watch_count=progress.watch_count,
        )


class ProgressService:
    @staticmethod
    def get_progress(user_id: UUID, course_id: UUID, db: Session) -> dict[UUID, bool]:
        """Completion flag of every lecture in the course, read from the store."""
        completed = {
            p.lecture_id: p.completed
            for p in ProgressRepository(db).list_for_course(user_id, course_id)
        }
        return {
            lecture.id: completed.get(lecture.id, False)
            for lecture in LectureRepository(db).list_for_course(course_id)
        }

    @staticmethod
    def get_lecture_progress(
        user_id: UUID, course_id: UUID, lecture_id: UUID, db: Session
    ) -> LectureProgress | None:
        return ProgressRepository(db).get_by_key(user_id, course_id, lecture_id)

    @staticmethod
    def reset_lecture_progress(
        user_id: UUID, course_id: UUID, lecture_id: UUID, db: Session
    ) -> LectureProgress:
        """Clear completion and position. The viewing count is kept."""
        progress = ProgressRepository(db).get_by_key(user_id, course_id, lecture_id)
        if not progress:
            raise NotFoundError("No progress recorded for this lecture", resource="progress")

        progress.completed = False
        progress.completed_at = None
        progress.watch_percentage = 0
        progress.last_position_seconds = 0.0
        progress.watch_duration_seconds = 0

        db.commit()
        db.refresh(progress)
        logger.info("Reset progress of user %s on lecture %s", user_id, lecture_id)

        return cast(LectureProgress, progress)

    @staticmethod
    def mark_lecture_complete(
        user_id: UUID,
        course_id: UUID,
        lecture_id: UUID,
        completion_threshold: int,
        db: Session,
    ) -> LectureProgress:
        """Manually mark a lecture as complete.

        Lectures without a video can be completed directly; video lectures
        must have been watched up to the completion threshold first.
        """
        lecture = LectureRepository(db).get_in_course(course_id, lecture_id)
        if not lecture:
            raise NotFoundError("Lecture not found", resource="lecture")

        repo = ProgressRepository(db)
        progress = repo.get_by_key(user_id, course_id, lecture_id)

        if not lecture.is_text_only:
            if not progress:
                raise ValidationError(
                    "Start watching the video before marking the lecture as complete"
                )
            if progress.watch_percentage < completion_threshold:
                raise ValidationError(
                    f"Watch at least {completion_threshold}% of the video before marking "
                    f"the lecture as complete (current progress: {progress.watch_percentage}%)"
                )

        progress = progress or repo.get_or_create(user_id, course_id, lecture_id)
        progress.watch_percentage = 100

        if not progress.completed:
            progress.completed = True
            progress.completed_at = datetime.now(UTC)
            progress.watch_count = max(progress.watch_count or 0, 1)

        db.commit()
        db.refresh(progress)

        return cast(LectureProgress, progress)

    @staticmethod
    def get_course_progress_summary(user_id: UUID, course_id: UUID, db: Session) -> dict:
        """Get user's progress summary for a course."""
        lecture_ids = [lecture.id for lecture in LectureRepository(db).list_for_course(course_id)]
        total_lectures = len(lecture_ids)

        progress_by_lecture = {
            p.lecture_id: p for p in ProgressRepository(db).list_for_course(user_id, course_id)
        }

        lectures_progress = []
        for lid in lecture_ids:
            progress = progress_by_lecture.get(lid)
            if progress:
                lectures_progress.append(
                    {
                        "lecture_id": str(lid),
                        "last_position_seconds": progress.last_position_seconds,
                        "watch_percentage": progress.watch_percentage,
                        "completed": progress.completed,
                        "watch_count": progress.watch_count,
                    }
                )
            else:
                lectures_progress.append({"lecture_id": str(lid)})

        completed = {
            str(lid): bool(lid in progress_by_lecture and progress_by_lecture[lid].completed)
            for lid in lecture_ids
        }
        completed_lectures = sum(1 for is_done in completed.values() if is_done)
        total_watch_time_seconds = sum(
            progress_by_lecture[lid].watch_duration_seconds
            for lid in lecture_ids
            if lid in progress_by_lecture
        )

        progress_percentage = (
            int(completed_lectures / total_lectures * 100) if total_lectures > 0 else 0
        )

        return {
            "course_id": str(course_id),
            "total_lectures": total_lectures,
            "completed_lectures": completed_lectures,
            "progress_percentage": progress_percentage,
            "total_watch_time_seconds": total_watch_time_seconds,
            "completed": completed,
            "lectures": lectures_progress,
        }
