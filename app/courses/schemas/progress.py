from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.core.datetime_utils import UTCDatetime


class PlayerSessionCreate(BaseModel):
    course_id: UUID
    lecture_id: UUID


class PlayerSessionResponse(BaseModel):
    player_id: str
    course_id: str
    lecture_id: str
    last_position_seconds: float = 0.0
    watch_percentage: int = 0
    completed: bool = False
    completion_threshold: int


class WatchSampleRequest(BaseModel):
    current_time_seconds: float = Field(..., ge=0)
    total_duration_seconds: float = Field(..., ge=0)
    sampled_at: datetime | None = None


class WatchSampleResponse(BaseModel):
    persisted: bool
    throttled: bool = False
    stale: bool = False
    watch_percentage: int
    completed: bool
    just_completed: bool = False
    watch_count: int = 0


class LectureProgressResponse(BaseModel):
    id: str
    user_id: str
    course_id: str
    lecture_id: str
    last_position_seconds: float
    watch_percentage: int
    watch_duration_seconds: int
    total_duration_seconds: int
    completed: bool
    watch_count: int
    completed_at: UTCDatetime | None = None
    updated_at: UTCDatetime

    class Config:
        from_attributes = True


class LectureProgressInCourse(BaseModel):
    """Simplified lecture progress for course summary."""

    lecture_id: str
    last_position_seconds: float = 0.0
    watch_percentage: int = 0
    completed: bool = False
    watch_count: int = 0


class CourseProgressSummary(BaseModel):
    course_id: str
    total_lectures: int
    completed_lectures: int
    progress_percentage: int
    total_watch_time_seconds: int
    completed: dict[str, bool] = {}
    lectures: list[LectureProgressInCourse] = []
