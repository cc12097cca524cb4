"""Course schemas."""

from app.courses.schemas.access import LectureAccessResponse
from app.courses.schemas.outline import (
    CurriculumLecture,
    CurriculumResponse,
    CurriculumSection,
    LectureInput,
    LectureResponse,
    OutlineResponse,
    OutlineUpdateRequest,
    ReconcileResponse,
    SectionInput,
    SectionResponse,
)
from app.courses.schemas.progress import (
    CourseProgressSummary,
    LectureProgressInCourse,
    LectureProgressResponse,
    PlayerSessionCreate,
    PlayerSessionResponse,
    WatchSampleRequest,
    WatchSampleResponse,
)
from app.courses.schemas.settings import CompletionSettingsResponse, CompletionSettingsUpdate

__all__ = [
    "CompletionSettingsResponse",
    "CompletionSettingsUpdate",
    "CourseProgressSummary",
    "CurriculumLecture",
    "CurriculumResponse",
    "CurriculumSection",
    "LectureAccessResponse",
    "LectureInput",
    "LectureProgressInCourse",
    "LectureProgressResponse",
    "LectureResponse",
    "OutlineResponse",
    "OutlineUpdateRequest",
    "PlayerSessionCreate",
    "PlayerSessionResponse",
    "ReconcileResponse",
    "SectionInput",
    "SectionResponse",
    "WatchSampleRequest",
    "WatchSampleResponse",
]
