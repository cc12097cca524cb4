"""Course models."""

from app.courses.models.course import Course, Lecture, Section
from app.courses.models.homework import HomeworkStatus, HomeworkSubmission
from app.courses.models.progress import LectureProgress
from app.courses.models.settings import VideoCompletionSettings

__all__ = [
    "Course",
    "Section",
    "Lecture",
    "LectureProgress",
    "HomeworkStatus",
    "HomeworkSubmission",
    "VideoCompletionSettings",
]
