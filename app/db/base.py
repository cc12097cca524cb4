"""
Database base module - imports all models for Alembic migration detection.

This module imports all SQLAlchemy models to ensure they are registered
with Alembic for automatic migration generation. While the imports appear
unused, they are essential for the migration system to work properly.
"""

from app.auth.models.user import User
from app.courses.models.course import Course, Lecture, Section
from app.courses.models.homework import HomeworkSubmission
from app.courses.models.progress import LectureProgress
from app.courses.models.settings import VideoCompletionSettings
from app.db.session import Base

__all__ = [
    "Base",
    "User",
    "Course",
    "Section",
    "Lecture",
    "LectureProgress",
    "HomeworkSubmission",
    "VideoCompletionSettings",
]
