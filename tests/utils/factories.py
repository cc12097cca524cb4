import uuid
from datetime import UTC, datetime

from faker import Faker
from sqlalchemy.orm import Session

from app.auth.models.user import User
from app.courses.models import (
    Course,
    HomeworkStatus,
    HomeworkSubmission,
    Lecture,
    LectureProgress,
    Section,
)

fake = Faker()


def create_user_factory(
    db_session: Session,
    email: str | None = None,
    name: str | None = None,
    role: str = "student",
    is_active: bool = True,
) -> User:
    """
    Factory function to create test users.

    Args:
        db_session: Database session
        email: User email (generates random if None)
        name: User name (generates random if None)
        role: User role ("student" or "admin")
        is_active: Whether user is active

    Returns:
        Created User instance
    """
    user = User(
        id=uuid.uuid4(),
        email=email or fake.unique.email(),
        name=name or fake.name(),
        role=role,
        is_active=is_active,
    )

    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)

    return user


def create_course_factory(db_session: Session, title: str | None = None) -> Course:
    course = Course(id=uuid.uuid4(), title=title or fake.catch_phrase())
    db_session.add(course)
    db_session.commit()
    db_session.refresh(course)
    return course


def create_section_factory(
    db_session: Session, course: Course, position: int = 0, title: str | None = None
) -> Section:
    section = Section(
        id=uuid.uuid4(),
        course_id=course.id,
        title=title or fake.sentence(nb_words=3),
        position=position,
    )
    db_session.add(section)
    db_session.commit()
    db_session.refresh(section)
    return section


def create_lecture_factory(
    db_session: Session,
    section: Section,
    position: int = 0,
    title: str | None = None,
    video_url: str | None = "https://videos.example.com/lecture.mp4",
    duration: int | None = 300,
    has_homework: bool = False,
    requires_homework_completion: bool = False,
) -> Lecture:
    lecture = Lecture(
        id=uuid.uuid4(),
        section_id=section.id,
        title=title or fake.sentence(nb_words=4),
        position=position,
        video_url=video_url,
        duration=duration,
        has_homework=has_homework,
        requires_homework_completion=requires_homework_completion,
    )
    db_session.add(lecture)
    db_session.commit()
    db_session.refresh(lecture)
    return lecture


def create_progress_factory(
    db_session: Session,
    user: User,
    lecture: Lecture,
    course: Course,
    watch_percentage: int = 0,
    completed: bool = False,
) -> LectureProgress:
    progress = LectureProgress(
        user_id=user.id,
        course_id=course.id,
        lecture_id=lecture.id,
        watch_percentage=watch_percentage,
        completed=completed,
        completed_at=datetime.now(UTC) if completed else None,
        watch_count=1 if completed else 0,
    )
    db_session.add(progress)
    db_session.commit()
    db_session.refresh(progress)
    return progress


def create_homework_factory(
    db_session: Session,
    user: User,
    lecture: Lecture,
    course: Course,
    status: HomeworkStatus = HomeworkStatus.SUBMITTED,
) -> HomeworkSubmission:
    submission = HomeworkSubmission(
        user_id=user.id,
        course_id=course.id,
        lecture_id=lecture.id,
        status=status,
        answer=fake.paragraph(),
    )
    db_session.add(submission)
    db_session.commit()
    db_session.refresh(submission)
    return submission
