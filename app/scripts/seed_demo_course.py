"""
Seed script for demo course.

Creates a demo course "Getting Started" and saves its outline through the
outline reconciler, then sets the completion threshold if none is stored.
Can be run multiple times - an existing course gets its outline re-applied.

Usage:
    python app/scripts/seed_demo_course.py
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sqlalchemy.orm import Session

from app.courses.models import Course, VideoCompletionSettings
from app.courses.schemas.outline import LectureInput, SectionInput
from app.courses.services.completion_settings_service import CompletionSettingsService
from app.courses.services.outline_service import OutlineService
from app.db.session import get_db

DEMO_COURSE_TITLE = "Demo Course - Getting Started"

DEMO_OUTLINE = [
    SectionInput(
        title="Platform basics",
        lectures=[
            LectureInput(
                title="Welcome",
                description="What this course covers and how lectures unlock.",
                video_url="https://videos.example.com/demo/welcome.mp4",
                duration=180,
                is_free=True,
            ),
            LectureInput(
                title="Tracking your progress",
                description="Lectures complete once you watch enough of the video.",
                video_url="https://videos.example.com/demo/progress.mp4",
                duration=300,
                requires_homework_completion=True,
            ),
            LectureInput(
                title="Cheat sheet",
                description="A text-only lecture you can mark as complete directly.",
            ),
        ],
    ),
    SectionInput(
        title="First assignment",
        lectures=[
            LectureInput(
                title="Your first homework",
                video_url="https://videos.example.com/demo/homework.mp4",
                duration=420,
                has_homework=True,
                requires_homework_completion=True,
            ),
            LectureInput(
                title="Wrap-up",
                video_url="https://videos.example.com/demo/wrap-up.mp4",
                duration=120,
            ),
        ],
    ),
]


def seed_demo_course(db: Session) -> None:
    """Seed demo course into the database."""

    course = db.query(Course).filter(Course.title == DEMO_COURSE_TITLE).first()

    if course:
        print("⏭️  Demo course already exists. Re-applying outline.")
    else:
        print("📚 Creating demo course...")
        course = Course(title=DEMO_COURSE_TITLE)
        db.add(course)
        db.commit()
        print(f"✅ Created course: {course.title} ({course.id})")

    desired = [section.model_copy(deep=True) for section in DEMO_OUTLINE]
    if course.sections:
        # Keep ids of sections and lectures already stored under the same titles
        stored = {s.title: s for s in course.sections}
        for section_in in desired:
            section = stored.get(section_in.title)
            if section is None:
                continue
            section_in.id = section.id
            lecture_ids = {lecture.title: lecture.id for lecture in section.lectures}
            for lecture_in in section_in.lectures:
                lecture_in.id = lecture_ids.get(lecture_in.title)

    result = OutlineService.reconcile_outline(course.id, desired, db)
    print(
        f"✅ Outline saved: {result.sections_created} sections and "
        f"{result.lectures_created} lectures created, {result.lecture_count} lectures total"
    )

    if db.query(VideoCompletionSettings).first() is None:
        threshold = CompletionSettingsService.set_threshold(80, db)
        print(f"✅ Completion threshold set to {threshold}%")


def main() -> None:
    """Main entry point."""
    print("=" * 60)
    print("🌱 Demo Course Seeding Script")
    print("=" * 60)
    print()

    db = next(get_db())
    try:
        seed_demo_course(db)
    except Exception as e:
        print(f"\n❌ Error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
